"""Main entry point running the widget's timeline refresh loop."""

import asyncio
import logging
import sys

import aiohttp

from hsl_departures.adapters.config import AppConfig
from hsl_departures.application.services import DisplayFamily, TimelineRefresher
from hsl_departures.cli import format_entry
from hsl_departures.components import build_components
from hsl_departures.domain.models import Timeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def _publish(timeline: Timeline) -> None:
    logger.info(f"Timeline rebuilt with {len(timeline.entries)} entries")
    for entry in timeline.entries:
        logger.info(format_entry(entry))


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if not config.digitransit_api_key:
        logger.warning("DIGITRANSIT_API_KEY is not set, requests will likely be rejected")

    async with aiohttp.ClientSession() as session:
        components = build_components(config, session)

        if not components.favorites.get_favorites():
            logger.warning("No favorite stops configured.")
            logger.warning("Add one with 'hsl-widget favorites add <stop id>'.")

        refresher = TimelineRefresher(
            components.timeline_provider, DisplayFamily.MEDIUM, on_timeline=_publish
        )

        try:
            await refresher.start()
            # Keep running until interrupted
            while True:
                await asyncio.sleep(3600)
        except (KeyboardInterrupt, asyncio.CancelledError):
            logger.info("Shutting down...")
        finally:
            await refresher.stop()


def cli_main() -> None:
    """Synchronous entry point for the refresh loop."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
