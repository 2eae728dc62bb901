"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters or application services
- Application services don't depend on adapters
- Adapters don't depend on application services
- Only the entry points wire adapters and services together
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should only import the standard library, pydantic and each other."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("hsl_departures.domain.models*")
        .should_not_import("hsl_departures.adapters*")
        .should_not_import("hsl_departures.application*")
        .should_not_import("hsl_departures.domain.contracts*")
        .should_not_import("hsl_departures.domain.ports*")
        .may_import("hsl_departures.domain.models*")
        .check("hsl_departures")
    )


def test_domain_contracts_have_no_dependencies() -> None:
    """Domain contracts (cache protocols) should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match("hsl_departures.domain.contracts*")
        .should_not_import("hsl_departures.adapters*")
        .should_not_import("hsl_departures.application*")
        .may_import("hsl_departures.domain*")
        .check("hsl_departures")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("hsl_departures.domain.ports*")
        .should_not_import("hsl_departures.adapters*")
        .should_not_import("hsl_departures.application*")
        .may_import("hsl_departures.domain*")
        .check("hsl_departures")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("hsl_departures.application*")
        .should_not_import("hsl_departures.adapters*")
        .should_not_import("aiohttp")
        .may_import("hsl_departures.domain*")
        .may_import("hsl_departures.application*")
        .check("hsl_departures")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("hsl_departures.adapters*")
        .should_not_import("hsl_departures.application*")
        .should_not_import("hsl_departures.components")
        .may_import("hsl_departures.domain*")
        .may_import("hsl_departures.adapters*")
        .check("hsl_departures", only_direct_imports=True)
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not have circular dependencies."""
    (
        archrule("domain no cycles", comment="Domain layer should not have circular dependencies")
        .match("hsl_departures.domain*")
        .should_not_import("hsl_departures.adapters*")
        .should_not_import("hsl_departures.application*")
        .may_import("hsl_departures.domain*")
        .check("hsl_departures", only_direct_imports=True)
    )


def test_library_code_doesnt_import_entry_points() -> None:
    """Only entry points may depend on the CLI and the main module."""
    (
        archrule("entry points", comment="Library code should not import entry points")
        .match("hsl_departures*")
        .exclude("hsl_departures.cli")
        .exclude("hsl_departures.main")
        .should_not_import("hsl_departures.cli")
        .should_not_import("hsl_departures.main")
        .check("hsl_departures")
    )
