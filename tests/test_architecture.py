"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters
- Application services don't depend on adapters
- Adapters can depend on domain
- No circular dependencies
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should only import the domain clock and each other."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("rtt_commute.domain.models*")
        .should_not_import("rtt_commute.adapters*")
        .should_not_import("rtt_commute.application*")
        .should_not_import("rtt_commute.domain.contracts*")
        .should_not_import("rtt_commute.domain.ports*")
        .may_import("rtt_commute.domain.models*")
        .may_import("rtt_commute.domain.civil_clock")
        .check("rtt_commute")
    )


def test_domain_contracts_have_no_dependencies() -> None:
    """Domain contracts (protocols/interfaces) should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match("rtt_commute.domain.contracts*")
        .should_not_import("rtt_commute.adapters*")
        .should_not_import("rtt_commute.application*")
        .may_import("rtt_commute.domain*")
        .check("rtt_commute")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("rtt_commute.domain.ports*")
        .should_not_import("rtt_commute.adapters*")
        .should_not_import("rtt_commute.application*")
        .may_import("rtt_commute.domain*")
        .check("rtt_commute")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("rtt_commute.application*")
        .should_not_import("rtt_commute.adapters*")
        .may_import("rtt_commute.domain*")
        .may_import("rtt_commute.application*")
        .check("rtt_commute")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("rtt_commute.adapters*")
        .should_not_import("rtt_commute.application*")
        .may_import("rtt_commute.domain*")
        .may_import("rtt_commute.adapters*")
        .check("rtt_commute", only_direct_imports=True)
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not have circular dependencies."""
    (
        archrule("domain no cycles", comment="Domain layer should not have circular dependencies")
        .match("rtt_commute.domain*")
        .should_not_import("rtt_commute.adapters*")
        .should_not_import("rtt_commute.application*")
        .may_import("rtt_commute.domain*")
        .check("rtt_commute", only_direct_imports=True)
    )


def test_lookup_cli_doesnt_import_application() -> None:
    """The lookup CLI only needs the provider adapters, not the tracker services."""
    (
        archrule("CLI independence", comment="Lookup CLI should not depend on the tracker")
        .match("rtt_commute.cli")
        .should_not_import("rtt_commute.application*")
        .may_import("rtt_commute.domain*")
        .may_import("rtt_commute.adapters*")
        .check("rtt_commute", only_direct_imports=True)
    )
