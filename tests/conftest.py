"""Pytest fixtures and test utilities for the quote link test suite."""

from datetime import date, datetime, timezone

import pytest

from quote_link.catalog import PackageTemplate, TemplateCatalog, load_default_catalog
from quote_link.models import Client, InsurancePlan, PlanType, QuotePayload
from quote_link.packages import create_package_from_template


# ============================================================================
# CATALOG FIXTURES
# ============================================================================


@pytest.fixture
def catalog() -> TemplateCatalog:
    """Bundled catalog: Bronze, Silver, Gold, Healthy Bundle."""
    return load_default_catalog()


@pytest.fixture
def single_plan_catalog() -> TemplateCatalog:
    """Catalog with one template holding one dental plan."""
    return TemplateCatalog(
        [
            PackageTemplate(
                name="Starter",
                description="Single dental plan",
                plan_types=(PlanType.DENTAL,),
                default_plans=(
                    InsurancePlan(
                        type=PlanType.DENTAL,
                        name="Starter Dental",
                        provider="Ameritas",
                        monthly_premium=25.95,
                        deductible=50,
                        coverage="Preventive dental care",
                    ),
                ),
            )
        ]
    )


# ============================================================================
# QUOTE FIXTURES
# ============================================================================


@pytest.fixture
def today() -> date:
    """Fixed reference date so effective dates are deterministic."""
    return date(2026, 10, 19)


@pytest.fixture
def john_doe() -> Client:
    return Client(
        name="John Doe",
        zip_code="90210",
        date_of_birth="1990-01-01",
        email="john@example.com",
        phone="(555) 123-4567",
    )


@pytest.fixture
def created_at() -> datetime:
    return datetime(2026, 10, 19, 15, 30, 12, 345000, tzinfo=timezone.utc)


@pytest.fixture
def make_quote(catalog, john_doe, created_at):
    """
    Factory for quotes built from bundled templates.

    Usage:
        quote = make_quote("Bronze", "Gold")
    """

    def _make(*template_names: str, client: Client | None = None) -> QuotePayload:
        packages = [
            create_package_from_template(catalog.get(name)) for name in template_names
        ]
        return QuotePayload(
            client=client or john_doe,
            packages=packages,
            created_at=created_at,
        )

    return _make
