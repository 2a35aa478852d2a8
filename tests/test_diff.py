"""Tests for plan diffing against template defaults."""

from dataclasses import replace

import pytest

from quote_link.codec.diff import UNSET, PlanOverride, diff_package, diff_plan
from quote_link.codec.errors import StructuralError
from quote_link.models import InsurancePlan, PlanType
from quote_link.packages import create_package_from_template


class TestDiffPlan:
    """Test field-by-field comparison of a single plan."""

    def test_unchanged_plan_has_empty_override(self, catalog, today):
        default = catalog.get("Bronze").default_plan(1)
        assert diff_plan(replace(default), default, today).is_empty()

    def test_changed_fields_are_carried_unmodified(self, catalog, today):
        default = catalog.get("Bronze").default_plan(1)
        plan = replace(default, monthly_premium=300, deductible=75)

        override = diff_plan(plan, default, today)

        assert override.changes() == {"monthly_premium": 300, "deductible": 75}

    def test_numeric_value_equality(self, catalog, today):
        """300 and 300.0 are the same premium."""
        default = replace(catalog.get("Gold").default_plan(0), monthly_premium=300)
        plan = replace(default, monthly_premium=300.0)
        assert diff_plan(plan, default, today).is_empty()

    def test_identity_fields_are_never_diffed(self, catalog, today):
        """name, provider, type and id always come from the template."""
        default = catalog.get("Silver").default_plan(2)
        plan = replace(
            default,
            id="abc123",
            name="Renamed Vision",
            provider="Other Carrier",
            type=PlanType.DENTAL,
        )
        assert diff_plan(plan, default, today).is_empty()

    def test_cleared_field_is_an_override(self, catalog, today):
        """Clearing a value the template sets is carried as None."""
        default = catalog.get("Bronze").default_plan(1)
        plan = replace(default, deductible=None)

        override = diff_plan(plan, default, today)

        assert override.deductible is None
        assert override.changes() == {"deductible": None}

    def test_text_fields_are_diffed(self, catalog, today):
        default = catalog.get("Bronze").default_plan(0)
        plan = replace(default, coverage="Custom coverage", brochure_url="https://x.test/b.pdf")

        override = diff_plan(plan, default, today)

        assert override.to_wire() == {"cv": "Custom coverage", "br": "https://x.test/b.pdf"}


class TestEffectiveDateDiff:
    """Effective dates are only carried when they were edited."""

    def test_missing_effective_date_not_carried(self, catalog, today):
        default = catalog.get("Bronze").default_plan(0)
        plan = replace(default, effective_date=None)
        assert diff_plan(plan, default, today).effective_date is UNSET

    def test_cleared_effective_date_falls_back_to_template_date(self, catalog, today):
        default = replace(catalog.get("Bronze").default_plans[1], effective_date="2027-03-01")
        plan = replace(default, effective_date=None)
        assert diff_plan(plan, default, today).is_empty()

    def test_derived_effective_date_not_carried(self, catalog, today):
        """A date equal to what a decoder would derive today is not an edit."""
        health = catalog.get("Bronze").default_plan(0)
        dental = catalog.get("Bronze").default_plan(1)

        assert diff_plan(replace(health, effective_date="2026-11-01"), health, today).is_empty()
        assert diff_plan(replace(dental, effective_date="2026-10-20"), dental, today).is_empty()

    def test_edited_effective_date_is_carried(self, catalog, today):
        default = catalog.get("Bronze").default_plan(0)
        plan = replace(default, effective_date="2027-01-01")

        assert diff_plan(plan, default, today).to_wire() == {"ed": "2027-01-01"}


class TestDiffPackage:
    """Test ordinal addressing across a package."""

    def test_only_changed_plans_reported(self, catalog, today):
        package = create_package_from_template(catalog.get("Silver"))
        package.plans[3] = replace(package.plans[3], monthly_premium=42.5)

        overrides = diff_package(package, catalog.get("Silver"), today)

        assert list(overrides) == [3]
        assert overrides[3].to_wire() == {"pr": 42.5}

    def test_unmodified_package_has_no_overrides(self, catalog, today):
        package = create_package_from_template(catalog.get("Gold"))
        assert diff_package(package, catalog.get("Gold"), today) == {}

    def test_extra_plans_without_template_counterpart_are_skipped(self, catalog, today):
        package = create_package_from_template(catalog.get("Bronze"))
        package.plans.append(
            InsurancePlan(
                type=PlanType.LIFE, name="Extra Life", provider="X", monthly_premium=99
            )
        )

        overrides = diff_package(package, catalog.get("Bronze"), today)

        assert overrides == {}


class TestPlanOverrideWire:
    """Test parsing of wire overrides."""

    def test_round_trip(self):
        override = PlanOverride(monthly_premium=300, coverage="Everything", effective_date="2027-02-01")
        assert PlanOverride.from_wire(override.to_wire()) == override

    def test_wire_keys_follow_field_order(self):
        override = PlanOverride(details="d", monthly_premium=1, deductible=2)
        assert list(override.to_wire()) == ["pr", "de", "dt"]

    def test_null_values_allowed(self):
        assert PlanOverride.from_wire({"de": None}).deductible is None

    @pytest.mark.parametrize(
        "wire",
        [
            {"zz": 1},
            {"pr": "300"},
            {"pr": True},
            {"cv": 12},
            {"ed": "next tuesday"},
            ["pr", 300],
        ],
    )
    def test_invalid_wire_rejected(self, wire):
        with pytest.raises(StructuralError):
            PlanOverride.from_wire(wire)

    def test_apply_overlays_only_set_fields(self, catalog):
        default = catalog.get("Bronze").default_plan(1)

        plan = PlanOverride(monthly_premium=10).apply(default)

        assert plan.monthly_premium == 10
        assert plan.deductible == default.deductible
        assert plan.name == default.name
        assert default.monthly_premium == 25.95
