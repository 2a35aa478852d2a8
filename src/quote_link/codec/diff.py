"""Plan-level diffing against template defaults.

Only a closed set of plan fields can be overridden in a quote link. Each one
has a short wire alias used inside the compressed payload:

    monthly_premium     pr      out_of_pocket_max   oop
    deductible          de      coverage            cv
    coinsurance         ci      details             dt
    primary_care_copay  pc      effective_date      ed
    specialist_copay    sc      brochure_url        br
    generic_drug_copay  gc

Identity fields (id, type, name, provider) are never diffed; they always come
from the template.
"""

import math
import re
from dataclasses import dataclass, fields, replace
from datetime import date
from enum import Enum
from typing import Any, Union

from loguru import logger

from ..catalog import PackageTemplate
from ..models import InsurancePlan, Package
from .effective_dates import effective_date_for
from .errors import StructuralError


class _Unset(Enum):
    UNSET = "UNSET"


UNSET = _Unset.UNSET

NumberOverride = Union[float, None, _Unset]
TextOverride = Union[str, None, _Unset]


@dataclass(frozen=True)
class DiffableField:
    attr: str
    wire: str
    numeric: bool


DIFFABLE_FIELDS: tuple[DiffableField, ...] = (
    DiffableField("monthly_premium", "pr", True),
    DiffableField("deductible", "de", True),
    DiffableField("coinsurance", "ci", True),
    DiffableField("primary_care_copay", "pc", True),
    DiffableField("specialist_copay", "sc", True),
    DiffableField("generic_drug_copay", "gc", True),
    DiffableField("out_of_pocket_max", "oop", True),
    DiffableField("coverage", "cv", False),
    DiffableField("details", "dt", False),
    DiffableField("effective_date", "ed", False),
    DiffableField("brochure_url", "br", False),
)

_BY_WIRE = {f.wire: f for f in DIFFABLE_FIELDS}

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class PlanOverride:
    """
    Partial update of one plan's diffable fields.

    Every field defaults to UNSET. A field set to None is a real override
    (the agent cleared a value the template fills in).
    """

    monthly_premium: NumberOverride = UNSET
    deductible: NumberOverride = UNSET
    coinsurance: NumberOverride = UNSET
    primary_care_copay: NumberOverride = UNSET
    specialist_copay: NumberOverride = UNSET
    generic_drug_copay: NumberOverride = UNSET
    out_of_pocket_max: NumberOverride = UNSET
    coverage: TextOverride = UNSET
    details: TextOverride = UNSET
    effective_date: TextOverride = UNSET
    brochure_url: TextOverride = UNSET

    def changes(self) -> dict[str, Any]:
        """Return {field_name: value} for every field that is set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()

    def apply(self, plan: InsurancePlan) -> InsurancePlan:
        """Return a copy of `plan` with the set fields overlaid."""
        return replace(plan, **self.changes())

    def to_wire(self) -> dict[str, Any]:
        """Wire form: set fields only, keyed by alias, in DIFFABLE_FIELDS order."""
        wire = {}
        for f in DIFFABLE_FIELDS:
            value = getattr(self, f.attr)
            if value is not UNSET:
                wire[f.wire] = value
        return wire

    @classmethod
    def from_wire(cls, data: Any) -> "PlanOverride":
        """
        Parse and type-check a wire override.

        Raises:
            StructuralError: On unknown aliases or values of the wrong type
        """
        if not isinstance(data, dict):
            raise StructuralError(f"Plan override must be an object, got {type(data).__name__}")

        values = {}
        for wire_key, value in data.items():
            diffable = _BY_WIRE.get(wire_key)
            if diffable is None:
                raise StructuralError(f"Unknown override field '{wire_key}'")
            if value is not None:
                if diffable.numeric and not _is_number(value):
                    raise StructuralError(f"Override field '{wire_key}' must be a number")
                if not diffable.numeric and not isinstance(value, str):
                    raise StructuralError(f"Override field '{wire_key}' must be a string")
                if diffable.attr == "effective_date" and not _ISO_DATE.match(value):
                    raise StructuralError(f"Override field '{wire_key}' must be an ISO date")
            values[diffable.attr] = value
        return cls(**values)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def diff_plan(
    plan: InsurancePlan, default: InsurancePlan, today: date | None = None
) -> PlanOverride:
    """
    Compute the override that turns `default` into `plan`.

    Fields are compared with value equality, so 300 and 300.0 are the same
    premium. An effective date is only carried when the plan has one and it
    differs from the date a decoder would derive for the same plan type on
    `today` (or from the template's own date, when it sets one).

    Args:
        plan: Plan instance from a quote
        default: Template default plan at the same position
        today: Reference date for effective-date comparison (default: today)

    Returns:
        PlanOverride with only the differing fields set (possibly empty)
    """
    changed = {}
    for f in DIFFABLE_FIELDS:
        value = getattr(plan, f.attr)
        if f.attr == "effective_date":
            if value is None:
                # Unlike other fields, a cleared date is not an override: the
                # decoder fills it back in from the template or the date policy.
                continue
            baseline = default.effective_date or effective_date_for(default.type, today)
        else:
            baseline = getattr(default, f.attr)
        if value != baseline:
            changed[f.attr] = value
    return PlanOverride(**changed)


def diff_package(
    package: Package, template: PackageTemplate, today: date | None = None
) -> dict[int, PlanOverride]:
    """
    Diff every plan of `package` against the template default at the same ordinal.

    Plans past the end of the template's default list have nothing to diff
    against and are skipped.

    Args:
        package: Package instance built from `template`
        template: Catalog template the package was built from
        today: Reference date for effective-date comparison

    Returns:
        {plan_ordinal: override} for plans with at least one changed field
    """
    overrides = {}
    for ordinal, plan in enumerate(package.plans):
        default = template.default_plan(ordinal)
        if default is None:
            logger.debug(
                f"Plan {ordinal} ('{plan.name}') of package '{package.name}' has no "
                f"template default; not carried in link"
            )
            continue
        override = diff_plan(plan, default, today)
        if not override.is_empty():
            overrides[ordinal] = override
    return overrides
