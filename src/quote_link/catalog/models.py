"""Template catalog data models."""

from dataclasses import dataclass, replace
from typing import Any

from ..models import InsurancePlan, PlanType


@dataclass(frozen=True)
class PackageTemplate:
    """
    Named package definition quotes are built from.

    Invariants:
    - name must not be empty (it is the lookup key)
    - default_plans must not be empty
    - the order of default_plans never changes between catalog versions,
      because a plan's position addresses its overrides in issued links
    """

    name: str
    description: str
    plan_types: tuple[PlanType, ...]
    default_plans: tuple[InsurancePlan, ...]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PackageTemplate":
        """
        Build a template from its YAML mapping.

        Raises:
            ValueError: If required keys are missing or a plan type is unknown
        """
        try:
            name = data["name"]
            plans = data["default_plans"]
        except KeyError as e:
            raise ValueError(f"Template is missing required key {e}") from e

        if not isinstance(plans, list):
            raise ValueError(f"Template '{name}': 'default_plans' must be a list")

        try:
            default_plans = tuple(InsurancePlan.from_dict(plan) for plan in plans)
            plan_types = tuple(PlanType(t) for t in data.get("plan_types", []))
        except (KeyError, ValueError) as e:
            raise ValueError(f"Template '{name}': invalid plan definition ({e})") from e

        template = cls(
            name=name,
            description=data.get("description", ""),
            plan_types=plan_types,
            default_plans=default_plans,
        )
        template.validate_invariants()
        return template

    def validate_invariants(self) -> bool:
        """
        Validate PackageTemplate invariants.

        Returns:
            True if all invariants are satisfied

        Raises:
            ValueError: If any invariant is violated
        """
        if not self.name or not self.name.strip():
            raise ValueError("Template name must not be empty")
        if not self.default_plans:
            raise ValueError(f"Template '{self.name}' must define at least one default plan")
        return True

    def default_plan(self, ordinal: int) -> InsurancePlan | None:
        """Return a copy of the default plan at `ordinal`, or None if there is none."""
        if 0 <= ordinal < len(self.default_plans):
            return replace(self.default_plans[ordinal])
        return None
