"""Package helpers: build packages from templates and edit their pricing."""

from dataclasses import replace

from .catalog import PackageTemplate, TemplateCatalog
from .codec.diff import PlanOverride
from .models import Package, generate_id

RECOMMENDED_PACKAGE = "Silver"


def create_package_from_template(template: PackageTemplate, fresh_ids: bool = True) -> Package:
    """
    Create a package instance from a template.

    Args:
        template: The package template to base it on
        fresh_ids: Generate new ids (default) or stable ones derived from the
            template name and plan position

    Returns:
        Package whose plans are copies of the template defaults
    """
    plans = []
    for ordinal in range(len(template.default_plans)):
        plan = template.default_plan(ordinal)
        plan.id = generate_id() if fresh_ids else f"plan-{template.name}-{ordinal}"
        plans.append(plan)

    return Package(
        name=template.name,
        description=template.description,
        plans=plans,
        id=generate_id() if fresh_ids else f"package-{template.name}",
    )


def generate_all_packages(catalog: TemplateCatalog) -> list[Package]:
    """Create one fresh package per catalog template, in catalog order."""
    return [create_package_from_template(template) for template in catalog]


def update_package_pricing(package: Package, updates: dict[str, PlanOverride]) -> Package:
    """
    Apply per-plan edits to a package.

    Args:
        package: Package to edit (left unchanged)
        updates: {plan_id: override}; unknown plan ids are ignored

    Returns:
        New package with the edited plans
    """
    plans = [
        updates[plan.id].apply(plan) if plan.id in updates else replace(plan)
        for plan in package.plans
    ]
    return replace(package, plans=plans)


def calculate_package_savings(packages: list[Package]) -> list[tuple[str | None, float]]:
    """
    Savings of each package relative to the most expensive one.

    Returns:
        [(package_id, savings), ...] in input order
    """
    if not packages:
        return []
    max_price = max(package.total_monthly_premium for package in packages)
    return [(package.id, max_price - package.total_monthly_premium) for package in packages]


def get_recommended_package(packages: list[Package]) -> Package | None:
    """
    Pick the package to highlight.

    Prefers the Silver package; otherwise the median-priced one.
    """
    if not packages:
        return None

    for package in packages:
        if package.name == RECOMMENDED_PACKAGE:
            return package

    by_price = sorted(packages, key=lambda package: package.total_monthly_premium)
    return by_price[len(by_price) // 2]
