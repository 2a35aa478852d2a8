"""Rebuild full packages from a compact quote and the template catalog.

This is the inverse of the diff engine and the compact model builder:
every plan starts as a copy of its template default and gets its override
(if any) laid on top. Ids are freshly generated and totals are derived, so
nothing but the diffable field values comes from the token.
"""

from datetime import date

from loguru import logger

from ..catalog import TemplateCatalog
from ..models import Package, QuotePayload, generate_id
from .compact import CompactQuote, client_from_tuple, from_epoch_ms, override_key
from .effective_dates import effective_date_for
from .errors import StructuralError, UnknownTemplateError


def expand_compact_quote(
    compact: CompactQuote, catalog: TemplateCatalog, today: date | None = None
) -> QuotePayload:
    """
    Expand a compact quote into a full QuotePayload.

    Args:
        compact: Parsed compact model
        catalog: Template catalog the link was issued against
        today: Date used to derive effective dates (default: today)

    Returns:
        Reconstructed client, packages and creation time

    Raises:
        UnknownTemplateError: If a package index is not in the catalog
        StructuralError: If an override addresses a package or plan that
            does not exist
    """
    templates = []
    for index in compact.p:
        template = catalog.at(index)
        if template is None:
            raise UnknownTemplateError(index, len(catalog))
        templates.append(template)

    for package_ordinal, plan_ordinal in compact.m:
        if package_ordinal >= len(templates) or plan_ordinal >= len(
            templates[package_ordinal].default_plans
        ):
            raise StructuralError(
                f"Override '{override_key(package_ordinal, plan_ordinal)}' does not "
                f"address any plan in the quote"
            )

    packages = []
    for package_ordinal, template in enumerate(templates):
        plans = []
        for plan_ordinal in range(len(template.default_plans)):
            plan = template.default_plan(plan_ordinal)
            override = compact.m.get((package_ordinal, plan_ordinal))
            if override is not None:
                plan = override.apply(plan)
            if plan.effective_date is None:
                plan.effective_date = effective_date_for(plan.type, today)
            plan.id = generate_id()
            plans.append(plan)

        packages.append(
            Package(
                name=template.name,
                description=template.description,
                plans=plans,
                id=generate_id(),
            )
        )

    logger.debug(
        f"Expanded quote link: {len(packages)} package(s), {len(compact.m)} override(s)"
    )

    return QuotePayload(
        client=client_from_tuple(compact.c),
        packages=packages,
        created_at=from_epoch_ms(compact.t),
    )
