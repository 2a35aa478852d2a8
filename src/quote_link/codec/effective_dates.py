"""Effective-date policy for plans rebuilt from a quote link.

Links do not carry effective dates unless an agent edited one. When a link is
opened the date is derived from the plan type and the day the link is opened,
so the same link can show different dates on different days.
"""

from datetime import date, timedelta

from ..models import PlanType

# Major medical coverage starts on the first of a month
_MONTH_START_TYPES = frozenset({PlanType.HEALTH, PlanType.KONNECT})


def effective_date_for(plan_type: PlanType, today: date | None = None) -> str:
    """
    Return the ISO effective date for a plan of `plan_type` opened on `today`.

    - health and konnect plans: first day of the following month
    - all other plan types: the next calendar day
    """
    if today is None:
        today = date.today()

    if plan_type in _MONTH_START_TYPES:
        if today.month == 12:
            start = date(today.year + 1, 1, 1)
        else:
            start = date(today.year, today.month + 1, 1)
    else:
        start = today + timedelta(days=1)

    return start.isoformat()
