from __future__ import annotations

from typing import Iterable, Sequence

from plan_atlas.models import Plan


def filter_plans(plans: Sequence[Plan], country_selector: str | None = "", query: str | None = "") -> list[Plan]:
    """Return the plans matching a country selector and a free-text query.

    The selector is an exact, case-insensitive country match; an empty selector
    matches every country. The query is a case-insensitive substring searched in
    the title, country, region and city. Both conditions must hold. The result is
    a new list in input order.
    """
    selector = (country_selector or "").lower()
    needle = (query or "").lower()
    return [plan for plan in plans if _country_matches(plan, selector) and _search_matches(plan, needle)]


def country_options(plans: Iterable[Plan]) -> list[str]:
    return sorted({plan.country for plan in plans if plan.country})


def _country_matches(plan: Plan, selector: str) -> bool:
    return not selector or plan.country.lower() == selector


def _search_matches(plan: Plan, needle: str) -> bool:
    if not needle:
        return True
    haystacks = (plan.title, plan.country, plan.region or "", plan.city or "")
    return any(needle in value.lower() for value in haystacks)
