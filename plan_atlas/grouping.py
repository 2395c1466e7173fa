from __future__ import annotations

from typing import Iterable

from plan_atlas.models import Plan


def group_plans_by_country(plans: Iterable[Plan]) -> dict[str, list[Plan]]:
    # Keys are the raw country strings; no case folding here.
    grouped: dict[str, list[Plan]] = {}
    for plan in plans:
        grouped.setdefault(plan.country, []).append(plan)
    return grouped
