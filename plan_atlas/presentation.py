from __future__ import annotations

import html
import logging
from typing import Iterable, Sequence

from plan_atlas.country_centroids import CountryGeocoder
from plan_atlas.grouping import group_plans_by_country
from plan_atlas.links import NO_LINK_POPUP_SUFFIX, link_text, resolve_plan_link
from plan_atlas.models import Plan

logger = logging.getLogger(__name__)

UNNAMED_PLAN = "Unnamed plan"


def table_rows(plans: Iterable[Plan]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for plan in plans:
        resolved = resolve_plan_link(plan)
        rows.append(
            {
                "title": plan.title,
                "country": plan.country,
                "region": plan.region or "",
                "city": plan.city or "",
                "year": str(plan.year) if plan.year else "",
                "organization": plan.organization or "",
                "link": resolved.link,
                "link_kind": resolved.kind,
                "link_label": resolved.label,
                "link_text": link_text(resolved),
            }
        )
    return rows


def popup_item_html(plan: Plan) -> str:
    resolved = resolve_plan_link(plan)
    title = html.escape(plan.title or UNNAMED_PLAN)
    if resolved.link:
        href = html.escape(resolved.link, quote=True)
        return (
            f'<li><a href="{href}" target="_blank" rel="noopener noreferrer">'
            f"{title} – {resolved.label}</a></li>"
        )
    return f"<li>{title} {NO_LINK_POPUP_SUFFIX}</li>"


def country_popup_html(country: str, plans: Sequence[Plan]) -> str:
    items = "".join(popup_item_html(plan) for plan in plans)
    return f"<strong>{html.escape(country)}</strong><br><ul>{items}</ul>"


def map_markers(plans: Iterable[Plan], geocoder: CountryGeocoder | None = None) -> list[dict[str, object]]:
    geocoder = geocoder or CountryGeocoder()
    markers: list[dict[str, object]] = []
    for country, plans_in_country in group_plans_by_country(plans).items():
        coords = geocoder.lookup(country)
        if coords is None:
            logger.debug(f"No coordinates for country {country!r}; skipping {len(plans_in_country)} plans")
            continue
        lat, lng = coords
        markers.append(
            {
                "country": country,
                "lat": lat,
                "lng": lng,
                "plan_count": len(plans_in_country),
                "popup_html": country_popup_html(country, plans_in_country),
            }
        )
    return markers
