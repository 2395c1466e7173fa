from __future__ import annotations

from plan_atlas.models import LINK_KIND_PDF, LINK_KIND_URL, Plan, ResolvedLink

NO_LINK_TABLE_TEXT = "No link available"
NO_LINK_POPUP_SUFFIX = "(no link)"

# Prefix check only; values are not validated as URLs.
_LINK_PREFIX = "http"

_LINK_PRECEDENCE: tuple[tuple[str, str], ...] = (
    ("url", LINK_KIND_URL),
    ("pdf_link", LINK_KIND_PDF),
    # Legacy Drive-hosted PDFs.
    ("pdf_drive_link", LINK_KIND_PDF),
)


def resolve_plan_link(plan: Plan) -> ResolvedLink:
    for field_name, kind in _LINK_PRECEDENCE:
        value = getattr(plan, field_name)
        if value and value.startswith(_LINK_PREFIX):
            return ResolvedLink(link=value, kind=kind)
    return ResolvedLink()


def link_text(resolved: ResolvedLink) -> str:
    if resolved.link:
        return resolved.label or NO_LINK_TABLE_TEXT
    return NO_LINK_TABLE_TEXT
