from dataclasses import dataclass, asdict

LINK_KIND_URL = "url"
LINK_KIND_PDF = "pdf"

_OPTIONAL_TEXT_FIELDS = ("region", "city", "organization", "url", "pdf_link", "pdf_drive_link")


@dataclass(frozen=True, slots=True)
class Plan:
    title: str
    country: str
    region: str | None = None
    city: str | None = None
    year: str | int | None = None
    organization: str | None = None
    url: str | None = None
    pdf_link: str | None = None
    pdf_drive_link: str | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "Plan":
        """Build a plan from one catalog record.

        Values of an unexpected type are treated as absent.
        """
        optional = {name: _text_or_none(payload.get(name)) for name in _OPTIONAL_TEXT_FIELDS}
        return cls(
            title=_text_or_none(payload.get("title")) or "",
            country=_text_or_none(payload.get("country")) or "",
            year=_year_or_none(payload.get("year")),
            **optional,
        )

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ResolvedLink:
    link: str | None = None
    kind: str | None = None

    @property
    def label(self) -> str | None:
        return LINK_LABELS.get(self.kind) if self.kind else None


LINK_LABELS: dict[str, str] = {
    LINK_KIND_URL: "Open Plan",
    LINK_KIND_PDF: "Download PDF",
}


def _text_or_none(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _year_or_none(value: object) -> str | int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return value
    return None
