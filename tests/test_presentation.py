from plan_atlas.country_centroids import CountryGeocoder
from plan_atlas.filtering import filter_plans
from plan_atlas.models import Plan
from plan_atlas.presentation import country_popup_html, map_markers, popup_item_html, table_rows


def _france_plans() -> list[Plan]:
    return [
        Plan(title="Plan A", country="France", url="https://x.example/a"),
        Plan(title="Plan B", country="France", pdf_link="https://x.example/b.pdf"),
    ]


def test_france_scenario_table_and_map() -> None:
    plans = _france_plans()

    visible = filter_plans(plans, "france", "")
    rows = table_rows(visible)
    markers = map_markers(plans)

    assert visible == plans
    assert [row["link_text"] for row in rows] == ["Open Plan", "Download PDF"]
    assert rows[0]["link"] == "https://x.example/a"
    assert rows[1]["link_kind"] == "pdf"
    assert len(markers) == 1
    marker = markers[0]
    assert marker["country"] == "France"
    assert (marker["lat"], marker["lng"]) == (46.2276, 2.2137)
    assert marker["plan_count"] == 2
    assert "Plan A – Open Plan" in marker["popup_html"]
    assert "Plan B – Download PDF" in marker["popup_html"]


def test_table_row_defaults_for_missing_fields() -> None:
    [row] = table_rows([Plan(title="Berlin", country="Germany")])

    assert row == {
        "title": "Berlin",
        "country": "Germany",
        "region": "",
        "city": "",
        "year": "",
        "organization": "",
        "link": None,
        "link_kind": None,
        "link_label": None,
        "link_text": "No link available",
    }


def test_table_row_renders_year_as_text() -> None:
    [row] = table_rows([Plan(title="X", country="Italy", year=2024)])

    assert row["year"] == "2024"


def test_popup_item_without_link_or_title() -> None:
    assert popup_item_html(Plan(title="", country="Germany")) == "<li>Unnamed plan (no link)</li>"
    assert popup_item_html(Plan(title="Berlin Strategy", country="Germany")) == "<li>Berlin Strategy (no link)</li>"


def test_popup_item_with_link() -> None:
    item = popup_item_html(Plan(title="Plan A", country="France", url="https://x.example/a"))

    assert item == (
        '<li><a href="https://x.example/a" target="_blank" rel="noopener noreferrer">Plan A – Open Plan</a></li>'
    )


def test_popup_escapes_text() -> None:
    popup = country_popup_html("France", [Plan(title="<b>Bold</b> & co", country="France")])

    assert popup == "<strong>France</strong><br><ul><li>&lt;b&gt;Bold&lt;/b&gt; &amp; co (no link)</li></ul>"


def test_unknown_countries_are_skipped_silently() -> None:
    plans = [
        Plan(title="Atlantis plan", country="Atlantis"),
        Plan(title="US plan", country="USA"),
        Plan(title="Berlin", country="Germany"),
    ]

    markers = map_markers(plans)

    assert [marker["country"] for marker in markers] == ["Germany"]
    assert "Berlin (no link)" in str(markers[0]["popup_html"])


def test_map_markers_use_injected_geocoder() -> None:
    plans = [Plan(title="Lost city", country="Atlantis")]

    markers = map_markers(plans, CountryGeocoder(table={"Atlantis": (31.0, -24.0)}))

    assert [(marker["lat"], marker["lng"]) for marker in markers] == [(31.0, -24.0)]


def test_empty_collection_yields_empty_views() -> None:
    assert table_rows([]) == []
    assert map_markers([]) == []


def test_falsy_year_renders_empty() -> None:
    rows = table_rows([Plan(title="X", country="Peru", year=0), Plan(title="Y", country="Peru", year="")])

    assert [row["year"] for row in rows] == ["", ""]
