import logging
from pathlib import Path
import shutil

from jinja2 import Environment, FileSystemLoader, select_autoescape

from plan_atlas.country_centroids import CountryGeocoder
from plan_atlas.env_utils import BASE_DIR, DEFAULT_TILE_URL
from plan_atlas.filtering import country_options
from plan_atlas.grouping import group_plans_by_country
from plan_atlas.presentation import map_markers, table_rows
from plan_atlas.state import DEFAULT_FETCH_TIMEOUT, load_plans

logger = logging.getLogger(__name__)

TEMPLATES_DIR = BASE_DIR / "templates"


def build_static_site(
    data_source: str | Path,
    site_dir: Path,
    csv_file: Path | None = None,
    kml_file: Path | None = None,
    geocoder: CountryGeocoder | None = None,
    tile_url: str = DEFAULT_TILE_URL,
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT,
) -> None:
    """Render the table and map pages for one catalog snapshot.

    The static pages carry no filter form; filtering is served by the web preview.
    Raises ``CatalogUnavailableError`` when the source cannot be loaded.
    """
    plans = load_plans(data_source, timeout_seconds=timeout_seconds)
    geocoder = geocoder or CountryGeocoder()

    site_dir.mkdir(parents=True, exist_ok=True)
    assets_dir = site_dir / "assets"
    assets_dir.mkdir(parents=True, exist_ok=True)

    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(["html"]))
    shared = {
        "stylesheet_url": "./assets/style.css",
        "table_url": "./index.html",
        "map_url": "./map.html",
        "csv_url": _artifact_url(csv_file, site_dir),
        "kml_url": _artifact_url(kml_file, site_dir),
    }

    index_html = env.get_template("index.html").render(
        active_page="table",
        filters_enabled=False,
        countries=country_options(plans),
        rows=table_rows(plans),
        total_plans=len(plans),
        **shared,
    )
    markers = map_markers(plans, geocoder)
    map_html = env.get_template("map.html").render(
        active_page="map",
        markers=markers,
        skipped_countries=[country for country in group_plans_by_country(plans) if country not in geocoder],
        tile_url=tile_url,
        **shared,
    )

    shutil.copyfile(TEMPLATES_DIR / "style.css", assets_dir / "style.css")
    (site_dir / "index.html").write_text(index_html, encoding="utf-8")
    (site_dir / "map.html").write_text(map_html, encoding="utf-8")
    logger.info(f"Built static site for {len(plans)} plans ({len(markers)} map markers) in {site_dir}")


def _artifact_url(artifact: Path | None, site_dir: Path) -> str:
    if artifact is None or not artifact.exists():
        return ""
    try:
        return "./" + artifact.resolve().relative_to(site_dir.resolve()).as_posix()
    except ValueError:
        return artifact.resolve().as_uri()
