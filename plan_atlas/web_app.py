from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from fastapi.templating import Jinja2Templates

from plan_atlas.country_centroids import CountryGeocoder
from plan_atlas.env_utils import BASE_DIR, DEFAULT_TILE_URL, load_env_file, load_settings
from plan_atlas.filtering import country_options, filter_plans
from plan_atlas.grouping import group_plans_by_country
from plan_atlas.models import Plan
from plan_atlas.presentation import map_markers, table_rows
from plan_atlas.state import CatalogUnavailableError, PlanCatalog

logger = logging.getLogger(__name__)

TEMPLATES_DIR = BASE_DIR / "templates"
TEMPLATES = Jinja2Templates(directory=str(TEMPLATES_DIR))
DEFAULT_CSV_FILE = BASE_DIR / "output" / "plans.csv"
DEFAULT_KML_FILE = BASE_DIR / "output" / "plans.kml"


def create_app(
    catalog: PlanCatalog,
    csv_file: Path = DEFAULT_CSV_FILE,
    kml_file: Path = DEFAULT_KML_FILE,
    geocoder: CountryGeocoder | None = None,
    tile_url: str = DEFAULT_TILE_URL,
) -> FastAPI:
    app = FastAPI(title="Plan Atlas")
    app.state.catalog = catalog
    app.state.csv_file = csv_file
    app.state.kml_file = kml_file
    app.state.geocoder = geocoder or CountryGeocoder()
    app.state.tile_url = tile_url

    def current_plans() -> tuple[Plan, ...]:
        try:
            return app.state.catalog.plans()
        except CatalogUnavailableError as error:
            logger.error(str(error))
            raise HTTPException(status_code=503, detail="Catalog unavailable") from error

    def page_context(request: Request, active_page: str) -> dict[str, object]:
        return {
            "request": request,
            "active_page": active_page,
            "stylesheet_url": "/assets/style.css",
            "table_url": "/",
            "map_url": "/map",
            "csv_url": "/artifacts/csv" if app.state.csv_file.exists() else "",
            "kml_url": "/artifacts/kml" if app.state.kml_file.exists() else "",
        }

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/")
    def home(request: Request, country: str = "", q: str = ""):
        plans = current_plans()
        visible = filter_plans(plans, country, q)
        context = page_context(request, "table")
        context.update(
            {
                "filters_enabled": True,
                "api_url": "/api/plans",
                "countries": country_options(plans),
                "selected_country": country,
                "query": q,
                "rows": table_rows(visible),
                "total_plans": len(plans),
            }
        )
        return TEMPLATES.TemplateResponse(request=request, name="index.html", context=context)

    @app.get("/map")
    def map_page(request: Request):
        plans = current_plans()
        geocoder = app.state.geocoder
        context = page_context(request, "map")
        context.update(
            {
                "markers": map_markers(plans, geocoder),
                "skipped_countries": [country for country in group_plans_by_country(plans) if country not in geocoder],
                "tile_url": app.state.tile_url,
            }
        )
        return TEMPLATES.TemplateResponse(request=request, name="map.html", context=context)

    @app.get("/api/plans")
    def api_plans(country: str = "", q: str = ""):
        return table_rows(filter_plans(current_plans(), country, q))

    @app.get("/api/countries")
    def api_countries():
        return country_options(current_plans())

    @app.get("/api/markers")
    def api_markers():
        return map_markers(current_plans(), app.state.geocoder)

    @app.post("/reload")
    def reload():
        app.state.catalog.invalidate()
        return {"status": "reloaded", "plan_count": len(current_plans())}

    @app.get("/assets/style.css")
    def stylesheet():
        return FileResponse(path=TEMPLATES_DIR / "style.css", media_type="text/css")

    @app.get("/artifacts/{artifact_name}")
    def artifact(artifact_name: str):
        paths = {"csv": app.state.csv_file, "kml": app.state.kml_file}
        target = paths.get(artifact_name)
        if target is None or not target.exists():
            raise HTTPException(status_code=404, detail="Artifact not found")
        media_type = "text/csv" if artifact_name == "csv" else "application/vnd.google-earth.kml+xml"
        return FileResponse(path=target, media_type=media_type, filename=target.name)

    return app


def create_default_app() -> FastAPI:
    load_env_file(BASE_DIR)
    settings = load_settings()
    catalog = PlanCatalog(settings.data_source, timeout_seconds=settings.fetch_timeout)
    return create_app(catalog=catalog, tile_url=settings.tile_url)


app = create_default_app()
