from argparse import ArgumentParser
import logging
from pathlib import Path
import sys

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parent.parent))

from plan_atlas.env_utils import BASE_DIR, load_env_file, load_settings
from plan_atlas.filtering import country_options, filter_plans
from plan_atlas.generator import generate_csv, generate_kml
from plan_atlas.presentation import table_rows
from plan_atlas.site_builder import build_static_site
from plan_atlas.state import CatalogUnavailableError, load_plans

logger = logging.getLogger(__name__)

SITE_DIR = BASE_DIR / "site"
CSV_FILE = BASE_DIR / "output" / "plans.csv"
KML_FILE = BASE_DIR / "output" / "plans.kml"

EXIT_CATALOG_UNAVAILABLE = 2


def build_site(data_source: str, site_dir: Path, tile_url: str, timeout_seconds: float) -> None:
    downloads = site_dir / "downloads"
    export(data_source, downloads / "plans.csv", downloads / "plans.kml", timeout_seconds)
    build_static_site(
        data_source,
        site_dir,
        csv_file=downloads / "plans.csv",
        kml_file=downloads / "plans.kml",
        tile_url=tile_url,
        timeout_seconds=timeout_seconds,
    )


def export(data_source: str, csv_file: Path, kml_file: Path, timeout_seconds: float) -> None:
    plans = load_plans(data_source, timeout_seconds=timeout_seconds)
    generate_csv(plans, csv_file)
    generate_kml(plans, kml_file)


def print_filtered(data_source: str, country: str, query: str, timeout_seconds: float) -> int:
    plans = load_plans(data_source, timeout_seconds=timeout_seconds)
    rows = table_rows(filter_plans(plans, country, query))
    for row in rows:
        place = ", ".join(str(part) for part in (row["city"], row["region"], row["country"]) if part)
        year = f" ({row['year']})" if row["year"] else ""
        target = row["link"] or row["link_text"]
        print(f"{row['title']}{year} - {place}: {target}")
    return len(rows)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    load_env_file(BASE_DIR)

    parser = ArgumentParser(description="Plan Atlas catalog utility CLI")
    parser.add_argument(
        "--data",
        default=None,
        help="Catalog JSON file path or http(s) URL (default: $PLAN_ATLAS_DATA or data/plans_index.json)",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    site = sub.add_parser("build-site", help="Build the static table and map pages")
    site.add_argument("--site-dir", type=Path, default=SITE_DIR, help="Output directory (default: site/)")
    filter_cmd = sub.add_parser("filter", help="Print plans matching a country and search query")
    filter_cmd.add_argument("--country", default="", help="Exact country name, case-insensitive")
    filter_cmd.add_argument("--query", default="", help="Search text for title, country, region or city")
    sub.add_parser("countries", help="List the countries present in the catalog")
    export_cmd = sub.add_parser("export", help="Write CSV and KML exports")
    export_cmd.add_argument("--csv", type=Path, default=CSV_FILE, help="CSV output path")
    export_cmd.add_argument("--kml", type=Path, default=KML_FILE, help="KML output path")
    args = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as error:
        parser.error(str(error))
    data_source = args.data or settings.data_source

    try:
        if args.command == "build-site":
            build_site(data_source, args.site_dir, settings.tile_url, settings.fetch_timeout)
            print(f"Site built at {args.site_dir / 'index.html'}")
            return 0
        if args.command == "filter":
            count = print_filtered(data_source, args.country, args.query, settings.fetch_timeout)
            print(f"{count} plans matched.")
            return 0
        if args.command == "countries":
            for country in country_options(load_plans(data_source, timeout_seconds=settings.fetch_timeout)):
                print(country)
            return 0
        if args.command == "export":
            export(data_source, args.csv, args.kml, settings.fetch_timeout)
            print(f"Exports written to {args.csv} and {args.kml}")
            return 0
    except CatalogUnavailableError as error:
        logger.error(str(error))
        return EXIT_CATALOG_UNAVAILABLE
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
