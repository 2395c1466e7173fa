import csv
import logging
from pathlib import Path
import xml.etree.ElementTree as ET

from plan_atlas.country_centroids import CountryGeocoder
from plan_atlas.grouping import group_plans_by_country
from plan_atlas.links import resolve_plan_link
from plan_atlas.models import Plan
from plan_atlas.presentation import UNNAMED_PLAN

logger = logging.getLogger(__name__)

KML_NS = "http://www.opengis.net/kml/2.2"
ET.register_namespace("", KML_NS)


CSV_HEADERS = [
    "title",
    "country",
    "region",
    "city",
    "year",
    "organization",
    "link",
    "link_kind",
]


def generate_kml(plans: list[Plan], output_path: Path, geocoder: CountryGeocoder | None = None) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    geocoder = geocoder or CountryGeocoder()

    kml = ET.Element(f"{{{KML_NS}}}kml")
    doc = ET.SubElement(kml, f"{{{KML_NS}}}Document")
    ET.SubElement(doc, f"{{{KML_NS}}}name").text = "Plan Atlas"

    for country, country_plans in group_plans_by_country(plans).items():
        coords = geocoder.lookup(country)
        if coords is None:
            continue
        lat, lng = coords
        placemark = ET.SubElement(doc, f"{{{KML_NS}}}Placemark")
        ET.SubElement(placemark, f"{{{KML_NS}}}name").text = country
        ET.SubElement(placemark, f"{{{KML_NS}}}description").text = "\n".join(
            plan.title or UNNAMED_PLAN for plan in country_plans
        )
        point = ET.SubElement(placemark, f"{{{KML_NS}}}Point")
        ET.SubElement(point, f"{{{KML_NS}}}coordinates").text = f"{lng},{lat},0"

    tree = ET.ElementTree(kml)
    tree.write(output_path, encoding="utf-8", xml_declaration=True)
    logger.info(f"Wrote KML to {output_path}")


def generate_csv(plans: list[Plan], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_HEADERS)
        writer.writeheader()
        for plan in plans:
            resolved = resolve_plan_link(plan)
            row = {header: plan.to_dict().get(header) for header in CSV_HEADERS[:6]}
            row["link"] = resolved.link
            row["link_kind"] = resolved.kind
            writer.writerow(row)
    logger.info(f"Wrote CSV with {len(plans)} plans to {output_path}")
