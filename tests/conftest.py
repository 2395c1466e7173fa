"""Shared fixtures for catalog tests."""

import json
from pathlib import Path

import pytest

from plan_atlas.models import Plan


SAMPLE_PAYLOAD = [
    {
        "title": "Plan A",
        "country": "France",
        "region": "Île-de-France",
        "city": "Paris",
        "year": 2030,
        "organization": "Ville de Paris",
        "url": "https://x.example/a",
    },
    {
        "title": "Plan B",
        "country": "France",
        "pdf_link": "https://x.example/b.pdf",
    },
    {
        "title": "Berlin Strategy",
        "country": "Germany",
        "region": "Berlin",
        "city": "Berlin",
        "year": "2030",
    },
    {
        "title": "Wellington District Plan",
        "country": "New Zealand",
        "city": "Wellington",
        "url": "https://wellington.example/plan",
    },
]


def write_catalog(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def sample_plans() -> list[Plan]:
    return [Plan.from_dict(item) for item in SAMPLE_PAYLOAD]


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    return write_catalog(tmp_path / "data" / "plans_index.json", SAMPLE_PAYLOAD)
