from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from plan_atlas.state import DEFAULT_FETCH_TIMEOUT

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DATA_FILE = BASE_DIR / "data" / "plans_index.json"
DEFAULT_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"


@dataclass(slots=True)
class Settings:
    data_source: str
    tile_url: str
    fetch_timeout: float


def load_env_file(base_dir: Path, filename: str = ".env") -> None:
    """Load simple KEY=VALUE pairs from a local .env file.

    Existing environment variables are preserved.
    """
    env_path = base_dir / filename
    if not env_path.exists():
        return
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            os.environ.setdefault(key, value)


def load_settings() -> Settings:
    data_source = os.getenv("PLAN_ATLAS_DATA", "").strip() or str(DEFAULT_DATA_FILE)
    tile_url = os.getenv("PLAN_ATLAS_TILE_URL", "").strip() or DEFAULT_TILE_URL
    raw_timeout = os.getenv("PLAN_ATLAS_FETCH_TIMEOUT", "").strip()
    try:
        fetch_timeout = float(raw_timeout) if raw_timeout else DEFAULT_FETCH_TIMEOUT
    except ValueError:
        raise ValueError(f"PLAN_ATLAS_FETCH_TIMEOUT must be a number, got {raw_timeout!r}") from None
    return Settings(data_source=data_source, tile_url=tile_url, fetch_timeout=fetch_timeout)
