import json
import logging
from pathlib import Path

import requests

from plan_atlas.models import Plan

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 15.0


class CatalogUnavailableError(RuntimeError):
    """The plan catalog could not be fetched or parsed."""

    def __init__(self, source: str | Path, reason: str) -> None:
        super().__init__(f"Catalog unavailable ({source}): {reason}")
        self.source = str(source)
        self.reason = reason


class CatalogFormatError(CatalogUnavailableError):
    """The catalog parsed as JSON but is not an array of plan objects."""


def is_remote_source(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def load_plans(source: str | Path, timeout_seconds: float = DEFAULT_FETCH_TIMEOUT) -> list[Plan]:
    if is_remote_source(source):
        payload = _fetch_remote(str(source), timeout_seconds)
    else:
        payload = _read_local(Path(source))
    plans = _parse_payload(payload, source)
    logger.info(f"Loaded {len(plans)} plans from {source}")
    return plans


def _read_local(path: Path) -> object:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise CatalogUnavailableError(path, str(error)) from error
    except UnicodeDecodeError as error:
        raise CatalogUnavailableError(path, f"not UTF-8 text: {error}") from error
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise CatalogUnavailableError(path, f"invalid JSON: {error}") from error


def _fetch_remote(url: str, timeout_seconds: float) -> object:
    try:
        response = requests.get(url, timeout=timeout_seconds)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as error:
        raise CatalogUnavailableError(url, str(error)) from error
    except ValueError as error:
        raise CatalogUnavailableError(url, f"invalid JSON: {error}") from error


def _parse_payload(payload: object, source: str | Path) -> list[Plan]:
    if not isinstance(payload, list):
        raise CatalogFormatError(source, f"expected a JSON array, got {type(payload).__name__}")
    plans: list[Plan] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise CatalogFormatError(source, f"record {index} is not an object")
        plans.append(Plan.from_dict(item))
    return plans


class PlanCatalog:
    """Cached snapshot of the plan collection.

    The first call to ``plans()`` loads the source; later calls reuse the same
    snapshot until ``invalidate()`` or ``reload()``.
    """

    def __init__(self, source: str | Path, timeout_seconds: float = DEFAULT_FETCH_TIMEOUT) -> None:
        self.source = source
        self.timeout_seconds = timeout_seconds
        self._snapshot: tuple[Plan, ...] | None = None

    def plans(self) -> tuple[Plan, ...]:
        if self._snapshot is None:
            self._snapshot = tuple(load_plans(self.source, timeout_seconds=self.timeout_seconds))
        return self._snapshot

    def invalidate(self) -> None:
        self._snapshot = None

    def reload(self) -> tuple[Plan, ...]:
        self.invalidate()
        return self.plans()
