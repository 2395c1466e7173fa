from __future__ import annotations

from typing import Final, Mapping

COUNTRY_COORDINATES: Final[dict[str, tuple[float, float]]] = {
    "United States": (37.8, -96.9),
    "Canada": (56.1304, -106.3468),
    "Argentina": (-38.4161, -63.6167),
    "Australia": (-25.2744, 133.7751),
    "India": (20.5937, 78.9629),
    "China": (35.8617, 104.1954),
    "Japan": (36.2048, 138.2529),
    "France": (46.2276, 2.2137),
    "Germany": (51.1657, 10.4515),
    "Spain": (40.4637, -3.7492),
    "Mexico": (23.6345, -102.5528),
    "Brazil": (-14.2350, -51.9253),
    "South Africa": (-30.5595, 22.9375),
    "Italy": (41.8719, 12.5674),
    "Chile": (-35.6751, -71.5430),
    "Peru": (-9.1900, -75.0152),
}


class CountryGeocoder:
    """Exact-name lookup of a fixed map position per country.

    No aliasing or fuzzy matching: "USA" does not resolve to "United States".
    """

    def __init__(self, table: Mapping[str, tuple[float, float]] = COUNTRY_COORDINATES) -> None:
        self.table = table

    def lookup(self, country: str) -> tuple[float, float] | None:
        return self.table.get(country)

    def __contains__(self, country: object) -> bool:
        return country in self.table


def country_coordinates(country: str) -> tuple[float, float] | None:
    return COUNTRY_COORDINATES.get(country)


def validate_coordinate_table(table: Mapping[str, tuple[float, float]]) -> None:
    for country, coords in table.items():
        if not isinstance(country, str) or not country or country != country.strip() or ":" in country:
            raise ValueError(f"Malformed country key in coordinate table: {country!r}")
        if not isinstance(coords, tuple) or len(coords) != 2:
            raise ValueError(f"Coordinates for {country} must be a (lat, lon) pair, got {coords!r}")
        lat, lon = coords
        if not all(isinstance(value, (int, float)) and not isinstance(value, bool) for value in coords):
            raise ValueError(f"Coordinates for {country} must be numeric, got {coords!r}")
        if not -90 <= lat <= 90 or not -180 <= lon <= 180:
            raise ValueError(f"Coordinates for {country} are out of range: {coords!r}")
