from __future__ import annotations

from route_engine.services.geo import distance_between
from route_engine.services.maritime import BoundingBox
from route_engine.services.types import (
    LAND_MODES,
    GeoPoint,
    Location,
    RouteAnalysis,
    TravelMode,
)

SHORT_DISTANCE_KM = 5.0
VERY_LONG_DISTANCE_KM = 1000.0
MULTI_DAY_DISTANCES_KM = {
    TravelMode.WALKING: 50.0,
    TravelMode.CYCLING: 200.0,
}

# Order matters: overlapping boxes resolve to the first match.
CONTINENTS: tuple[tuple[str, BoundingBox], ...] = (
    ("north_america", BoundingBox(south=7.0, north=84.0, west=-170.0, east=-50.0)),
    ("south_america", BoundingBox(south=-56.0, north=13.0, west=-82.0, east=-34.0)),
    ("europe", BoundingBox(south=35.0, north=72.0, west=-25.0, east=45.0)),
    ("africa", BoundingBox(south=-35.0, north=37.0, west=-18.0, east=52.0)),
    ("asia", BoundingBox(south=-11.0, north=78.0, west=45.0, east=180.0)),
    ("oceania", BoundingBox(south=-50.0, north=-11.0, west=110.0, east=180.0)),
)

LAND_CONNECTED = frozenset(
    {
        frozenset({"north_america", "south_america"}),
        frozenset({"europe", "asia"}),
        frozenset({"africa", "asia"}),
    }
)

# (upper bound of |latitude|, zone name)
CLIMATE_ZONES: tuple[tuple[float, str], ...] = (
    (23.5, "tropical"),
    (35.0, "subtropical"),
    (55.0, "temperate"),
    (66.5, "subpolar"),
    (90.0, "polar"),
)


def analyze_cross_mode_route(
    source: Location, destination: Location, mode: TravelMode
) -> RouteAnalysis:
    distance = distance_between(source.coordinates, destination.coordinates)
    recommendations: list[str] = []
    alternative_modes: list[TravelMode] = []
    considerations: list[str] = []

    def suggest(*modes: TravelMode) -> None:
        for candidate in modes:
            if candidate is not mode and candidate not in alternative_modes:
                alternative_modes.append(candidate)

    if distance < SHORT_DISTANCE_KM and mode is not TravelMode.WALKING:
        recommendations.append("Short distance - walking or cycling recommended")
        suggest(TravelMode.WALKING, TravelMode.CYCLING)

    if distance > VERY_LONG_DISTANCE_KM and mode is not TravelMode.FLYING:
        recommendations.append("Very long distance - flying recommended for speed")
        suggest(TravelMode.FLYING)

    if mode in LAND_MODES and requires_ocean_crossing(source.coordinates, destination.coordinates):
        considerations.append("Ocean crossing required - ferry or shipping needed for vehicle")
        suggest(TravelMode.FLYING, TravelMode.CRUISE)

    multi_day_limit = MULTI_DAY_DISTANCES_KM.get(mode)
    if multi_day_limit is not None and distance > multi_day_limit:
        considerations.append("Very long journey - plan for multiple days and accommodation")

    if climate_zone(source.coordinates) != climate_zone(destination.coordinates):
        considerations.append("Route crosses climate zones - pack for varying weather conditions")

    return RouteAnalysis(
        distance=distance,
        recommendations=recommendations,
        alternative_modes=alternative_modes,
        considerations=considerations,
    )


def continent_for(point: GeoPoint) -> str | None:
    for name, region in CONTINENTS:
        if region.contains(point):
            return name
    return None


def requires_ocean_crossing(start: GeoPoint, end: GeoPoint) -> bool:
    start_continent = continent_for(start)
    end_continent = continent_for(end)
    if start_continent is None or end_continent is None or start_continent == end_continent:
        return False
    return frozenset({start_continent, end_continent}) not in LAND_CONNECTED


def climate_zone(point: GeoPoint) -> str:
    latitude = abs(point.latitude)
    for upper_bound, zone in CLIMATE_ZONES:
        if latitude < upper_bound:
            return zone
    return CLIMATE_ZONES[-1][1]
