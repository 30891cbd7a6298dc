from __future__ import annotations

import math

from route_engine.exceptions import SeaRoutingServiceError
from route_engine.services import maritime
from route_engine.services.base import RouteStrategy
from route_engine.services.builder import SECONDS_PER_HOUR
from route_engine.services.geo import distance_between
from route_engine.services.modes import effective_speed, waypoint_interval
from route_engine.services.types import (
    SEA_MODES,
    Location,
    RoutingResult,
    TravelConfig,
    TravelMode,
)

MARITIME_CONFIDENCE = 0.8

COASTAL_PENALTY = 0.15
LONG_HAUL_PENALTY = 0.10
CHOKEPOINT_PENALTY = 0.05
LONG_HAUL_KM = 3000.0

LONG_VOYAGE_KM = 5000.0
HIGH_LATITUDE = 60.0


class SeaRouteStrategy(RouteStrategy):
    """Great-circle maritime routes with additive navigation overhead.

    The path is a straight line between the endpoints; shipping lanes and
    coastlines are not followed.
    """

    modes = SEA_MODES
    family = "sea"
    service_error = SeaRoutingServiceError
    service_error_suggestions = [
        "Please try again later",
        "Verify that both locations are reachable by sea",
    ]

    def calculate(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        config: TravelConfig,
    ) -> RoutingResult:
        direct_distance = distance_between(source.coordinates, destination.coordinates)
        distance = direct_distance * distance_multiplier(source, destination, direct_distance)
        duration = distance / effective_speed(mode, config.custom_speed) * SECONDS_PER_HOUR
        segment_count = max(math.ceil(distance / waypoint_interval(mode)), 2)

        route = self.builder.direct(source, destination, mode, distance, duration, segment_count)
        return RoutingResult(
            route=route,
            confidence=MARITIME_CONFIDENCE,
            warnings=tuple(voyage_warnings(source, destination, distance)),
        )


def distance_multiplier(source: Location, destination: Location, direct_distance: float) -> float:
    """Navigation overhead factor. Penalties are summed, not compounded."""
    multiplier = 1.0

    if maritime.is_coastal(source.name, source.coordinates) and maritime.is_coastal(
        destination.name, destination.coordinates
    ):
        multiplier += COASTAL_PENALTY

    if direct_distance > LONG_HAUL_KM:
        multiplier += LONG_HAUL_PENALTY

    if maritime.chokepoints_near(source.coordinates, destination.coordinates):
        multiplier += CHOKEPOINT_PENALTY

    return multiplier


def voyage_warnings(source: Location, destination: Location, distance: float) -> list[str]:
    warnings: list[str] = []
    start = source.coordinates
    end = destination.coordinates

    if distance > LONG_VOYAGE_KM:
        warnings.append("Long ocean voyage - plan for weather routing and fuel/supply stops")

    if start.latitude * end.latitude < 0:
        warnings.append(
            "Route crosses equator - expect tropical weather systems and seasonal variations"
        )

    if maritime.crosses_antimeridian(start, end):
        warnings.append(
            "Route crosses the International Date Line - adjust schedules for the date change"
        )

    if max(abs(start.latitude), abs(end.latitude)) > HIGH_LATITUDE:
        warnings.append(
            "High-latitude route - expect challenging weather conditions and ice hazards"
        )

    for chokepoint in maritime.chokepoints_near(start, end):
        warnings.append(
            f"Route passes near the {chokepoint.name} - expect congested shipping traffic"
        )

    start_system = maritime.ocean_system_for(start)
    end_system = maritime.ocean_system_for(end)
    if start_system and end_system and start_system != end_system:
        warnings.append(
            f"Route connects the {start_system} and {end_system} ocean systems - "
            "canal or cape passage may be required"
        )

    return warnings
