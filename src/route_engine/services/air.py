from __future__ import annotations

import math

from route_engine.exceptions import AirRoutingServiceError
from route_engine.services.base import RouteStrategy
from route_engine.services.builder import SECONDS_PER_HOUR
from route_engine.services.geo import distance_between
from route_engine.services.modes import effective_speed, waypoint_interval
from route_engine.services.types import (
    AIR_MODES,
    Location,
    RoutingResult,
    TravelConfig,
    TravelMode,
)

FLIGHT_CONFIDENCE = 0.9
LONG_HAUL_KM = 10_000.0
SHORT_FLIGHT_KM = 100.0
CLIMATE_ZONE_LATITUDE_DELTA = 30.0


class AirRouteStrategy(RouteStrategy):
    """Direct great-circle flight paths; no provider involved."""

    modes = AIR_MODES
    family = "air"
    service_error = AirRoutingServiceError
    service_error_suggestions = [
        "Please try again later",
        "Verify that both airports or cities are valid locations",
    ]

    def calculate(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        config: TravelConfig,
    ) -> RoutingResult:
        distance = distance_between(source.coordinates, destination.coordinates)
        duration = distance / effective_speed(mode, config.custom_speed) * SECONDS_PER_HOUR
        segment_count = max(math.ceil(distance / waypoint_interval(mode)), 2)

        route = self.builder.direct(source, destination, mode, distance, duration, segment_count)
        return RoutingResult(
            route=route,
            confidence=FLIGHT_CONFIDENCE,
            warnings=tuple(flight_warnings(source, destination, distance)),
        )


def flight_warnings(source: Location, destination: Location, distance: float) -> list[str]:
    warnings: list[str] = []

    if distance > LONG_HAUL_KM:
        warnings.append("Long-haul flight - consider fuel stops and crew rest requirements")

    if distance < SHORT_FLIGHT_KM:
        warnings.append("Short flight distance - ground transport may be more practical")

    latitude_delta = abs(destination.coordinates.latitude - source.coordinates.latitude)
    if latitude_delta > CLIMATE_ZONE_LATITUDE_DELTA:
        warnings.append("Flight crosses multiple climate zones - expect significant weather variations")

    return warnings
