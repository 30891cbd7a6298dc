from __future__ import annotations

import logging
import math

from route_engine.services.base import RouteStrategy
from route_engine.services.builder import SECONDS_PER_HOUR, RouteBuilder
from route_engine.services.cache import RouteCache
from route_engine.services.directions import DirectionsClient
from route_engine.services.geo import distance_between
from route_engine.services.modes import effective_speed
from route_engine.services.types import (
    LAND_MODES,
    DirectionsRoute,
    Location,
    RoutingResult,
    TravelConfig,
    TravelMode,
)

logger = logging.getLogger(__name__)

MOCK_CONFIDENCE = 0.7
MOCK_SEGMENT_KM = 20.0
MOCK_MIN_SEGMENTS = 2
MOCK_MAX_SEGMENTS = 10
MOCK_LONG_DISTANCE_KM = 500.0

BASE_PROVIDER_CONFIDENCE = 0.8
DETAILED_ROUTE_STEPS = 5


class LandRouteStrategy(RouteStrategy):
    modes = LAND_MODES
    family = "land"
    service_error_suggestions = [
        "Please check your internet connection",
        "Verify that both locations are accessible by the selected travel mode",
        "Try a different travel mode if the route seems impossible",
    ]

    def __init__(
        self,
        cache: RouteCache[RoutingResult],
        builder: RouteBuilder,
        directions_client: DirectionsClient | None = None,
    ) -> None:
        super().__init__(cache, builder)
        self.directions_client = directions_client or DirectionsClient()
        if not self.directions_client.is_configured:
            logger.warning("Routing API key not provided. Land routes will use mock data.")

    def calculate(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        config: TravelConfig,
    ) -> RoutingResult:
        if self.directions_client.is_configured:
            result = self._provider_route(source, destination, mode, config)
        else:
            result = self._mock_route(source, destination, mode, config)

        return self._optimize(result, mode, config)

    def _provider_route(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        config: TravelConfig,
    ) -> RoutingResult:
        directions = self.directions_client.directions(
            source.coordinates,
            destination.coordinates,
            mode,
            optimize=config.preferences.route_optimization,
        )
        route = self.builder.from_steps(
            source,
            destination,
            mode,
            directions.steps,
            directions.total_distance_km,
            directions.total_duration_seconds,
        )
        return RoutingResult(
            route=route,
            confidence=provider_confidence(directions, mode),
            warnings=tuple(directions.warnings),
        )

    def _mock_route(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        config: TravelConfig,
    ) -> RoutingResult:
        distance = distance_between(source.coordinates, destination.coordinates)
        duration = distance / effective_speed(mode, config.custom_speed) * SECONDS_PER_HOUR
        segment_count = min(
            max(math.floor(distance / MOCK_SEGMENT_KM), MOCK_MIN_SEGMENTS), MOCK_MAX_SEGMENTS
        )

        route = self.builder.direct(source, destination, mode, distance, duration, segment_count)

        warnings: list[str] = []
        if distance > MOCK_LONG_DISTANCE_KM:
            warnings.append("Long distance route - consider breaking into multiple segments")

        return RoutingResult(route=route, confidence=MOCK_CONFIDENCE, warnings=tuple(warnings))

    def _optimize(self, result: RoutingResult, mode: TravelMode, config: TravelConfig) -> RoutingResult:
        route = result.route
        warnings = list(result.warnings)

        if mode is TravelMode.DRIVING:
            if route.total_distance > 100:
                warnings.append("Long driving route detected. Consider rest stops every 2-3 hours.")
        elif mode is TravelMode.WALKING:
            if route.total_distance > 20:
                warnings.append(
                    "Long walking route detected. "
                    "Plan for multiple days or consider alternative transport."
                )
            if route.estimated_duration > 8 * SECONDS_PER_HOUR:
                warnings.append("Walking time exceeds 8 hours. Consider breaking into multiple days.")
        elif mode is TravelMode.CYCLING:
            if route.total_distance > 100:
                warnings.append(
                    "Long cycling route detected. "
                    "Plan for rest stops and consider elevation changes."
                )

        if config.custom_speed:
            route = self.builder.apply_custom_speed(route, config.custom_speed)

        return RoutingResult(route=route, confidence=result.confidence, warnings=tuple(warnings))


def provider_confidence(directions: DirectionsRoute, mode: TravelMode) -> float:
    confidence = BASE_PROVIDER_CONFIDENCE

    if len(directions.steps) > DETAILED_ROUTE_STEPS:
        confidence += 0.1

    confidence -= 0.1 * len(directions.warnings)

    if mode is TravelMode.CYCLING and "bike" not in directions.summary.lower():
        confidence -= 0.1

    return max(0.1, min(confidence, 1.0))
