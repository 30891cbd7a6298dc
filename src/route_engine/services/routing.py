from __future__ import annotations

import time
from typing import Callable

from django.conf import settings

from route_engine.exceptions import UnsupportedTravelModeError
from route_engine.services.air import AirRouteStrategy
from route_engine.services.analysis import analyze_cross_mode_route
from route_engine.services.base import RouteStrategy
from route_engine.services.builder import RouteBuilder
from route_engine.services.cache import RouteCache
from route_engine.services.directions import DirectionsClient
from route_engine.services.land import LandRouteStrategy
from route_engine.services.modes import calculate_travel_speed
from route_engine.services.sea import SeaRouteStrategy
from route_engine.services.types import (
    Location,
    Route,
    RouteAnalysis,
    RoutingResult,
    TravelConditions,
    TravelConfig,
    TravelMode,
    Waypoint,
)


class RoutingService:
    def __init__(
        self,
        cache: RouteCache[RoutingResult] | None = None,
        directions_client: DirectionsClient | None = None,
        builder: RouteBuilder | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if cache is None:
            cache = RouteCache(
                max_size=settings.ROUTE_CACHE_MAX_SIZE,
                default_ttl=settings.ROUTE_CACHE_TTL_SECONDS,
                clock=clock,
            )
        self.cache = cache
        self.builder = builder or RouteBuilder(clock=clock)

        strategies: list[RouteStrategy] = [
            LandRouteStrategy(self.cache, self.builder, directions_client),
            AirRouteStrategy(self.cache, self.builder),
            SeaRouteStrategy(self.cache, self.builder),
        ]
        self._strategies: dict[TravelMode, RouteStrategy] = {
            mode: strategy for strategy in strategies for mode in strategy.modes
        }

    def calculate_route(
        self,
        source: Location,
        destination: Location,
        config: TravelConfig,
    ) -> RoutingResult:
        return self.strategy_for(config.mode).compute(source, destination, config)

    def strategy_for(self, mode: TravelMode | str) -> RouteStrategy:
        try:
            return self._strategies[TravelMode(mode)]
        except (KeyError, ValueError) as exc:
            raise UnsupportedTravelModeError(
                f"Travel mode {getattr(mode, 'value', mode)} is not supported",
                [f"Use one of: {', '.join(m.value for m in TravelMode)}"],
            ) from exc

    def generate_waypoints(self, route: Route, interval_km: float | None = None) -> list[Waypoint]:
        return self.builder.generate_waypoints(route, interval_km)

    def calculate_travel_speed(
        self,
        mode: TravelMode,
        custom_speed: float | None = None,
        conditions: TravelConditions | None = None,
    ) -> float:
        return calculate_travel_speed(mode, custom_speed, conditions)

    def analyze_cross_mode_route(
        self, source: Location, destination: Location, mode: TravelMode
    ) -> RouteAnalysis:
        return analyze_cross_mode_route(source, destination, mode)

    def clear_expired_cache(self) -> int:
        return self.cache.clear_expired()

    def get_cache_stats(self) -> dict[str, int]:
        return self.cache.stats()
