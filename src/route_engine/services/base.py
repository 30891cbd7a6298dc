from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

from route_engine.exceptions import (
    InvalidCoordinatesError,
    InvalidCustomSpeedError,
    InvalidTravelModeError,
    RoutingError,
)
from route_engine.services.builder import RouteBuilder
from route_engine.services.cache import RouteCache, route_cache_key
from route_engine.services.geo import coordinate_errors
from route_engine.services.types import Location, RoutingResult, TravelConfig, TravelMode

logger = logging.getLogger(__name__)


class RouteStrategy(ABC):
    """Computes routes for one family of travel modes.

    ``compute`` validates, consults the shared cache, delegates to
    ``calculate`` and stores the result. Anything other than a
    ``RoutingError`` escaping ``calculate`` is wrapped in ``service_error``.
    """

    modes: frozenset[TravelMode] = frozenset()
    family: str = "route"
    service_error: type[RoutingError] = RoutingError
    service_error_suggestions: list[str] = ["Please try again later"]

    def __init__(self, cache: RouteCache[RoutingResult], builder: RouteBuilder) -> None:
        self.cache = cache
        self.builder = builder

    def compute(
        self,
        source: Location,
        destination: Location,
        config: TravelConfig,
    ) -> RoutingResult:
        mode = self._validate_mode(config.mode)
        validate_location(source)
        validate_location(destination)
        validate_custom_speed(config.custom_speed)

        cache_key = route_cache_key(source, destination, mode, config.custom_speed)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Route cache hit for %s", cache_key)
            return cached
        logger.debug("Route cache miss for %s", cache_key)

        try:
            result = self.calculate(source, destination, mode, config)
        except RoutingError:
            raise
        except Exception as exc:
            logger.exception("Unexpected %s routing failure", self.family)
            raise self.service_error(
                f"Failed to calculate {self.family} route",
                self.service_error_suggestions,
            ) from exc

        self.cache.put(cache_key, result)
        return result

    @abstractmethod
    def calculate(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        config: TravelConfig,
    ) -> RoutingResult:
        raise NotImplementedError

    def _validate_mode(self, mode: TravelMode | str) -> TravelMode:
        try:
            travel_mode = TravelMode(mode)
        except ValueError:
            travel_mode = None

        if travel_mode not in self.modes:
            supported = ", ".join(sorted(m.value for m in self.modes))
            raise InvalidTravelModeError(
                f"Travel mode {getattr(mode, 'value', mode)} is not supported by "
                f"{self.family} routing service",
                [f"Use {supported} mode for {self.family} routes"],
            )
        return travel_mode


def validate_custom_speed(custom_speed: float | None) -> None:
    if custom_speed is None:
        return
    if math.isnan(custom_speed) or custom_speed <= 0:
        raise InvalidCustomSpeedError(
            f"Custom speed must be a positive number of km/h, got {custom_speed}",
            ["Omit the custom speed to use the default for the travel mode"],
        )


def validate_location(location: Location) -> None:
    errors = coordinate_errors(location.coordinates)
    if errors:
        raise InvalidCoordinatesError(
            f"Invalid coordinates for location {location.name}: {', '.join(errors)}",
            [
                "Ensure coordinates are within valid ranges "
                "(-90 to 90 for latitude, -180 to 180 for longitude)"
            ],
        )
