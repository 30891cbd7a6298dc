from __future__ import annotations


class RoutingError(Exception):
    """Base exception for route computation errors."""

    code = "ROUTING_SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        suggestions: list[str] | None = None,
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.suggestions = list(suggestions or [])
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "suggestions": self.suggestions}


class InvalidTravelModeError(RoutingError):
    """Raised when a strategy receives a mode outside its family."""

    code = "INVALID_TRAVEL_MODE"


class InvalidCoordinatesError(RoutingError):
    """Raised when a location lies outside valid latitude/longitude ranges."""

    code = "INVALID_COORDINATES"


class UnsupportedTravelModeError(RoutingError):
    """Raised when no strategy handles the requested mode."""

    code = "UNSUPPORTED_TRAVEL_MODE"


class ExternalServiceError(RoutingError):
    """Raised when the directions provider call fails."""

    code = "API_REQUEST_FAILED"


class NoRouteFoundError(RoutingError):
    """Raised when the provider has no route between the endpoints."""

    code = "NO_ROUTE_FOUND"


class RateLimitExceededError(RoutingError):
    """Raised when the provider rejects the request for quota reasons."""

    code = "RATE_LIMIT_EXCEEDED"


class RoutingFailedError(RoutingError):
    """Raised for any other non-OK provider status or unusable payload."""

    code = "ROUTING_FAILED"


class AirRoutingServiceError(RoutingError):
    """Raised when flight path computation fails unexpectedly."""

    code = "AIR_ROUTING_SERVICE_ERROR"


class SeaRoutingServiceError(RoutingError):
    """Raised when maritime route computation fails unexpectedly."""

    code = "SEA_ROUTING_SERVICE_ERROR"


class InvalidCustomSpeedError(RoutingError):
    """Raised when a custom speed override is zero or negative."""

    code = "INVALID_CUSTOM_SPEED"
