from __future__ import annotations

import logging
from typing import Any

import httpx
from django.conf import settings

from route_engine.exceptions import (
    ExternalServiceError,
    NoRouteFoundError,
    RateLimitExceededError,
    RoutingFailedError,
)
from route_engine.services.types import DirectionsRoute, GeoPoint, PathStep, TravelMode

logger = logging.getLogger(__name__)

METERS_PER_KM = 1000.0

PROVIDER_MODES = {
    TravelMode.DRIVING: "driving",
    TravelMode.WALKING: "walking",
    TravelMode.CYCLING: "bicycling",
}


class DirectionsClient:
    """Client for a Google-Directions-shaped JSON endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.ROUTING_API_KEY
        self.base_url = base_url or settings.ROUTING_BASE_URL
        self.timeout = timeout if timeout is not None else settings.ROUTING_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def directions(
        self,
        origin: GeoPoint,
        destination: GeoPoint,
        mode: TravelMode,
        *,
        optimize: bool = False,
    ) -> DirectionsRoute:
        params = {
            "origin": f"{origin.latitude},{origin.longitude}",
            "destination": f"{destination.latitude},{destination.longitude}",
            "mode": PROVIDER_MODES.get(mode, "driving"),
            "key": self.api_key,
        }
        if optimize:
            params["optimize"] = "true"

        logger.info("Requesting %s directions from provider", params["mode"])
        try:
            response = httpx.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ExternalServiceError(
                "Routing API request timed out",
                ["Please try again later", "Check your internet connection"],
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                f"Routing API request failed: {exc.response.status_code} "
                f"{exc.response.reason_phrase}",
                ["Please try again later", "Check your internet connection"],
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(
                "Routing API request failed",
                ["Please try again later", "Check your internet connection"],
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise RoutingFailedError(
                "Routing API returned an unreadable response",
                ["Please try again with different locations"],
            ) from exc

        return self._parse_response(payload, origin, destination, mode)

    @staticmethod
    def _parse_response(
        payload: Any,
        origin: GeoPoint,
        destination: GeoPoint,
        mode: TravelMode,
    ) -> DirectionsRoute:
        status = payload.get("status") if isinstance(payload, dict) else None

        if status == "ZERO_RESULTS":
            raise NoRouteFoundError(
                f"No route found for {mode.value}",
                [
                    "Try a different travel mode",
                    "Check if both locations are accessible",
                    "Consider intermediate waypoints for long distances",
                ],
            )

        if status == "OVER_QUERY_LIMIT":
            raise RateLimitExceededError(
                "Too many routing requests. Please try again later.",
                ["Wait a few minutes before trying again"],
            )

        routes = payload.get("routes") if status == "OK" else None
        if not routes:
            raise RoutingFailedError(
                f"Routing failed: {status}",
                ["Please try again with different locations"],
            )

        first = routes[0]
        steps: list[PathStep] = []
        total_distance = 0.0
        total_duration = 0.0
        previous_end = origin

        try:
            for leg in first.get("legs", []):
                leg_distance = float(leg["distance"]["value"]) / METERS_PER_KM
                leg_duration = float(leg["duration"]["value"])
                leg_steps = [_parse_step(step) for step in leg.get("steps", [])]

                if not leg_steps:
                    leg_end = _parse_point(leg.get("end_location")) or destination
                    leg_steps = [PathStep(previous_end, leg_end, leg_distance, leg_duration)]

                steps.extend(_fit_to_leg(leg_steps, leg_distance, leg_duration))
                total_distance += leg_distance
                total_duration += leg_duration
                previous_end = leg_steps[-1].end
        except (KeyError, TypeError, ValueError) as exc:
            raise RoutingFailedError(
                "Routing API returned a malformed route",
                ["Please try again with different locations"],
            ) from exc

        if not steps:
            raise RoutingFailedError(
                "Routing API returned a route without legs",
                ["Please try again with different locations"],
            )

        return DirectionsRoute(
            steps=steps,
            total_distance_km=total_distance,
            total_duration_seconds=total_duration,
            summary=str(first.get("summary") or ""),
            warnings=[str(warning) for warning in first.get("warnings") or []],
        )


def _parse_point(value: Any) -> GeoPoint | None:
    if not value:
        return None
    return GeoPoint(latitude=float(value["lat"]), longitude=float(value["lng"]))


def _parse_step(step: Any) -> PathStep:
    return PathStep(
        start=_parse_point(step["start_location"]),
        end=_parse_point(step["end_location"]),
        distance_km=float(step["distance"]["value"]) / METERS_PER_KM,
        duration_seconds=float(step["duration"]["value"]),
    )


def _fit_to_leg(steps: list[PathStep], leg_distance: float, leg_duration: float) -> list[PathStep]:
    """Scale step values so a leg's steps add up to the leg totals."""
    step_distance = sum(step.distance_km for step in steps)
    step_duration = sum(step.duration_seconds for step in steps)
    if step_distance == leg_distance and step_duration == leg_duration:
        return steps

    count = len(steps)
    fitted: list[PathStep] = []
    for step in steps:
        distance = (
            step.distance_km * leg_distance / step_distance
            if step_distance > 0
            else leg_distance / count
        )
        duration = (
            step.duration_seconds * leg_duration / step_duration
            if step_duration > 0
            else leg_duration / count
        )
        fitted.append(PathStep(step.start, step.end, distance, duration))
    return fitted
