from __future__ import annotations

from route_engine.services.types import (
    AIR_MODES,
    SEA_MODES,
    TravelConditions,
    TravelMode,
)

# km/h
DEFAULT_SPEEDS: dict[TravelMode, float] = {
    TravelMode.DRIVING: 60.0,
    TravelMode.WALKING: 5.0,
    TravelMode.CYCLING: 20.0,
    TravelMode.FLYING: 800.0,
    TravelMode.SAILING: 15.0,
    TravelMode.CRUISE: 25.0,
}

# km between sampled waypoints
WAYPOINT_INTERVALS: dict[TravelMode, float] = {
    TravelMode.DRIVING: 50.0,
    TravelMode.WALKING: 5.0,
    TravelMode.CYCLING: 20.0,
    TravelMode.FLYING: 200.0,
    TravelMode.SAILING: 100.0,
    TravelMode.CRUISE: 100.0,
}

MIN_TRAVEL_SPEED_KMH = 1.0

TRAFFIC_FACTORS = {"light": 1.0, "moderate": 0.85, "heavy": 0.7}
TRAFFIC_SENSITIVE_MODES = frozenset({TravelMode.DRIVING, TravelMode.CYCLING})

LAND_WEATHER_FACTORS = {"favorable": 1.0, "headwind": 0.9, "storm": 0.6}
AIR_WEATHER_FACTORS = {"favorable": 1.1, "headwind": 0.9, "storm": 0.7}
SEA_WEATHER_FACTORS = {"favorable": 1.3, "headwind": 0.8, "storm": 0.5}


def default_speed(mode: TravelMode) -> float:
    return DEFAULT_SPEEDS[mode]


def waypoint_interval(mode: TravelMode) -> float:
    return WAYPOINT_INTERVALS[mode]


def effective_speed(mode: TravelMode, custom_speed: float | None) -> float:
    return custom_speed if custom_speed else DEFAULT_SPEEDS[mode]


def calculate_travel_speed(
    mode: TravelMode,
    custom_speed: float | None = None,
    conditions: TravelConditions | None = None,
) -> float:
    speed = effective_speed(mode, custom_speed)
    if conditions is None:
        return max(speed, MIN_TRAVEL_SPEED_KMH)

    if conditions.traffic and mode in TRAFFIC_SENSITIVE_MODES:
        speed *= TRAFFIC_FACTORS[conditions.traffic]

    if conditions.weather:
        speed *= _weather_factors(mode)[conditions.weather]

    return max(round(speed, 6), MIN_TRAVEL_SPEED_KMH)


def _weather_factors(mode: TravelMode) -> dict[str, float]:
    if mode in SEA_MODES:
        return SEA_WEATHER_FACTORS
    if mode in AIR_MODES:
        return AIR_WEATHER_FACTORS
    return LAND_WEATHER_FACTORS
