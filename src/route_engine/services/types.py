from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"
    FLYING = "flying"
    SAILING = "sailing"
    CRUISE = "cruise"


LAND_MODES = frozenset({TravelMode.DRIVING, TravelMode.WALKING, TravelMode.CYCLING})
AIR_MODES = frozenset({TravelMode.FLYING})
SEA_MODES = frozenset({TravelMode.SAILING, TravelMode.CRUISE})


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class Location:
    name: str
    coordinates: GeoPoint
    address: str | None = None


@dataclass(slots=True, frozen=True)
class TravelPreferences:
    weather_update_interval: int = 3600
    route_optimization: bool = True


@dataclass(slots=True, frozen=True)
class TravelConfig:
    mode: TravelMode | str
    custom_duration: float | None = None
    custom_speed: float | None = None
    preferences: TravelPreferences = field(default_factory=TravelPreferences)


@dataclass(slots=True, frozen=True)
class TravelConditions:
    traffic: Literal["light", "moderate", "heavy"] | None = None
    weather: Literal["favorable", "headwind", "storm"] | None = None


@dataclass(slots=True, frozen=True)
class Waypoint:
    coordinates: GeoPoint
    distance_from_start: float
    estimated_time_from_start: float


@dataclass(slots=True, frozen=True)
class RouteSegment:
    start_point: Waypoint
    end_point: Waypoint
    distance: float
    estimated_duration: float
    travel_mode: TravelMode


@dataclass(slots=True, frozen=True)
class Route:
    id: str
    source: Location
    destination: Location
    travel_mode: TravelMode
    waypoints: tuple[Waypoint, ...]
    total_distance: float
    estimated_duration: float
    segments: tuple[RouteSegment, ...]


@dataclass(slots=True, frozen=True)
class RoutingResult:
    route: Route
    confidence: float
    warnings: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class RouteAnalysis:
    distance: float
    recommendations: list[str]
    alternative_modes: list[TravelMode]
    considerations: list[str]


@dataclass(slots=True, frozen=True)
class PathStep:
    start: GeoPoint
    end: GeoPoint
    distance_km: float
    duration_seconds: float


@dataclass(slots=True, frozen=True)
class DirectionsRoute:
    steps: list[PathStep]
    total_distance_km: float
    total_duration_seconds: float
    summary: str = ""
    warnings: list[str] = field(default_factory=list)
