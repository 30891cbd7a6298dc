from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from route_engine.services.types import (
    GeoPoint,
    Location,
    TravelConfig,
    TravelMode,
    TravelPreferences,
)


class LocationPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=300)
    # Range checks happen in the routing core so callers get INVALID_COORDINATES.
    latitude: float
    longitude: float
    address: str | None = Field(default=None, max_length=500)

    def to_location(self) -> Location:
        return Location(
            name=self.name,
            coordinates=GeoPoint(latitude=self.latitude, longitude=self.longitude),
            address=self.address,
        )


class RouteCalculationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: LocationPayload
    destination: LocationPayload
    travel_mode: str = "driving"
    custom_duration: float | None = Field(default=None, gt=0.0, le=7 * 24 * 3600)
    custom_speed: float | None = Field(default=None, gt=0.0, le=1000.0)
    weather_update_interval: int = Field(default=3600, gt=0)
    route_optimization: bool = True

    def to_travel_config(self) -> TravelConfig:
        return TravelConfig(
            mode=self.travel_mode,
            custom_duration=self.custom_duration,
            custom_speed=self.custom_speed,
            preferences=TravelPreferences(
                weather_update_interval=self.weather_update_interval,
                route_optimization=self.route_optimization,
            ),
        )


class RouteAnalysisRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    source: LocationPayload
    destination: LocationPayload
    travel_mode: TravelMode = TravelMode.DRIVING


class Coordinate(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    latitude: float
    longitude: float


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    coordinates: Coordinate
    address: str | None = None


class WaypointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    coordinates: Coordinate
    distance_from_start: float
    estimated_time_from_start: float


class RouteSegmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start_point: WaypointResponse
    end_point: WaypointResponse
    distance: float
    estimated_duration: float
    travel_mode: TravelMode


class RouteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    source: LocationResponse
    destination: LocationResponse
    travel_mode: TravelMode
    waypoints: list[WaypointResponse]
    total_distance: float
    estimated_duration: float
    segments: list[RouteSegmentResponse]


class RoutingResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    route: RouteResponse
    confidence: float
    warnings: list[str]


class RouteAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    distance: float
    recommendations: list[str]
    alternative_modes: list[TravelMode]
    considerations: list[str]
