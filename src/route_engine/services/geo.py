from __future__ import annotations

import math

from route_engine.services.types import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2.0) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(start: GeoPoint, end: GeoPoint) -> float:
    return haversine_km(start.latitude, start.longitude, end.latitude, end.longitude)


def interpolate_coordinates(start: GeoPoint, end: GeoPoint, progress: float) -> GeoPoint:
    """Linear lat/lon interpolation between two points.

    This is not a geodesic interpolation. At the sampling resolutions used for
    weather lookups (tens of kilometres) the error is acceptable, and changing
    it would shift every generated waypoint.
    """
    return GeoPoint(
        latitude=start.latitude + (end.latitude - start.latitude) * progress,
        longitude=start.longitude + (end.longitude - start.longitude) * progress,
    )


def coordinate_errors(point: GeoPoint) -> list[str]:
    errors: list[str] = []
    latitude = point.latitude
    longitude = point.longitude

    if not isinstance(latitude, (int, float)) or math.isnan(latitude):
        errors.append("Latitude must be a valid number")
    elif latitude < -90 or latitude > 90:
        errors.append("Latitude must be between -90 and 90 degrees")

    if not isinstance(longitude, (int, float)) or math.isnan(longitude):
        errors.append("Longitude must be a valid number")
    elif longitude < -180 or longitude > 180:
        errors.append("Longitude must be between -180 and 180 degrees")

    return errors
