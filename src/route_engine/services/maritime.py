"""Heuristic maritime geography tables.

These are coarse bounding boxes, kept as plain data so they can be replaced
by a real geospatial dataset without touching the sea routing algorithm.
"""

from __future__ import annotations

from dataclasses import dataclass

from route_engine.services.types import GeoPoint


@dataclass(slots=True, frozen=True)
class BoundingBox:
    south: float
    north: float
    west: float
    east: float

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.south <= point.latitude <= self.north
            and self.west <= point.longitude <= self.east
        )

    def expanded(self, margin: float) -> BoundingBox:
        return BoundingBox(
            south=self.south - margin,
            north=self.north + margin,
            west=self.west - margin,
            east=self.east + margin,
        )

    @classmethod
    def around(cls, *points: GeoPoint) -> BoundingBox:
        latitudes = [point.latitude for point in points]
        longitudes = [point.longitude for point in points]
        return cls(
            south=min(latitudes),
            north=max(latitudes),
            west=min(longitudes),
            east=max(longitudes),
        )


@dataclass(slots=True, frozen=True)
class Chokepoint:
    name: str
    location: GeoPoint
    tolerance_degrees: float


@dataclass(slots=True, frozen=True)
class OceanSystem:
    name: str
    regions: tuple[BoundingBox, ...]


COASTAL_KEYWORDS = (
    "port",
    "harbor",
    "harbour",
    "havre",
    "haven",
    "bay",
    "beach",
    "coast",
    "island",
    "marina",
    "cove",
    "pier",
    "wharf",
    "dock",
    "on-sea",
)

COASTAL_REGIONS: dict[str, BoundingBox] = {
    "mediterranean_baltic_north_sea": BoundingBox(south=30.0, north=66.0, west=-10.0, east=42.0),
    "southeast_asian_archipelago": BoundingBox(south=-11.0, north=23.0, west=95.0, east=141.0),
    "caribbean_central_america": BoundingBox(south=7.0, north=27.0, west=-90.0, east=-59.0),
}

CHOKEPOINTS: tuple[Chokepoint, ...] = (
    Chokepoint("Strait of Gibraltar", GeoPoint(35.95, -5.60), 1.0),
    Chokepoint("Suez Canal", GeoPoint(30.50, 32.35), 1.0),
    Chokepoint("Strait of Hormuz", GeoPoint(26.57, 56.25), 1.0),
    Chokepoint("Strait of Malacca", GeoPoint(2.50, 101.50), 2.0),
    Chokepoint("Panama Canal", GeoPoint(9.08, -79.68), 1.0),
    Chokepoint("English Channel", GeoPoint(50.20, -1.00), 1.5),
)

# Order matters: the first system whose regions contain a point wins.
OCEAN_SYSTEMS: tuple[OceanSystem, ...] = (
    OceanSystem("Mediterranean", (BoundingBox(30.0, 46.0, -6.0, 36.5),)),
    OceanSystem("Arctic", (BoundingBox(66.0, 90.0, -180.0, 180.0),)),
    OceanSystem("Southern", (BoundingBox(-90.0, -60.0, -180.0, 180.0),)),
    OceanSystem("Indian", (BoundingBox(-60.0, 30.0, 20.0, 120.0),)),
    OceanSystem(
        "Atlantic",
        (
            BoundingBox(-60.0, 66.0, -70.0, 20.0),
            BoundingBox(8.0, 66.0, -100.0, -70.0),
        ),
    ),
    OceanSystem(
        "Pacific",
        (
            BoundingBox(-60.0, 66.0, 120.0, 180.0),
            BoundingBox(-60.0, 66.0, -180.0, -70.0),
        ),
    ),
)


def is_coastal(name: str, point: GeoPoint) -> bool:
    lowered = name.lower()
    if any(keyword in lowered for keyword in COASTAL_KEYWORDS):
        return True
    return any(region.contains(point) for region in COASTAL_REGIONS.values())


def crosses_antimeridian(start: GeoPoint, end: GeoPoint) -> bool:
    return abs(end.longitude - start.longitude) > 180


def route_boxes(start: GeoPoint, end: GeoPoint) -> tuple[BoundingBox, ...]:
    """Boxes covering the short way between two points.

    A route across the date line is split into one box either side of it.
    """
    box = BoundingBox.around(start, end)
    if not crosses_antimeridian(start, end):
        return (box,)
    return (
        BoundingBox(south=box.south, north=box.north, west=box.east, east=180.0),
        BoundingBox(south=box.south, north=box.north, west=-180.0, east=box.west),
    )


def chokepoints_near(start: GeoPoint, end: GeoPoint) -> list[Chokepoint]:
    boxes = route_boxes(start, end)
    return [
        chokepoint
        for chokepoint in CHOKEPOINTS
        if any(
            box.expanded(chokepoint.tolerance_degrees).contains(chokepoint.location)
            for box in boxes
        )
    ]


def ocean_system_for(point: GeoPoint) -> str | None:
    for system in OCEAN_SYSTEMS:
        if any(region.contains(point) for region in system.regions):
            return system.name
    return None
