from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable

from route_engine.services.geo import interpolate_coordinates
from route_engine.services.modes import waypoint_interval
from route_engine.services.types import (
    Location,
    PathStep,
    Route,
    RouteSegment,
    TravelMode,
    Waypoint,
)

SECONDS_PER_HOUR = 3600.0


class RouteBuilder:
    """Assembles routes with contiguous segments and sampled waypoints."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def from_steps(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        steps: list[PathStep],
        total_distance: float,
        estimated_duration: float,
    ) -> Route:
        segments: list[RouteSegment] = []
        cumulative_distance = 0.0
        cumulative_time = 0.0

        for step in steps:
            start_point = Waypoint(
                coordinates=step.start,
                distance_from_start=cumulative_distance,
                estimated_time_from_start=cumulative_time,
            )
            cumulative_distance += step.distance_km
            cumulative_time += step.duration_seconds
            end_point = Waypoint(
                coordinates=step.end,
                distance_from_start=cumulative_distance,
                estimated_time_from_start=cumulative_time,
            )
            segments.append(
                RouteSegment(
                    start_point=start_point,
                    end_point=end_point,
                    distance=step.distance_km,
                    estimated_duration=step.duration_seconds,
                    travel_mode=mode,
                )
            )

        return self._assemble(source, destination, mode, segments, total_distance, estimated_duration)

    def direct(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        distance: float,
        duration: float,
        segment_count: int,
    ) -> Route:
        """Split the straight source->destination path into equal segments."""
        segment_count = max(segment_count, 1)
        segment_distance = distance / segment_count
        segment_duration = duration / segment_count

        steps = [
            PathStep(
                start=interpolate_coordinates(
                    source.coordinates, destination.coordinates, index / segment_count
                ),
                end=interpolate_coordinates(
                    source.coordinates, destination.coordinates, (index + 1) / segment_count
                ),
                distance_km=segment_distance,
                duration_seconds=segment_duration,
            )
            for index in range(segment_count)
        ]
        return self.from_steps(source, destination, mode, steps, distance, duration)

    def generate_waypoints(self, route: Route, interval_km: float | None = None) -> list[Waypoint]:
        interval = interval_km or waypoint_interval(route.travel_mode)
        if interval <= 0:
            raise ValueError("Waypoint interval must be positive")

        waypoints = [
            Waypoint(
                coordinates=route.source.coordinates,
                distance_from_start=0.0,
                estimated_time_from_start=0.0,
            )
        ]

        cumulative_distance = 0.0
        cumulative_time = 0.0
        next_index = 1

        for segment in route.segments:
            segment_end_distance = cumulative_distance + segment.distance
            limit = min(segment_end_distance, route.total_distance)

            if segment.distance > 0:
                while next_index * interval <= limit:
                    target_distance = next_index * interval
                    progress = (target_distance - cumulative_distance) / segment.distance
                    waypoints.append(
                        Waypoint(
                            coordinates=interpolate_coordinates(
                                segment.start_point.coordinates,
                                segment.end_point.coordinates,
                                progress,
                            ),
                            distance_from_start=target_distance,
                            estimated_time_from_start=cumulative_time
                            + segment.estimated_duration * progress,
                        )
                    )
                    next_index += 1

            cumulative_distance = segment_end_distance
            cumulative_time += segment.estimated_duration

        if waypoints[-1].distance_from_start < route.total_distance:
            waypoints.append(
                Waypoint(
                    coordinates=route.destination.coordinates,
                    distance_from_start=route.total_distance,
                    estimated_time_from_start=route.estimated_duration,
                )
            )

        return waypoints

    def apply_custom_speed(self, route: Route, custom_speed: float) -> Route:
        """Retime a route for a fixed speed. Distances are left untouched."""
        if custom_speed <= 0:
            raise ValueError("Custom speed must be positive")

        new_duration = route.total_distance / custom_speed * SECONDS_PER_HOUR
        old_duration = route.estimated_duration

        segments: list[RouteSegment] = []
        cumulative_time = 0.0
        for segment in route.segments:
            if old_duration > 0:
                duration = segment.estimated_duration * (new_duration / old_duration)
            elif route.total_distance > 0:
                duration = new_duration * (segment.distance / route.total_distance)
            else:
                duration = 0.0

            start_point = replace(segment.start_point, estimated_time_from_start=cumulative_time)
            cumulative_time += duration
            end_point = replace(segment.end_point, estimated_time_from_start=cumulative_time)
            segments.append(
                replace(
                    segment,
                    start_point=start_point,
                    end_point=end_point,
                    estimated_duration=duration,
                )
            )

        retimed = replace(route, estimated_duration=new_duration, segments=tuple(segments))
        return replace(retimed, waypoints=tuple(self.generate_waypoints(retimed)))

    def route_id(self, source: Location, destination: Location, mode: TravelMode) -> str:
        timestamp = int(self._clock() * 1000)
        source_hash = f"{source.coordinates.latitude:.4f}_{source.coordinates.longitude:.4f}"
        destination_hash = (
            f"{destination.coordinates.latitude:.4f}_{destination.coordinates.longitude:.4f}"
        )
        return f"route_{mode.value}_{source_hash}_{destination_hash}_{timestamp}"

    def _assemble(
        self,
        source: Location,
        destination: Location,
        mode: TravelMode,
        segments: list[RouteSegment],
        total_distance: float,
        estimated_duration: float,
    ) -> Route:
        route = Route(
            id=self.route_id(source, destination, mode),
            source=source,
            destination=destination,
            travel_mode=mode,
            waypoints=(),
            total_distance=total_distance,
            estimated_duration=estimated_duration,
            segments=tuple(segments),
        )
        return replace(route, waypoints=tuple(self.generate_waypoints(route)))
