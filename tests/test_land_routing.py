from __future__ import annotations

import httpx
import pytest

from route_engine.exceptions import (
    ExternalServiceError,
    InvalidCoordinatesError,
    InvalidTravelModeError,
    NoRouteFoundError,
    RateLimitExceededError,
    RoutingError,
    RoutingFailedError,
)
from route_engine.services.builder import RouteBuilder
from route_engine.services.cache import RouteCache
from route_engine.services.directions import DirectionsClient
from route_engine.services.geo import distance_between
from route_engine.services.land import LandRouteStrategy
from route_engine.services.types import (
    GeoPoint,
    Location,
    TravelConfig,
    TravelMode,
    TravelPreferences,
)

BASE_URL = "https://directions.test/maps/api/directions/json"

NEW_YORK = Location(
    name="New York, NY",
    coordinates=GeoPoint(latitude=40.7128, longitude=-74.0060),
    address="New York, NY, USA",
)
BOSTON = Location(
    name="Boston, MA",
    coordinates=GeoPoint(latitude=42.3601, longitude=-71.0589),
    address="Boston, MA, USA",
)


def _strategy(clock, api_key: str = "") -> LandRouteStrategy:
    return LandRouteStrategy(
        cache=RouteCache(max_size=20, default_ttl=3600, clock=clock),
        builder=RouteBuilder(clock=clock),
        directions_client=DirectionsClient(api_key=api_key, base_url=BASE_URL, timeout=5.0),
    )


def _step(distance_m: float, duration_s: float, start=(40.7128, -74.0060), end=(42.3601, -71.0589)):
    return {
        "distance": {"value": distance_m},
        "duration": {"value": duration_s},
        "start_location": {"lat": start[0], "lng": start[1]},
        "end_location": {"lat": end[0], "lng": end[1]},
        "polyline": {"points": "abc"},
    }


def _payload(
    distance_m: float = 300_000,
    duration_s: float = 14_400,
    steps: list[dict] | None = None,
    status: str = "OK",
    warnings: list[str] | None = None,
    summary: str = "I-95 N",
) -> dict:
    return {
        "routes": [
            {
                "legs": [
                    {
                        "distance": {"value": distance_m, "text": ""},
                        "duration": {"value": duration_s, "text": ""},
                        "steps": steps if steps is not None else [_step(distance_m, duration_s)],
                    }
                ],
                "overview_polyline": {"points": "abc"},
                "summary": summary,
                "warnings": warnings or [],
            }
        ],
        "status": status,
    }


def _response(payload: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("GET", BASE_URL))


def _config(mode: TravelMode = TravelMode.DRIVING, **kwargs) -> TravelConfig:
    return TravelConfig(mode=mode, **kwargs)


def test_mock_driving_route_uses_default_speed(clock) -> None:
    strategy = _strategy(clock)

    result = strategy.compute(NEW_YORK, BOSTON, _config())

    route = result.route
    assert route.total_distance > 0
    assert route.total_distance == pytest.approx(
        distance_between(NEW_YORK.coordinates, BOSTON.coordinates)
    )
    assert route.estimated_duration == pytest.approx(route.total_distance / 60 * 3600)
    assert result.confidence == 0.7
    assert len(route.segments) == 10
    assert route.source == NEW_YORK
    assert route.destination == BOSTON
    assert "Long driving route detected. Consider rest stops every 2-3 hours." in result.warnings


def test_mock_segment_count_is_clamped_for_short_routes(clock) -> None:
    strategy = _strategy(clock)
    nearby = Location(name="Brooklyn", coordinates=GeoPoint(40.6782, -73.9442))

    result = strategy.compute(NEW_YORK, nearby, _config(TravelMode.WALKING))

    assert len(result.route.segments) == 2
    assert result.route.estimated_duration == pytest.approx(result.route.total_distance / 5 * 3600)
    assert result.warnings == ()


def test_mock_route_honours_custom_speed(clock) -> None:
    strategy = _strategy(clock)

    result = strategy.compute(NEW_YORK, BOSTON, _config(custom_speed=100.0))

    assert result.route.estimated_duration == pytest.approx(result.route.total_distance / 100 * 3600)


def test_provider_route_builds_segments_from_steps(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    http_get = mocker.patch(
        "route_engine.services.directions.httpx.get", return_value=_response(_payload())
    )

    result = strategy.compute(NEW_YORK, BOSTON, _config())

    assert result.route.travel_mode is TravelMode.DRIVING
    assert result.route.total_distance == 300.0
    assert result.route.estimated_duration == 14400.0
    assert len(result.route.segments) == 1
    assert result.confidence == pytest.approx(0.8)
    assert result.route.waypoints[-1].distance_from_start == 300.0

    params = http_get.call_args.kwargs["params"]
    assert params["origin"] == "40.7128,-74.006"
    assert params["destination"] == "42.3601,-71.0589"
    assert params["mode"] == "driving"
    assert params["key"] == "test-key"
    assert params["optimize"] == "true"


def test_provider_request_maps_cycling_and_skips_optimize_flag(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    http_get = mocker.patch(
        "route_engine.services.directions.httpx.get",
        return_value=_response(_payload(distance_m=80_000, duration_s=14_400)),
    )
    config = _config(
        TravelMode.CYCLING,
        preferences=TravelPreferences(weather_update_interval=1800, route_optimization=False),
    )

    result = strategy.compute(NEW_YORK, BOSTON, config)

    params = http_get.call_args.kwargs["params"]
    assert params["mode"] == "bicycling"
    assert "optimize" not in params
    # summary does not mention bikes
    assert result.confidence == pytest.approx(0.7)


def test_provider_warnings_are_kept_and_lower_confidence(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    mocker.patch(
        "route_engine.services.directions.httpx.get",
        return_value=_response(
            _payload(distance_m=50_000, duration_s=36_000, warnings=["Long walking distance"])
        ),
    )

    result = strategy.compute(NEW_YORK, BOSTON, _config(TravelMode.WALKING))

    assert result.route.total_distance == 50.0
    assert result.confidence == pytest.approx(0.7)
    assert "Long walking distance" in result.warnings
    assert (
        "Long walking route detected. Plan for multiple days or consider alternative transport."
        in result.warnings
    )
    assert "Walking time exceeds 8 hours. Consider breaking into multiple days." in result.warnings


def test_detailed_provider_route_raises_confidence(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    steps = [_step(10_000, 600) for _ in range(6)]
    mocker.patch(
        "route_engine.services.directions.httpx.get",
        return_value=_response(_payload(distance_m=60_000, duration_s=3_600, steps=steps)),
    )

    result = strategy.compute(NEW_YORK, BOSTON, _config())

    assert result.confidence == pytest.approx(0.9)
    assert len(result.route.segments) == 6


def test_steps_are_fitted_to_leg_totals(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    steps = [_step(4_000, 300), _step(4_000, 300)]
    mocker.patch(
        "route_engine.services.directions.httpx.get",
        return_value=_response(_payload(distance_m=10_000, duration_s=900, steps=steps)),
    )

    result = strategy.compute(NEW_YORK, BOSTON, _config())

    segments = result.route.segments
    assert [segment.distance for segment in segments] == pytest.approx([5.0, 5.0])
    assert sum(segment.estimated_duration for segment in segments) == pytest.approx(900.0)
    assert result.route.total_distance == pytest.approx(10.0)


def test_provider_route_applies_custom_speed(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    mocker.patch("route_engine.services.directions.httpx.get", return_value=_response(_payload()))

    result = strategy.compute(NEW_YORK, BOSTON, _config(custom_speed=80.0))

    assert result.route.estimated_duration == pytest.approx(13500.0)
    assert result.route.segments[0].estimated_duration == pytest.approx(13500.0)
    assert result.route.waypoints[-1].estimated_time_from_start == pytest.approx(13500.0)


@pytest.mark.parametrize(
    ("status", "error_type", "code"),
    [
        ("ZERO_RESULTS", NoRouteFoundError, "NO_ROUTE_FOUND"),
        ("OVER_QUERY_LIMIT", RateLimitExceededError, "RATE_LIMIT_EXCEEDED"),
        ("REQUEST_DENIED", RoutingFailedError, "ROUTING_FAILED"),
    ],
)
def test_provider_status_errors(clock, mocker, status, error_type, code) -> None:
    strategy = _strategy(clock, api_key="test-key")
    mocker.patch(
        "route_engine.services.directions.httpx.get",
        return_value=_response({"routes": [], "status": status}),
    )

    with pytest.raises(error_type) as excinfo:
        strategy.compute(NEW_YORK, BOSTON, _config())

    assert excinfo.value.code == code
    assert excinfo.value.suggestions
    assert strategy.cache.stats()["size"] == 0


def test_http_failure_raises_api_request_failed(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    mocker.patch(
        "route_engine.services.directions.httpx.get",
        return_value=_response({"error": "boom"}, status_code=500),
    )

    with pytest.raises(ExternalServiceError) as excinfo:
        strategy.compute(NEW_YORK, BOSTON, _config())

    assert excinfo.value.code == "API_REQUEST_FAILED"
    assert "500" in excinfo.value.message


def test_timeout_raises_api_request_failed(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    mocker.patch(
        "route_engine.services.directions.httpx.get",
        side_effect=httpx.ReadTimeout("timed out"),
    )

    with pytest.raises(ExternalServiceError) as excinfo:
        strategy.compute(NEW_YORK, BOSTON, _config())

    assert excinfo.value.code == "API_REQUEST_FAILED"


def test_invalid_coordinates_fail_before_cache_or_network(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    http_get = mocker.patch("route_engine.services.directions.httpx.get")
    invalid = Location(name="Nowhere", coordinates=GeoPoint(latitude=91.0, longitude=0.0))

    with pytest.raises(InvalidCoordinatesError) as excinfo:
        strategy.compute(invalid, BOSTON, _config())

    assert excinfo.value.code == "INVALID_COORDINATES"
    assert "Nowhere" in excinfo.value.message
    http_get.assert_not_called()
    assert strategy.cache.stats()["size"] == 0


def test_rejects_non_land_modes(clock) -> None:
    strategy = _strategy(clock)

    with pytest.raises(InvalidTravelModeError) as excinfo:
        strategy.compute(NEW_YORK, BOSTON, _config(TravelMode.FLYING))

    assert excinfo.value.code == "INVALID_TRAVEL_MODE"


def test_results_are_cached(clock, mocker) -> None:
    strategy = _strategy(clock, api_key="test-key")
    http_get = mocker.patch(
        "route_engine.services.directions.httpx.get", return_value=_response(_payload())
    )

    first = strategy.compute(NEW_YORK, BOSTON, _config())
    clock.advance(10)
    second = strategy.compute(NEW_YORK, BOSTON, _config())

    assert http_get.call_count == 1
    assert first.route.id == second.route.id
    assert strategy.cache.stats()["size"] == 1


def test_unexpected_failure_is_wrapped(clock, mocker) -> None:
    strategy = _strategy(clock)
    mocker.patch.object(strategy.builder, "direct", side_effect=RuntimeError("boom"))

    with pytest.raises(RoutingError) as excinfo:
        strategy.compute(NEW_YORK, BOSTON, _config())

    assert type(excinfo.value) is RoutingError
    assert excinfo.value.code == "ROUTING_SERVICE_ERROR"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
