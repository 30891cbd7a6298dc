from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import BaseModel, ValidationError

from route_engine.exceptions import RoutingError
from route_engine.schemas import (
    RouteAnalysisRequest,
    RouteAnalysisResponse,
    RouteCalculationRequest,
    RoutingResultResponse,
)
from route_engine.services.routing import RoutingService

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "INVALID_TRAVEL_MODE": 400,
    "INVALID_COORDINATES": 400,
    "UNSUPPORTED_TRAVEL_MODE": 400,
    "INVALID_CUSTOM_SPEED": 400,
    "NO_ROUTE_FOUND": 422,
    "RATE_LIMIT_EXCEEDED": 429,
    "API_REQUEST_FAILED": 502,
    "ROUTING_FAILED": 502,
}

_routing_service: RoutingService | None = None


def get_routing_service() -> RoutingService:
    global _routing_service
    if _routing_service is None:
        _routing_service = RoutingService()
    return _routing_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse(
        {
            "status": "ok",
            "timestamp": _now_iso(),
            "services": {
                "routing": {
                    "status": "operational",
                    "cache": get_routing_service().get_cache_stats(),
                }
            },
        }
    )


@csrf_exempt
@require_POST
def route_calculate_view(request: HttpRequest) -> HttpResponse:
    route_request = _validate_payload(request, RouteCalculationRequest)
    if isinstance(route_request, JsonResponse):
        return route_request

    service = get_routing_service()
    try:
        result = service.calculate_route(
            route_request.source.to_location(),
            route_request.destination.to_location(),
            route_request.to_travel_config(),
        )
    except RoutingError as exc:
        logger.info("Route calculation rejected: %s (%s)", exc.message, exc.code)
        return _routing_error_response(exc)

    response = RoutingResultResponse.model_validate(result, from_attributes=True)
    return JsonResponse(response.model_dump(mode="json"), status=200)


@csrf_exempt
@require_POST
def route_analysis_view(request: HttpRequest) -> HttpResponse:
    analysis_request = _validate_payload(request, RouteAnalysisRequest)
    if isinstance(analysis_request, JsonResponse):
        return analysis_request

    source = analysis_request.source.to_location()
    destination = analysis_request.destination.to_location()
    try:
        analysis = get_routing_service().analyze_cross_mode_route(
            source, destination, analysis_request.travel_mode
        )
    except RoutingError as exc:
        return _routing_error_response(exc)

    response = RouteAnalysisResponse.model_validate(analysis, from_attributes=True)
    return JsonResponse(response.model_dump(mode="json"), status=200)


@csrf_exempt
@require_POST
def clear_cache_view(_: HttpRequest) -> HttpResponse:
    service = get_routing_service()
    removed = service.clear_expired_cache()
    return JsonResponse(
        {
            "message": "Cache cleared successfully",
            "removed": removed,
            "cache": service.get_cache_stats(),
            "timestamp": _now_iso(),
        }
    )


def _validate_payload(
    request: HttpRequest, schema: type[BaseModel]
) -> BaseModel | JsonResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _routing_error_response(exc: RoutingError) -> JsonResponse:
    return JsonResponse({"error": exc.to_dict()}, status=ERROR_STATUS.get(exc.code, 500))


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
