"""API routes: catalog, layer values, histories, zones, and CSV export."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from zonepulse import __version__
from zonepulse.api.schemas import (
    CatalogResponse,
    HealthResponse,
    LayerDataResponse,
    TimeseriesResponse,
    ZoneScoresResponse,
    ZoneSummaryResponse,
)
from zonepulse.infrastructure.store import MarketStore
from zonepulse.services.export import ExportService
from zonepulse.services.layers import LayerService
from zonepulse.services.result import ErrorCode, ServiceResult

router = APIRouter()
logger = logging.getLogger(__name__)

_STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.UNKNOWN_LAYER: 404,
    ErrorCode.UNKNOWN_REGION: 404,
    ErrorCode.INVALID_ZONE: 422,
    ErrorCode.INVALID_PERIOD: 422,
    ErrorCode.STORE_UNAVAILABLE: 500,
}


def get_store(request: Request) -> MarketStore:
    return request.app.state.store


def get_layer_service(store: Annotated[MarketStore, Depends(get_store)]) -> LayerService:
    return LayerService(store)


def get_export_service(store: Annotated[MarketStore, Depends(get_store)]) -> ExportService:
    return ExportService(store)


Layers = Annotated[LayerService, Depends(get_layer_service)]


def unwrap(result: ServiceResult) -> dict[str, Any]:
    """Payload of a successful result, or the matching HTTPException."""
    if result.ok:
        return result.data
    error = result.error
    code = error.code if error else ""
    status = _STATUS_BY_CODE.get(code, 500)
    if status >= 500:
        logger.error(
            "%s failed with %s: %s", result.op, code or "UNKNOWN", error.message if error else "-"
        )
        raise HTTPException(status_code=500, detail="Internal server error")
    raise HTTPException(status_code=status, detail=error.message if error else "Bad request")


@router.get("/health", response_model=HealthResponse)
def health(layers: Layers) -> dict[str, Any]:
    return {"status": "ok", "store": layers.store_status(), "version": __version__}


@router.get("/layers", response_model=CatalogResponse)
def list_layers(layers: Layers) -> dict[str, Any]:
    return unwrap(layers.list_layers())


@router.get("/layer/{layer_id}", response_model=LayerDataResponse)
def layer_data(
    layer_id: str,
    layers: Layers,
    region: Annotated[str | None, Query()] = None,
) -> dict[str, Any]:
    result = layers.layer_data(layer_id, region=region)
    data = unwrap(result)
    return {**data, "warnings": result.warnings}


@router.get("/layer/{layer_id}/timeseries", response_model=TimeseriesResponse)
def layer_timeseries(
    layer_id: str,
    layers: Layers,
    zone: Annotated[str, Query()],
    period: Annotated[str, Query()] = "yearly",
) -> dict[str, Any]:
    return unwrap(layers.timeseries(layer_id, zone, period=period))


@router.get("/zone/{zone_key}/summary", response_model=ZoneSummaryResponse)
def zone_summary(zone_key: str, layers: Layers) -> dict[str, Any]:
    return unwrap(layers.zone_summary(zone_key))


@router.get("/zone/{zone_key}/scores", response_model=ZoneScoresResponse)
def zone_scores(zone_key: str, layers: Layers) -> dict[str, Any]:
    return unwrap(layers.zone_scores(zone_key))


@router.get("/export/{layer_id}")
def export_layer(
    layer_id: str,
    exporter: Annotated[ExportService, Depends(get_export_service)],
    zone: Annotated[str | None, Query()] = None,
    region: Annotated[str | None, Query()] = None,
) -> Response:
    data = unwrap(exporter.export_csv(layer_id, zone=zone, region=region))
    return Response(
        content=data["content"],
        media_type=data["media_type"],
        headers={"Content-Disposition": f'attachment; filename="{data["filename"]}"'},
    )
