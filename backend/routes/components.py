"""Component routes: series tables and single value quantization."""

import math

from fastapi import APIRouter, HTTPException, Request

from backend.diagnostics import engine_warnings
from backend.models import (
    QuantizedValue,
    QuantizeRequest,
    QuantizeResponse,
    SeriesInfo,
    SeriesListResponse,
    SeriesValuesResponse,
    finite_or_none,
)
from eseries.exceptions import ESeriesError
from eseries.quantize import deviation_pct, parse_direction, quantize
from eseries.series import E_SERIES, SeriesName, parse_series
from eseries.units import engineering_notation

router = APIRouter()


def default_series(request: Request) -> str:
    return getattr(request.app.state, "default_series", SeriesName.E24.value)


@router.get("/series", response_model=SeriesListResponse)
async def list_series():
    """List the available E-series."""
    return SeriesListResponse(
        series=[SeriesInfo(name=name.value, values_per_decade=name.size) for name in SeriesName]
    )


@router.get("/series/{name}", response_model=SeriesValuesResponse)
async def get_series(name: str):
    """Normalized values of one series, 1.0 through 10.0."""
    try:
        series = parse_series(name)
    except ESeriesError:
        raise HTTPException(status_code=404, detail=f"Unknown E series '{name}'")
    return SeriesValuesResponse(name=series.value, values=list(E_SERIES[series]))


@router.post("/quantize", response_model=QuantizeResponse)
async def quantize_values(body: QuantizeRequest, request: Request):
    """Snap exact values onto a series."""
    targets = body.values if isinstance(body.values, list) else [body.values]
    if len(targets) > 10000:
        raise HTTPException(status_code=400, detail="Too many values. Maximum 10,000.")

    try:
        with engine_warnings() as messages:
            series = parse_series(body.series if body.series is not None else default_series(request))
            direction = parse_direction(body.direction)
            snapped = quantize(targets, series, direction)
    except ESeriesError as e:
        raise HTTPException(status_code=400, detail=str(e))

    values = []
    for target, actual in zip(targets, snapped.tolist()):
        error_pct = None
        if target > 0 and math.isfinite(target):
            error_pct = deviation_pct(actual, target)
        values.append(QuantizedValue(
            target=finite_or_none(target),
            actual=finite_or_none(actual),
            error_pct=error_pct,
            display=engineering_notation(actual, body.unit),
        ))

    return QuantizeResponse(
        series=series.value,
        direction=direction.value,
        values=values,
        warnings=messages,
    )
