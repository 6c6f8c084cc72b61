"""Matching routes: ratio networks and voltage dividers from two series values."""

from fastapi import APIRouter, HTTPException, Request

from backend.diagnostics import engine_warnings
from backend.models import DividerRequest, MatchResponse, RatioRequest
from backend.routes.components import default_series
from eseries.exceptions import ESeriesError
from eseries.matching import match_divider, match_ratio

router = APIRouter()


@router.post("/match/ratio", response_model=MatchResponse)
async def match_ratio_endpoint(body: RatioRequest, request: Request):
    """Best R1/R2 pair for a target ratio R2/R1."""
    series = body.series if body.series is not None else default_series(request)
    try:
        with engine_warnings() as messages:
            result = match_ratio(body.ratio, body.r1, series, body.direction)
    except ESeriesError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MatchResponse.from_engine(result, body.top_n, messages)


@router.post("/match/divider", response_model=MatchResponse)
async def match_divider_endpoint(body: DividerRequest, request: Request):
    """Best resistor pair for a voltage divider."""
    series = body.series if body.series is not None else default_series(request)
    try:
        with engine_warnings() as messages:
            result = match_divider(body.v_in, body.v_out, body.r1, series, body.direction)
    except ESeriesError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MatchResponse.from_engine(result, body.top_n, messages)
