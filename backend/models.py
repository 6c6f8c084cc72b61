"""Pydantic models for the E-series API requests and responses."""

from __future__ import annotations

import math
from typing import Optional, Union

from pydantic import BaseModel, Field

from eseries.matching import MatchCandidate, MatchResult
from eseries.units import engineering_notation


def finite_or_none(value: float) -> Optional[float]:
    """JSON has no infinity: open circuits are sent as null."""
    return value if math.isfinite(value) else None


# --- Series ---

class SeriesInfo(BaseModel):
    name: str
    values_per_decade: int


class SeriesListResponse(BaseModel):
    series: list[SeriesInfo]


class SeriesValuesResponse(BaseModel):
    name: str
    values: list[float]


# --- Quantization ---

class QuantizeRequest(BaseModel):
    values: Union[float, list[float]] = Field(..., description="Exact value or list of exact values")
    series: Optional[Union[str, int]] = Field(None, description="E-series, e.g. 'E24' (server default if omitted)")
    direction: str = Field("nearest", description="nearest, up or down")
    unit: str = Field("", max_length=8, description="Unit appended to display strings")


class QuantizedValue(BaseModel):
    target: Optional[float]
    actual: Optional[float] = Field(..., description="Standard value, null for infinity")
    error_pct: Optional[float] = None
    display: str


class QuantizeResponse(BaseModel):
    series: str
    direction: str
    values: list[QuantizedValue]
    warnings: list[str] = []


# --- Matching ---

class RatioRequest(BaseModel):
    ratio: float = Field(..., description="Desired ratio R2/R1")
    r1: Union[float, list[float]] = Field(..., description="R1 value or [min, max] range")
    series: Optional[Union[str, int]] = None
    direction: str = "nearest"
    top_n: int = Field(10, ge=1, le=500, description="Number of ranked candidates to return")


class DividerRequest(BaseModel):
    v_in: float = Field(..., description="Divider input voltage (V)")
    v_out: float = Field(..., description="Desired output voltage (V)")
    r1: Union[float, list[float]] = Field(..., description="Input side resistor value or [min, max] range")
    series: Optional[Union[str, int]] = None
    direction: str = "nearest"
    top_n: int = Field(10, ge=1, le=500)


class Candidate(BaseModel):
    r1: Optional[float] = Field(..., description="Null for an open circuit")
    r2: Optional[float] = Field(..., description="Null for an open circuit")
    achieved: float
    error: float
    r1_display: str
    r2_display: str

    @classmethod
    def from_engine(cls, candidate: MatchCandidate, unit: str = 'Ω') -> 'Candidate':
        return cls(
            r1=finite_or_none(candidate.r1),
            r2=finite_or_none(candidate.r2),
            achieved=candidate.achieved,
            error=candidate.error,
            r1_display=engineering_notation(candidate.r1, unit),
            r2_display=engineering_notation(candidate.r2, unit),
        )


class MatchResponse(BaseModel):
    series: str
    direction: str
    target: Optional[float] = Field(..., description="Null for an infinite ratio")
    best: Candidate
    ranked: list[Candidate]
    total_candidates: int
    warnings: list[str] = []

    @classmethod
    def from_engine(cls, result: MatchResult, top_n: int, warnings: list[str]) -> 'MatchResponse':
        return cls(
            series=result.series.value,
            direction=result.direction.value,
            target=finite_or_none(result.target),
            best=Candidate.from_engine(result.best),
            ranked=[Candidate.from_engine(c) for c in result.top(top_n)],
            total_candidates=len(result.ranked),
            warnings=warnings,
        )


# --- Fan controller ---

class CurvePoint(BaseModel):
    temperature: float = Field(..., description="Temperature (°C)")
    resistance: float = Field(..., gt=0, description="Resistance (Ohms)")


class Max31740Request(BaseModel):
    curve: list[CurvePoint] = Field(..., min_length=2, max_length=2000)
    f_sw_high: float = Field(25e3, gt=0, description="High PWM switching frequency (Hz)")
    f_sw_low: float = Field(33.0, gt=0, description="Low PWM switching frequency (Hz)")
    temp_start: float = Field(30.0, description="Fan start temperature (°C)")
    temp_full: float = Field(40.0, description="Full speed temperature (°C)")
    resistor_series: Union[str, int] = "E24"
    capacitor_series: Union[str, int] = "E6"


class Max31740Response(BaseModel):
    c_f1: float
    c_f2: float
    r_st: float
    r_slope: float
    f_sw_high: float
    f_sw_low: float
    temp_start: float
    temp_full: float
    components: dict[str, str]
    operating_parameters: dict[str, str]
