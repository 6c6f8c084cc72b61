"""Fan controller routes: MAX31740 dimensioning from a thermistor curve."""

from fastapi import APIRouter, HTTPException

from backend.models import Max31740Request, Max31740Response
from eseries.exceptions import ESeriesError
from eseries.fan_controller import design_max31740
from eseries.thermistor import ThermistorCurve

router = APIRouter()


@router.post("/fan-controller/max31740", response_model=Max31740Response)
async def design_max31740_endpoint(body: Max31740Request):
    """Dimension the MAX31740 capacitors and resistors with standard values."""
    try:
        curve = ThermistorCurve(
            [p.temperature for p in body.curve],
            [p.resistance for p in body.curve],
        )
        design = design_max31740(
            curve,
            f_sw_high=body.f_sw_high,
            f_sw_low=body.f_sw_low,
            temp_start=body.temp_start,
            temp_full=body.temp_full,
            resistor_series=body.resistor_series,
            capacitor_series=body.capacitor_series,
        )
    except ESeriesError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Max31740Response(
        c_f1=design.c_f1,
        c_f2=design.c_f2,
        r_st=design.r_st,
        r_slope=design.r_slope,
        f_sw_high=design.f_sw_high,
        f_sw_low=design.f_sw_low,
        temp_start=design.temp_start,
        temp_full=design.temp_full,
        components=design.components(),
        operating_parameters=design.operating_parameters(),
    )
