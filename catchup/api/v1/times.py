from fastapi import APIRouter, HTTPException, Query

from catchup.api.v1.schemas import FormattedTimeSchema, TimeOptionsSchema, TimeValidationSchema
from catchup.application.utils.time_format import (
    TimeFormat,
    format_time,
    generate_time_options,
    get_time_input_type,
    is_valid_time_format,
    parse_time,
    resolve_time_format,
)
from catchup.core.config import settings

router = APIRouter()


def _preference(preference: TimeFormat | None) -> TimeFormat:
    return preference or resolve_time_format(settings.DEFAULT_TIME_FORMAT)


@router.get("/times/format", response_model=FormattedTimeSchema)
def format_time_value(time: str, preference: TimeFormat | None = None):
    return FormattedTimeSchema(
        time=time,
        formatted=format_time(time, _preference(preference)),
        recognized=parse_time(time).recognized,
    )


@router.get("/times/options", response_model=TimeOptionsSchema)
def time_options(
    preference: TimeFormat | None = None,
    start_hour: int = Query(0),
    end_hour: int = Query(23),
    interval_minutes: int = Query(30),
):
    resolved = _preference(preference)
    try:
        options = generate_time_options(resolved, start_hour, end_hour, interval_minutes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return TimeOptionsSchema(preference=resolved, options=options)


@router.get("/times/validate", response_model=TimeValidationSchema)
def validate_time(time: str, preference: TimeFormat | None = None):
    resolved = _preference(preference)
    return TimeValidationSchema(
        time=time,
        preference=resolved,
        valid=is_valid_time_format(time, resolved),
        input_type=get_time_input_type(resolved),
    )
