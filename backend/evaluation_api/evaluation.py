from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidInput, InvalidRating, MissingField, MissingInstructor, Result

KEY_FIELDS = ("center", "week", "day", "period")
INSTRUCTOR_FIELDS = ("instructor1", "instructor2")
RATING_FIELDS = ("clarity", "preparation", "interaction", "punctuality", "satisfaction")
RATING_MIN = 1
RATING_MAX = 5

EVALUATION_HEADER = [
    "Timestamp",
    "Center",
    "Week",
    "Day",
    "Period",
    "Instructor1",
    "Instructor2",
    "Clarity",
    "Preparation",
    "Interaction",
    "Punctuality",
    "Satisfaction",
    "Comment",
]

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)", re.ASCII)


class EvaluationRecord(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)
    center: str
    week: str
    day: str
    period: str
    instructor1: str = ""
    instructor2: str = ""
    clarity: int = Field(ge=RATING_MIN, le=RATING_MAX)
    preparation: int = Field(ge=RATING_MIN, le=RATING_MAX)
    interaction: int = Field(ge=RATING_MIN, le=RATING_MAX)
    punctuality: int = Field(ge=RATING_MIN, le=RATING_MAX)
    satisfaction: int = Field(ge=RATING_MIN, le=RATING_MAX)
    comment: str = ""


def parse_leading_int(value: Any) -> Optional[int]:
    """Read the integer prefix of `value` the way a lenient form parser does: "5abc" -> 5, "abc" -> None."""
    if value is None or isinstance(value, bool):
        return None
    m = _LEADING_INT.match(str(value))
    if not m:
        return None
    try:
        return int(m.group(1))
    except ValueError:
        return None


def validate_evaluation(payload: Mapping[str, Any]) -> Result[EvaluationRecord]:
    for field in KEY_FIELDS:
        if not payload.get(field):
            return Result.fail(MissingField(field))

    if not any(payload.get(field) for field in INSTRUCTOR_FIELDS):
        return Result.fail(MissingInstructor())

    ratings = {}
    for field in RATING_FIELDS:
        rating = parse_leading_int(payload.get(field))
        if rating is None or rating < RATING_MIN or rating > RATING_MAX:
            return Result.fail(InvalidRating(field))
        ratings[field] = rating

    try:
        record = EvaluationRecord(
            **{field: payload[field] for field in KEY_FIELDS},
            **{field: payload.get(field) or "" for field in INSTRUCTOR_FIELDS},
            **ratings,
            comment=payload.get("comment") or "",
        )
    except ValidationError as exc:
        return Result.fail(InvalidInput(f"Invalid evaluation payload: {exc.errors()[0]['loc'][0]} {exc.errors()[0]['msg']}"))
    return Result.succeed(record)


def format_timestamp(moment: datetime, timezone_name: str) -> str:
    return moment.astimezone(ZoneInfo(timezone_name)).strftime(TIMESTAMP_FORMAT)


def evaluation_row(record: EvaluationRecord, timestamp: str) -> list:
    return [
        timestamp,
        record.center,
        record.week,
        record.day,
        record.period,
        record.instructor1,
        record.instructor2,
        record.clarity,
        record.preparation,
        record.interaction,
        record.punctuality,
        record.satisfaction,
        record.comment,
    ]
