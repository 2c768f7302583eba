"""
Conversion between flat instructor rows and the nested schedule lookup.

Flat rows are `[center, week, day, period, instructor1, instructor2]`; the nested form is
`center -> week -> day -> period -> InstructorSlot`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional, Sequence

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .errors import InvalidInput, Result


class InstructorSlot(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)
    instructor1: Optional[str] = ""
    instructor2: Optional[str] = ""


NestedSchedule = dict[str, dict[str, dict[str, dict[str, InstructorSlot]]]]
schedule_adapter = TypeAdapter(NestedSchedule)


class DecodedSchedule(NamedTuple):
    data: NestedSchedule
    record_count: int


def _cell_text(value: Any) -> str:
    return str(value) if value else ""


def decode(rows: Sequence[Sequence[Any]]) -> DecodedSchedule:
    result: NestedSchedule = {}
    for row in rows[1:]:
        cells = list(row[:6]) + [None] * (6 - len(row[:6]))
        center, week, day, period, instructor1, instructor2 = cells
        if not center or not week or not day or not period:
            continue
        periods = result.setdefault(str(center), {}).setdefault(str(week), {}).setdefault(str(day), {})
        periods[str(period)] = InstructorSlot(instructor1=_cell_text(instructor1), instructor2=_cell_text(instructor2))
    return DecodedSchedule(data=result, record_count=max(len(rows) - 1, 0))


def encode(schedule: NestedSchedule) -> list[list[str]]:
    rows = []
    for center, weeks in schedule.items():
        for week, days in weeks.items():
            for day, periods in days.items():
                for period, slot in periods.items():
                    rows.append([center, week, day, period, slot.instructor1 or "", slot.instructor2 or ""])
    return rows


def parse_schedule(payload: Any) -> Result[NestedSchedule]:
    if payload is None or not isinstance(payload, Mapping):
        return Result.fail(InvalidInput("Invalid instructorsMap provided"))
    try:
        return Result.succeed(schedule_adapter.validate_python(payload))
    except ValidationError as exc:
        return Result.fail(InvalidInput(f"Invalid instructorsMap provided: {exc.error_count()} invalid entries ({exc.errors()[0]['msg']})"))


def dump_schedule(schedule: NestedSchedule) -> dict:
    return schedule_adapter.dump_python(schedule)
