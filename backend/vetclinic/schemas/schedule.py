"""
Staff schedule schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from vetclinic.schemas.common import MAX_ID, ContractModel, LocalDatetime, RecordModel, reject_null


class ActivityType(str, Enum):
    APPOINTMENTS = "appointments"
    MEETING = "meeting"
    SURGERY = "surgery"
    BREAK = "break"
    OTHER = "other"


def check_time_window(start_time: datetime | None, end_time: datetime | None) -> None:
    if start_time is not None and end_time is not None and start_time > end_time:
        raise ValueError("start_time must be on or before end_time")


class ScheduleBase(ContractModel):
    """Fields shared by schedule payloads and stored schedule blocks."""

    staff_id: int = Field(..., ge=1, le=MAX_ID)
    date: LocalDatetime = Field(..., description="Calendar day the block belongs to")
    start_time: LocalDatetime
    end_time: LocalDatetime
    activity_type: ActivityType
    description: Optional[str] = None


class ScheduleCreate(ScheduleBase):
    @model_validator(mode="after")
    def validate_time_window(self) -> "ScheduleCreate":
        check_time_window(self.start_time, self.end_time)
        return self


class ScheduleUpdate(ContractModel):
    staff_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    date: Optional[LocalDatetime] = None
    start_time: Optional[LocalDatetime] = None
    end_time: Optional[LocalDatetime] = None
    activity_type: Optional[ActivityType] = None
    description: Optional[str] = None

    @field_validator("staff_id", "date", "start_time", "end_time", "activity_type")
    @classmethod
    def validate_required_not_null(cls, value):
        return reject_null(value)

    @model_validator(mode="after")
    def validate_time_window(self) -> "ScheduleUpdate":
        # Only checkable here when both ends are in the payload; the route
        # re-checks against the stored record otherwise.
        check_time_window(self.start_time, self.end_time)
        return self


class Schedule(ScheduleBase, RecordModel):
    pass
