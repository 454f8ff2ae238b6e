"""
Daily analytics schemas.

One analytic record summarises a clinic day: appointment counts per type,
the check-in series for the current and previous period, revenue and the
average wait time in minutes.
"""

from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, field_validator, model_validator

from vetclinic.schemas.common import ContractModel, LocalDatetime, Number, RecordModel, reject_null


def reject_negative(value):
    if value is not None and value < 0:
        raise ValueError("must be greater than or equal to 0")
    return value


class CheckinSeries(BaseModel):
    """Two parallel series: check-ins this period vs. the previous one."""

    current: list[Number] = Field(default_factory=list)
    previous: list[Number] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_parallel(self) -> "CheckinSeries":
        if len(self.current) != len(self.previous):
            raise ValueError("current and previous must have the same length")
        return self


class AnalyticBase(ContractModel):
    date: LocalDatetime
    appointment_counts: dict[str, NonNegativeInt] = Field(
        ..., description="Appointment type name -> count"
    )
    checkins: CheckinSeries
    revenue: Optional[Number] = None
    wait_time: Optional[Number] = Field(None, description="Average wait in minutes")

    @field_validator("revenue", "wait_time")
    @classmethod
    def validate_non_negative(cls, value):
        return reject_negative(value)


class AnalyticCreate(AnalyticBase):
    pass


class AnalyticUpdate(ContractModel):
    date: Optional[LocalDatetime] = None
    appointment_counts: Optional[dict[str, NonNegativeInt]] = None
    checkins: Optional[CheckinSeries] = None
    revenue: Optional[Number] = None
    wait_time: Optional[Number] = None

    @field_validator("date", "appointment_counts", "checkins")
    @classmethod
    def validate_required_not_null(cls, value):
        return reject_null(value)

    @field_validator("revenue", "wait_time")
    @classmethod
    def validate_non_negative(cls, value):
        return reject_negative(value)


class Analytic(AnalyticBase, RecordModel):
    pass
