"""
Appointment schemas for API validation and serialization.

This module contains the appointment type/status enumerations together with
the create, partial-update, status-change and record schemas.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from vetclinic.schemas.common import MAX_ID, ContractModel, LocalDatetime, RecordModel, reject_null


class AppointmentStatus(str, Enum):
    """Lifecycle of an appointment on the flowboard."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELED = "canceled"


class AppointmentType(str, Enum):
    """Kind of visit being booked."""

    CHECKUP = "checkup"
    VACCINATION = "vaccination"
    SURGERY = "surgery"
    DENTAL = "dental"
    GROOMING = "grooming"
    FOLLOW_UP = "follow_up"
    OTHER = "other"


class AppointmentBase(ContractModel):
    """Fields shared by appointment payloads and stored appointments."""

    patient_id: int = Field(..., ge=1, le=MAX_ID, description="Patient being seen")
    doctor_id: int = Field(..., ge=1, le=MAX_ID, description="Staff member running the appointment")
    date: LocalDatetime = Field(..., description="Scheduled date and time")
    type: AppointmentType = Field(..., description="Type of visit")
    status: AppointmentStatus = Field(
        AppointmentStatus.SCHEDULED, validate_default=True, description="Current flowboard status"
    )
    notes: Optional[str] = Field(None, description="Free-text notes")


class AppointmentCreate(AppointmentBase):
    pass


class AppointmentUpdate(ContractModel):
    """Partial appointment update; omitted fields are left untouched."""

    patient_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    doctor_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    date: Optional[LocalDatetime] = None
    type: Optional[AppointmentType] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    @field_validator("patient_id", "doctor_id", "date", "type", "status")
    @classmethod
    def validate_required_not_null(cls, value):
        return reject_null(value)


class AppointmentStatusUpdate(ContractModel):
    """Body of ``PATCH /appointments/{id}/status``."""

    status: AppointmentStatus


class Appointment(AppointmentBase, RecordModel):
    pass
