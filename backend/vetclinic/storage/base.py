"""Module: storage.base.

Contract every entity store implements. Lookups signal a missing id by
returning None (or False for deletes); they never raise for "not found".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from vetclinic.schemas import (
    Analytic,
    AnalyticCreate,
    AnalyticUpdate,
    Appointment,
    AppointmentCreate,
    AppointmentUpdate,
    Patient,
    PatientCreate,
    PatientUpdate,
    Schedule,
    ScheduleCreate,
    ScheduleUpdate,
    Staff,
    StaffCreate,
    StaffUpdate,
    User,
    UserCreate,
)


def changes(payload: PatientUpdate | AppointmentUpdate | StaffUpdate | ScheduleUpdate | AnalyticUpdate) -> dict:
    # Only the fields the caller actually sent take part in a partial update.
    return payload.model_dump(exclude_unset=True)


class Storage(ABC):
    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, payload: UserCreate) -> User: ...

    # Patients
    @abstractmethod
    def get_patient(self, patient_id: int) -> Patient | None: ...

    @abstractmethod
    def get_patients(self) -> list[Patient]: ...

    @abstractmethod
    def create_patient(self, payload: PatientCreate) -> Patient: ...

    @abstractmethod
    def update_patient(self, patient_id: int, payload: PatientUpdate) -> Patient | None: ...

    @abstractmethod
    def delete_patient(self, patient_id: int) -> bool:
        """Delete a patient and, with it, every appointment that references it."""

    @abstractmethod
    def get_recent_patients(self, limit: int) -> list[Patient]:
        """
        Patients ordered by their most recent appointment, newest first.

        Each patient appears once; appointments pointing at patients that no
        longer exist are skipped.
        """

    # Appointments
    @abstractmethod
    def get_appointment(self, appointment_id: int) -> Appointment | None: ...

    @abstractmethod
    def get_appointments(self) -> list[Appointment]: ...

    @abstractmethod
    def get_appointments_by_date(self, day: datetime) -> list[Appointment]:
        """Appointments whose date falls on the same local calendar day as ``day``."""

    @abstractmethod
    def get_appointments_by_patient(self, patient_id: int) -> list[Appointment]: ...

    @abstractmethod
    def get_appointments_by_doctor(self, doctor_id: int) -> list[Appointment]: ...

    @abstractmethod
    def create_appointment(self, payload: AppointmentCreate) -> Appointment: ...

    @abstractmethod
    def update_appointment(self, appointment_id: int, payload: AppointmentUpdate) -> Appointment | None: ...

    @abstractmethod
    def delete_appointment(self, appointment_id: int) -> bool: ...

    # Staff
    @abstractmethod
    def get_staff(self, staff_id: int) -> Staff | None: ...

    @abstractmethod
    def get_all_staff(self) -> list[Staff]: ...

    @abstractmethod
    def create_staff(self, payload: StaffCreate) -> Staff: ...

    @abstractmethod
    def update_staff(self, staff_id: int, payload: StaffUpdate) -> Staff | None: ...

    @abstractmethod
    def delete_staff(self, staff_id: int) -> bool:
        """
        Delete a staff member together with their schedule blocks.

        Users linked to the member are kept but unlinked. Raises
        ReferenceConflictError while any appointment still names the member as
        its doctor.
        """

    # Schedules
    @abstractmethod
    def get_schedule(self, schedule_id: int) -> Schedule | None: ...

    @abstractmethod
    def get_schedules(self) -> list[Schedule]: ...

    @abstractmethod
    def get_schedules_by_staff(self, staff_id: int) -> list[Schedule]: ...

    @abstractmethod
    def get_schedules_by_date(self, day: datetime) -> list[Schedule]: ...

    @abstractmethod
    def create_schedule(self, payload: ScheduleCreate) -> Schedule: ...

    @abstractmethod
    def update_schedule(self, schedule_id: int, payload: ScheduleUpdate) -> Schedule | None: ...

    @abstractmethod
    def delete_schedule(self, schedule_id: int) -> bool: ...

    # Analytics
    @abstractmethod
    def get_analytic(self, analytic_id: int) -> Analytic | None: ...

    @abstractmethod
    def get_analytics(self) -> list[Analytic]: ...

    @abstractmethod
    def get_analytics_by_date(self, day: datetime) -> Analytic | None: ...

    @abstractmethod
    def create_analytic(self, payload: AnalyticCreate) -> Analytic: ...

    @abstractmethod
    def update_analytic(self, analytic_id: int, payload: AnalyticUpdate) -> Analytic | None: ...

    @abstractmethod
    def delete_analytic(self, analytic_id: int) -> bool: ...

    def is_empty(self) -> bool:
        return not (self.get_patients() or self.get_all_staff() or self.get_appointments())
