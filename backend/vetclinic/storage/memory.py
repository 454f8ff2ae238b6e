"""Module: storage.memory.

In-process entity store. Each entity type lives in its own table: a dict
keyed by id plus a counter that only ever moves forward, so ids are never
reused after a delete. Data is lost when the process exits.
"""

from __future__ import annotations

import functools
import itertools
import logging
import threading
from datetime import datetime
from typing import Any, Callable, Generic, TypeVar

from vetclinic.core.dates import end_of_day, same_day, start_of_day
from vetclinic.core.exceptions import DuplicateUsernameError, ReferenceConflictError
from vetclinic.core.security import hash_password
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
from vetclinic.schemas.common import RecordModel
from vetclinic.storage.base import Storage, changes

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=RecordModel)


def _detached(record: RecordT) -> RecordT:
    # Frozen models still carry mutable dicts and lists; callers get their own copy.
    return record.model_copy(deep=True)


class _Table(Generic[RecordT]):
    def __init__(self, record_type: type[RecordT]):
        self.record_type = record_type
        self._rows: dict[int, RecordT] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, record_id: int) -> RecordT | None:
        row = self._rows.get(record_id)
        return _detached(row) if row is not None else None

    def all(self) -> list[RecordT]:
        return [_detached(row) for row in self._rows.values()]

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [_detached(row) for row in self._rows.values() if predicate(row)]

    def insert(self, fields: dict[str, Any]) -> RecordT:
        record = self.record_type.model_validate({**fields, "id": next(self._ids)})
        self._rows[record.id] = record
        return _detached(record)

    def update(self, record_id: int, fields: dict[str, Any]) -> RecordT | None:
        current = self._rows.get(record_id)
        if current is None:
            return None
        # Shallow merge; records are frozen so a new one replaces the old.
        record = self.record_type.model_validate({**dict(current), **fields, "id": record_id})
        self._rows[record_id] = record
        return _detached(record)

    def delete(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None


def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class MemStorage(Storage):
    """Entity store backed by plain dicts, guarded by one re-entrant lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: _Table[User] = _Table(User)
        self._patients: _Table[Patient] = _Table(Patient)
        self._appointments: _Table[Appointment] = _Table(Appointment)
        self._staff: _Table[Staff] = _Table(Staff)
        self._schedules: _Table[Schedule] = _Table(Schedule)
        self._analytics: _Table[Analytic] = _Table(Analytic)

    # -------------------------
    # Users
    # -------------------------
    @_locked
    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    @_locked
    def get_user_by_username(self, username: str) -> User | None:
        matches = self._users.filter(lambda u: u.username == username)
        return matches[0] if matches else None

    @_locked
    def create_user(self, payload: UserCreate) -> User:
        if self.get_user_by_username(payload.username):
            raise DuplicateUsernameError(
                "Username already registered", details={"username": payload.username}
            )
        user = self._users.insert(
            {
                "username": payload.username,
                "password_hash": hash_password(payload.password),
                "staff_id": payload.staff_id,
            }
        )
        logger.debug("Created user %s (%s)", user.id, user.username)
        return user

    # -------------------------
    # Patients
    # -------------------------
    @_locked
    def get_patient(self, patient_id: int) -> Patient | None:
        return self._patients.get(patient_id)

    @_locked
    def get_patients(self) -> list[Patient]:
        return self._patients.all()

    @_locked
    def create_patient(self, payload: PatientCreate) -> Patient:
        patient = self._patients.insert(payload.model_dump())
        logger.debug("Created patient %s", patient.id)
        return patient

    @_locked
    def update_patient(self, patient_id: int, payload: PatientUpdate) -> Patient | None:
        return self._patients.update(patient_id, changes(payload))

    @_locked
    def delete_patient(self, patient_id: int) -> bool:
        if not self._patients.delete(patient_id):
            return False
        orphaned = self._appointments.filter(lambda a: a.patient_id == patient_id)
        for appointment in orphaned:
            self._appointments.delete(appointment.id)
        logger.debug("Deleted patient %s and %d appointment(s)", patient_id, len(orphaned))
        return True

    @_locked
    def get_recent_patients(self, limit: int) -> list[Patient]:
        ordered = sorted(self._appointments.all(), key=lambda a: a.date, reverse=True)
        # dict keeps first-seen order, i.e. most recent appointment first.
        patient_ids = dict.fromkeys(a.patient_id for a in ordered)
        patients = [self._patients.get(pid) for pid in patient_ids]
        return [p for p in patients if p is not None][: max(limit, 0)]

    # -------------------------
    # Appointments
    # -------------------------
    @_locked
    def get_appointment(self, appointment_id: int) -> Appointment | None:
        return self._appointments.get(appointment_id)

    @_locked
    def get_appointments(self) -> list[Appointment]:
        return self._appointments.all()

    @_locked
    def get_appointments_by_date(self, day: datetime) -> list[Appointment]:
        start, end = start_of_day(day), end_of_day(day)
        return self._appointments.filter(lambda a: start <= a.date <= end)

    @_locked
    def get_appointments_by_patient(self, patient_id: int) -> list[Appointment]:
        return self._appointments.filter(lambda a: a.patient_id == patient_id)

    @_locked
    def get_appointments_by_doctor(self, doctor_id: int) -> list[Appointment]:
        return self._appointments.filter(lambda a: a.doctor_id == doctor_id)

    @_locked
    def create_appointment(self, payload: AppointmentCreate) -> Appointment:
        appointment = self._appointments.insert(payload.model_dump())
        logger.debug("Created appointment %s", appointment.id)
        return appointment

    @_locked
    def update_appointment(self, appointment_id: int, payload: AppointmentUpdate) -> Appointment | None:
        return self._appointments.update(appointment_id, changes(payload))

    @_locked
    def delete_appointment(self, appointment_id: int) -> bool:
        return self._appointments.delete(appointment_id)

    # -------------------------
    # Staff
    # -------------------------
    @_locked
    def get_staff(self, staff_id: int) -> Staff | None:
        return self._staff.get(staff_id)

    @_locked
    def get_all_staff(self) -> list[Staff]:
        return self._staff.all()

    @_locked
    def create_staff(self, payload: StaffCreate) -> Staff:
        member = self._staff.insert(payload.model_dump())
        logger.debug("Created staff member %s", member.id)
        return member

    @_locked
    def update_staff(self, staff_id: int, payload: StaffUpdate) -> Staff | None:
        return self._staff.update(staff_id, changes(payload))

    @_locked
    def delete_staff(self, staff_id: int) -> bool:
        if self._staff.get(staff_id) is None:
            return False

        booked = self._appointments.filter(lambda a: a.doctor_id == staff_id)
        if booked:
            raise ReferenceConflictError(
                "Staff member still has appointments",
                details={"staff_id": staff_id, "appointment_ids": [a.id for a in booked]},
            )

        self._staff.delete(staff_id)
        for schedule in self._schedules.filter(lambda s: s.staff_id == staff_id):
            self._schedules.delete(schedule.id)
        for user in self._users.filter(lambda u: u.staff_id == staff_id):
            self._users.update(user.id, {"staff_id": None})
        logger.debug("Deleted staff member %s", staff_id)
        return True

    # -------------------------
    # Schedules
    # -------------------------
    @_locked
    def get_schedule(self, schedule_id: int) -> Schedule | None:
        return self._schedules.get(schedule_id)

    @_locked
    def get_schedules(self) -> list[Schedule]:
        return self._schedules.all()

    @_locked
    def get_schedules_by_staff(self, staff_id: int) -> list[Schedule]:
        return self._schedules.filter(lambda s: s.staff_id == staff_id)

    @_locked
    def get_schedules_by_date(self, day: datetime) -> list[Schedule]:
        start, end = start_of_day(day), end_of_day(day)
        return self._schedules.filter(lambda s: start <= s.date <= end)

    @_locked
    def create_schedule(self, payload: ScheduleCreate) -> Schedule:
        schedule = self._schedules.insert(payload.model_dump())
        logger.debug("Created schedule %s", schedule.id)
        return schedule

    @_locked
    def update_schedule(self, schedule_id: int, payload: ScheduleUpdate) -> Schedule | None:
        return self._schedules.update(schedule_id, changes(payload))

    @_locked
    def delete_schedule(self, schedule_id: int) -> bool:
        return self._schedules.delete(schedule_id)

    # -------------------------
    # Analytics
    # -------------------------
    @_locked
    def get_analytic(self, analytic_id: int) -> Analytic | None:
        return self._analytics.get(analytic_id)

    @_locked
    def get_analytics(self) -> list[Analytic]:
        return self._analytics.all()

    @_locked
    def get_analytics_by_date(self, day: datetime) -> Analytic | None:
        matches = self._analytics.filter(lambda a: same_day(a.date, day))
        return matches[0] if matches else None

    @_locked
    def create_analytic(self, payload: AnalyticCreate) -> Analytic:
        analytic = self._analytics.insert(payload.model_dump())
        logger.debug("Created analytic %s for %s", analytic.id, analytic.date.date())
        return analytic

    @_locked
    def update_analytic(self, analytic_id: int, payload: AnalyticUpdate) -> Analytic | None:
        return self._analytics.update(analytic_id, changes(payload))

    @_locked
    def delete_analytic(self, analytic_id: int) -> bool:
        return self._analytics.delete(analytic_id)
