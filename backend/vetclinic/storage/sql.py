"""Module: storage.sql.

SQLAlchemy-backed entity store. Every public method runs in its own session
and transaction, so each single-entity read or write is atomic; nothing spans
more than one call.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, TypeVar

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from vetclinic.core.dates import end_of_day, start_of_day
from vetclinic.core.exceptions import DuplicateUsernameError, ReferenceConflictError
from vetclinic.core.security import hash_password
from vetclinic.db.base import Base
from vetclinic.db.models import AnalyticRow, AppointmentRow, PatientRow, ScheduleRow, StaffRow, UserRow
from vetclinic.db.session import build_engine, build_session_factory
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
from vetclinic.schemas.common import MAX_ID, RecordModel
from vetclinic.storage.base import Storage, changes

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=RecordModel)


def _in_range(record_id: int) -> bool:
    # SQLite cannot bind integers outside the signed 64-bit range; no row can carry such an id.
    return 0 < record_id <= MAX_ID


class SqlStorage(Storage):
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStorage":
        engine = build_engine(database_url)
        Base.metadata.create_all(bind=engine)
        logger.info("SQL storage ready on %s", engine.url.render_as_string(hide_password=True))
        return cls(build_session_factory(engine))

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        with self._session_factory() as db, db.begin():
            yield db

    # -------------------------
    # Helpers
    # -------------------------
    def _get(self, row_type, record_type: type[RecordT], record_id: int) -> RecordT | None:
        if not _in_range(record_id):
            return None
        with self._transaction() as db:
            row = db.get(row_type, record_id)
            return record_type.model_validate(row) if row is not None else None

    def _list(self, row_type, record_type: type[RecordT], *criteria) -> list[RecordT]:
        stmt = select(row_type)
        if criteria:
            stmt = stmt.where(*criteria)
        with self._transaction() as db:
            rows = db.execute(stmt.order_by(row_type.id)).scalars().all()
            return [record_type.model_validate(row) for row in rows]

    def _insert(self, row_type, record_type: type[RecordT], fields: dict[str, Any]) -> RecordT:
        with self._transaction() as db:
            row = row_type(**fields)
            db.add(row)
            db.flush()
            return record_type.model_validate(row)

    def _update(self, row_type, record_type: type[RecordT], record_id: int, fields: dict[str, Any]) -> RecordT | None:
        if not _in_range(record_id):
            return None
        with self._transaction() as db:
            row = db.get(row_type, record_id)
            if row is None:
                return None
            for name, value in fields.items():
                setattr(row, name, value)
            db.flush()
            return record_type.model_validate(row)

    def _delete(self, row_type, record_id: int) -> bool:
        if not _in_range(record_id):
            return False
        with self._transaction() as db:
            row = db.get(row_type, record_id)
            if row is None:
                return False
            db.delete(row)
            return True

    # -------------------------
    # Users
    # -------------------------
    def get_user(self, user_id: int) -> User | None:
        return self._get(UserRow, User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        users = self._list(UserRow, User, UserRow.username == username)
        return users[0] if users else None

    def create_user(self, payload: UserCreate) -> User:
        if self.get_user_by_username(payload.username):
            raise DuplicateUsernameError(
                "Username already registered", details={"username": payload.username}
            )
        fields = {
            "username": payload.username,
            "password_hash": hash_password(payload.password),
            "staff_id": payload.staff_id,
        }
        try:
            return self._insert(UserRow, User, fields)
        except IntegrityError as exc:
            # Lost a race against a concurrent insert of the same username.
            raise DuplicateUsernameError(
                "Username already registered", details={"username": payload.username}
            ) from exc

    # -------------------------
    # Patients
    # -------------------------
    def get_patient(self, patient_id: int) -> Patient | None:
        return self._get(PatientRow, Patient, patient_id)

    def get_patients(self) -> list[Patient]:
        return self._list(PatientRow, Patient)

    def create_patient(self, payload: PatientCreate) -> Patient:
        return self._insert(PatientRow, Patient, payload.model_dump())

    def update_patient(self, patient_id: int, payload: PatientUpdate) -> Patient | None:
        return self._update(PatientRow, Patient, patient_id, changes(payload))

    def delete_patient(self, patient_id: int) -> bool:
        if not _in_range(patient_id):
            return False
        with self._transaction() as db:
            row = db.get(PatientRow, patient_id)
            if row is None:
                return False
            db.execute(delete(AppointmentRow).where(AppointmentRow.patient_id == patient_id))
            db.delete(row)
            return True

    def get_recent_patients(self, limit: int) -> list[Patient]:
        with self._transaction() as db:
            patient_ids = db.execute(
                select(AppointmentRow.patient_id).order_by(AppointmentRow.date.desc(), AppointmentRow.id)
            ).scalars().all()

            out: list[Patient] = []
            for pid in dict.fromkeys(patient_ids):
                if len(out) >= limit:
                    break
                row = db.get(PatientRow, pid)
                if row is not None:
                    out.append(Patient.model_validate(row))
            return out

    # -------------------------
    # Appointments
    # -------------------------
    def get_appointment(self, appointment_id: int) -> Appointment | None:
        return self._get(AppointmentRow, Appointment, appointment_id)

    def get_appointments(self) -> list[Appointment]:
        return self._list(AppointmentRow, Appointment)

    def get_appointments_by_date(self, day: datetime) -> list[Appointment]:
        return self._list(
            AppointmentRow,
            Appointment,
            AppointmentRow.date.between(start_of_day(day), end_of_day(day)),
        )

    def get_appointments_by_patient(self, patient_id: int) -> list[Appointment]:
        if not _in_range(patient_id):
            return []
        return self._list(AppointmentRow, Appointment, AppointmentRow.patient_id == patient_id)

    def get_appointments_by_doctor(self, doctor_id: int) -> list[Appointment]:
        if not _in_range(doctor_id):
            return []
        return self._list(AppointmentRow, Appointment, AppointmentRow.doctor_id == doctor_id)

    def create_appointment(self, payload: AppointmentCreate) -> Appointment:
        return self._insert(AppointmentRow, Appointment, payload.model_dump())

    def update_appointment(self, appointment_id: int, payload: AppointmentUpdate) -> Appointment | None:
        return self._update(AppointmentRow, Appointment, appointment_id, changes(payload))

    def delete_appointment(self, appointment_id: int) -> bool:
        return self._delete(AppointmentRow, appointment_id)

    # -------------------------
    # Staff
    # -------------------------
    def get_staff(self, staff_id: int) -> Staff | None:
        return self._get(StaffRow, Staff, staff_id)

    def get_all_staff(self) -> list[Staff]:
        return self._list(StaffRow, Staff)

    def create_staff(self, payload: StaffCreate) -> Staff:
        return self._insert(StaffRow, Staff, payload.model_dump())

    def update_staff(self, staff_id: int, payload: StaffUpdate) -> Staff | None:
        return self._update(StaffRow, Staff, staff_id, changes(payload))

    def delete_staff(self, staff_id: int) -> bool:
        if not _in_range(staff_id):
            return False
        with self._transaction() as db:
            row = db.get(StaffRow, staff_id)
            if row is None:
                return False

            booked = db.execute(
                select(exists().where(AppointmentRow.doctor_id == staff_id))
            ).scalar()
            if booked:
                appointment_ids = db.execute(
                    select(AppointmentRow.id).where(AppointmentRow.doctor_id == staff_id)
                ).scalars().all()
                raise ReferenceConflictError(
                    "Staff member still has appointments",
                    details={"staff_id": staff_id, "appointment_ids": list(appointment_ids)},
                )

            db.execute(delete(ScheduleRow).where(ScheduleRow.staff_id == staff_id))
            db.execute(update(UserRow).where(UserRow.staff_id == staff_id).values(staff_id=None))
            db.delete(row)
            return True

    # -------------------------
    # Schedules
    # -------------------------
    def get_schedule(self, schedule_id: int) -> Schedule | None:
        return self._get(ScheduleRow, Schedule, schedule_id)

    def get_schedules(self) -> list[Schedule]:
        return self._list(ScheduleRow, Schedule)

    def get_schedules_by_staff(self, staff_id: int) -> list[Schedule]:
        if not _in_range(staff_id):
            return []
        return self._list(ScheduleRow, Schedule, ScheduleRow.staff_id == staff_id)

    def get_schedules_by_date(self, day: datetime) -> list[Schedule]:
        return self._list(
            ScheduleRow,
            Schedule,
            ScheduleRow.date.between(start_of_day(day), end_of_day(day)),
        )

    def create_schedule(self, payload: ScheduleCreate) -> Schedule:
        return self._insert(ScheduleRow, Schedule, payload.model_dump())

    def update_schedule(self, schedule_id: int, payload: ScheduleUpdate) -> Schedule | None:
        return self._update(ScheduleRow, Schedule, schedule_id, changes(payload))

    def delete_schedule(self, schedule_id: int) -> bool:
        return self._delete(ScheduleRow, schedule_id)

    # -------------------------
    # Analytics
    # -------------------------
    def get_analytic(self, analytic_id: int) -> Analytic | None:
        return self._get(AnalyticRow, Analytic, analytic_id)

    def get_analytics(self) -> list[Analytic]:
        return self._list(AnalyticRow, Analytic)

    def get_analytics_by_date(self, day: datetime) -> Analytic | None:
        matches = self._list(
            AnalyticRow,
            Analytic,
            AnalyticRow.date.between(start_of_day(day), end_of_day(day)),
        )
        return matches[0] if matches else None

    def create_analytic(self, payload: AnalyticCreate) -> Analytic:
        return self._insert(AnalyticRow, Analytic, payload.model_dump())

    def update_analytic(self, analytic_id: int, payload: AnalyticUpdate) -> Analytic | None:
        return self._update(AnalyticRow, Analytic, analytic_id, changes(payload))

    def delete_analytic(self, analytic_id: int) -> bool:
        return self._delete(AnalyticRow, analytic_id)
