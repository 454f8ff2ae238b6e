"""
Behaviour shared by every entity store.

Each test runs against both the in-memory store and the SQL store.
"""

from datetime import datetime, timedelta

import pytest

from factories import (
    analytic_payload,
    appointment_payload,
    patient_payload,
    schedule_payload,
    staff_payload,
)
from vetclinic.core.exceptions import DuplicateUsernameError, ReferenceConflictError
from vetclinic.core.security import verify_password
from vetclinic.schemas import (
    AnalyticUpdate,
    AppointmentCreate,
    AppointmentUpdate,
    PatientUpdate,
    ScheduleUpdate,
    StaffUpdate,
    UserCreate,
)

DAY = datetime(2024, 3, 15, 12, 0)


class TestIdentifiers:
    """Ids start at 1, increase by one and are never reused."""

    def test_ids_are_sequential_per_entity(self, storage):
        first = storage.create_patient(patient_payload(name="Max"))
        second = storage.create_patient(patient_payload(name="Luna"))
        vet = storage.create_staff(staff_payload())

        assert (first.id, second.id) == (1, 2)
        assert vet.id == 1

    def test_ids_not_reused_after_delete(self, storage):
        storage.create_patient(patient_payload(name="Max"))
        doomed = storage.create_patient(patient_payload(name="Luna"))
        assert storage.delete_patient(doomed.id) is True

        replacement = storage.create_patient(patient_payload(name="Rocky"))

        assert replacement.id == 3
        assert storage.get_patient(2) is None


class TestPatients:
    def test_create_and_get(self, storage):
        created = storage.create_patient(patient_payload())

        fetched = storage.get_patient(created.id)

        assert fetched == created
        assert fetched.name == "Max"
        assert fetched.owner_email is None

    def test_get_missing_returns_none(self, storage):
        assert storage.get_patient(42) is None

    def test_list_in_creation_order(self, storage):
        for name in ("Max", "Luna", "Rocky"):
            storage.create_patient(patient_payload(name=name))

        assert [p.name for p in storage.get_patients()] == ["Max", "Luna", "Rocky"]

    def test_partial_update_keeps_other_fields(self, storage):
        created = storage.create_patient(patient_payload())

        updated = storage.update_patient(created.id, PatientUpdate(age=6))

        assert updated.age == 6
        assert updated.name == created.name
        assert updated.owner_phone == created.owner_phone
        assert storage.get_patient(created.id).age == 6

    def test_update_can_clear_optional_field(self, storage):
        created = storage.create_patient(patient_payload(breed="Beagle"))

        updated = storage.update_patient(created.id, PatientUpdate(breed=None))

        assert updated.breed is None
        assert updated.species == "Dog"

    def test_update_missing_returns_none(self, storage):
        assert storage.update_patient(7, PatientUpdate(age=3)) is None

    def test_delete_is_not_repeatable(self, storage):
        created = storage.create_patient(patient_payload())

        assert storage.delete_patient(created.id) is True
        assert storage.delete_patient(created.id) is False
        assert storage.get_patient(created.id) is None

    def test_failed_delete_leaves_collection_alone(self, storage):
        storage.create_patient(patient_payload(name="Max"))
        storage.create_patient(patient_payload(name="Luna"))

        assert storage.delete_patient(42) is False

        assert [p.name for p in storage.get_patients()] == ["Max", "Luna"]

    def test_delete_removes_patient_appointments(self, storage):
        vet = storage.create_staff(staff_payload())
        max_ = storage.create_patient(patient_payload(name="Max"))
        luna = storage.create_patient(patient_payload(name="Luna"))
        storage.create_appointment(appointment_payload(max_.id, vet.id, DAY))
        kept = storage.create_appointment(appointment_payload(luna.id, vet.id, DAY))

        storage.delete_patient(max_.id)

        assert storage.get_appointments_by_patient(max_.id) == []
        assert [a.id for a in storage.get_appointments()] == [kept.id]


class TestRecentPatients:
    def test_ordered_by_latest_appointment(self, storage):
        vet = storage.create_staff(staff_payload())
        p1 = storage.create_patient(patient_payload(name="Max"))
        p2 = storage.create_patient(patient_payload(name="Luna"))
        storage.create_appointment(appointment_payload(p1.id, vet.id, DAY))
        storage.create_appointment(appointment_payload(p2.id, vet.id, DAY + timedelta(hours=1)))
        storage.create_appointment(appointment_payload(p1.id, vet.id, DAY + timedelta(hours=2)))

        recent = storage.get_recent_patients(2)

        # Max's latest visit is the newest, and he is listed once.
        assert [p.id for p in recent] == [p1.id, p2.id]

    def test_limit_truncates(self, storage):
        vet = storage.create_staff(staff_payload())
        for hour in range(4):
            patient = storage.create_patient(patient_payload(name=f"Pet {hour}"))
            storage.create_appointment(appointment_payload(patient.id, vet.id, DAY + timedelta(hours=hour)))

        recent = storage.get_recent_patients(2)

        assert [p.name for p in recent] == ["Pet 3", "Pet 2"]

    def test_skips_appointments_for_unknown_patients(self, storage):
        vet = storage.create_staff(staff_payload())
        max_ = storage.create_patient(patient_payload(name="Max"))
        storage.create_appointment(appointment_payload(max_.id, vet.id, DAY))
        storage.create_appointment(appointment_payload(99, vet.id, DAY + timedelta(hours=1)))

        assert [p.id for p in storage.get_recent_patients(5)] == [max_.id]

    def test_patients_without_appointments_are_absent(self, storage):
        storage.create_patient(patient_payload())

        assert storage.get_recent_patients(5) == []


class TestAppointments:
    def test_defaults_to_scheduled(self, storage):
        payload = AppointmentCreate(patient_id=1, doctor_id=1, date=DAY, type="checkup")

        created = storage.create_appointment(payload)

        assert created.status == "scheduled"

    def test_by_date_covers_whole_local_day(self, storage):
        midnight = DAY.replace(hour=0, minute=0)
        inside = [
            midnight,
            midnight + timedelta(hours=9),
            midnight + timedelta(hours=23, minutes=59, seconds=59, milliseconds=999),
        ]
        outside = [midnight - timedelta(microseconds=1), midnight + timedelta(days=1)]
        for when in inside + outside:
            storage.create_appointment(appointment_payload(1, 1, when))

        found = storage.get_appointments_by_date(DAY)

        assert sorted(a.date for a in found) == inside

    def test_by_date_ignores_time_of_query(self, storage):
        storage.create_appointment(appointment_payload(1, 1, DAY.replace(hour=8)))

        assert len(storage.get_appointments_by_date(DAY.replace(hour=23, minute=30))) == 1

    def test_by_patient_and_doctor(self, storage):
        storage.create_appointment(appointment_payload(1, 1, DAY))
        storage.create_appointment(appointment_payload(1, 2, DAY))
        storage.create_appointment(appointment_payload(2, 2, DAY))

        assert len(storage.get_appointments_by_patient(1)) == 2
        assert len(storage.get_appointments_by_doctor(2)) == 2
        assert storage.get_appointments_by_doctor(3) == []

    def test_status_update_only_touches_status(self, storage):
        created = storage.create_appointment(appointment_payload(1, 1, DAY, notes="Annual checkup"))

        updated = storage.update_appointment(created.id, AppointmentUpdate(status="in_progress"))

        assert updated.status == "in_progress"
        assert updated.notes == "Annual checkup"
        assert updated.date == created.date

    def test_update_and_delete_missing(self, storage):
        assert storage.update_appointment(5, AppointmentUpdate(status="completed")) is None
        assert storage.delete_appointment(5) is False


class TestStaff:
    def test_update_keeps_other_fields(self, storage):
        vet = storage.create_staff(staff_payload())

        updated = storage.update_staff(vet.id, StaffUpdate(is_active=False))

        assert updated.is_active is False
        assert updated.role == vet.role

    def test_delete_refused_while_doctor_has_appointments(self, storage):
        vet = storage.create_staff(staff_payload())
        booked = storage.create_appointment(appointment_payload(1, vet.id, DAY))

        with pytest.raises(ReferenceConflictError) as exc_info:
            storage.delete_staff(vet.id)

        assert exc_info.value.status_code == 409
        assert exc_info.value.details["appointment_ids"] == [booked.id]
        assert storage.get_staff(vet.id) is not None

    def test_delete_cascades_schedules_and_unlinks_users(self, storage):
        vet = storage.create_staff(staff_payload())
        other = storage.create_staff(staff_payload(name="Dr. Marcus Chen"))
        storage.create_schedule(schedule_payload(vet.id, DAY))
        kept = storage.create_schedule(schedule_payload(other.id, DAY))
        user = storage.create_user(UserCreate(username="swilson", password="s3cret-pass", staff_id=vet.id))

        assert storage.delete_staff(vet.id) is True

        assert storage.get_staff(vet.id) is None
        assert [s.id for s in storage.get_schedules()] == [kept.id]
        assert storage.get_user(user.id).staff_id is None

    def test_delete_missing_returns_false(self, storage):
        assert storage.delete_staff(3) is False


class TestSchedules:
    def test_by_staff_and_date(self, storage):
        storage.create_schedule(schedule_payload(1, DAY))
        storage.create_schedule(schedule_payload(1, DAY + timedelta(days=1)))
        storage.create_schedule(schedule_payload(2, DAY))

        assert len(storage.get_schedules_by_staff(1)) == 2
        assert {s.staff_id for s in storage.get_schedules_by_date(DAY)} == {1, 2}

    def test_partial_update(self, storage):
        block = storage.create_schedule(schedule_payload(1, DAY))

        updated = storage.update_schedule(block.id, ScheduleUpdate(description="Staff Meeting"))

        assert updated.description == "Staff Meeting"
        assert updated.start_time == block.start_time
        assert updated.activity_type == "appointments"


class TestAnalytics:
    def test_by_date_matches_calendar_day(self, storage):
        storage.create_analytic(analytic_payload(DAY - timedelta(days=1)))
        today = storage.create_analytic(analytic_payload(DAY.replace(hour=0)))

        found = storage.get_analytics_by_date(DAY.replace(hour=18))

        assert found.id == today.id
        assert storage.get_analytics_by_date(DAY + timedelta(days=3)) is None

    def test_nested_fields_round_trip(self, storage):
        created = storage.create_analytic(analytic_payload(DAY))

        fetched = storage.get_analytic(created.id)

        assert fetched.appointment_counts == {"checkup": 35, "vaccination": 28}
        assert fetched.checkins.current == [14, 18, 16]
        assert fetched.revenue == 8320

    def test_partial_update(self, storage):
        created = storage.create_analytic(analytic_payload(DAY))

        updated = storage.update_analytic(created.id, AnalyticUpdate(wait_time=9))

        assert updated.wait_time == 9
        assert updated.revenue == 8320
        assert storage.delete_analytic(created.id) is True
        assert storage.get_analytics() == []


class TestUsers:
    def test_password_is_hashed(self, storage):
        user = storage.create_user(UserCreate(username="admin", password="admin123"))

        assert user.password_hash != "admin123"
        assert verify_password("admin123", user.password_hash)
        assert storage.get_user_by_username("admin").id == user.id

    def test_hash_not_serialized(self, storage):
        user = storage.create_user(UserCreate(username="admin", password="admin123"))

        assert "password_hash" not in user.model_dump()

    def test_duplicate_username_rejected(self, storage):
        storage.create_user(UserCreate(username="admin", password="admin123"))

        with pytest.raises(DuplicateUsernameError):
            storage.create_user(UserCreate(username="admin", password="different-pass"))

    def test_unknown_user(self, storage):
        assert storage.get_user(1) is None
        assert storage.get_user_by_username("ghost") is None


class TestEmptiness:
    def test_is_empty_until_something_is_stored(self, storage):
        assert storage.is_empty() is True

        storage.create_patient(patient_payload())

        assert storage.is_empty() is False


class TestRecordIsolation:
    """Records handed out by a store are copies; editing them changes nothing stored."""

    def test_nested_analytic_fields(self, storage):
        created = storage.create_analytic(analytic_payload(DAY))

        fetched = storage.get_analytic(created.id)
        fetched.appointment_counts["checkup"] = 999
        fetched.checkins.current.append(1)
        created.checkins.previous.clear()

        again = storage.get_analytic(created.id)
        assert again.appointment_counts["checkup"] == 35
        assert again.checkins.current == [14, 18, 16]
        assert again.checkins.previous == [12, 15, 14]

    def test_listed_records(self, storage):
        storage.create_analytic(analytic_payload(DAY))

        storage.get_analytics()[0].appointment_counts.clear()
        storage.get_analytics_by_date(DAY).checkins.current.clear()

        stored = storage.get_analytics()[0]
        assert stored.appointment_counts == {"checkup": 35, "vaccination": 28}
        assert stored.checkins.current == [14, 18, 16]


class TestOutOfRangeIds:
    """Ids no database row could carry behave like any other unknown id."""

    HUGE = 2**64

    def test_lookups_return_nothing(self, storage):
        assert storage.get_patient(self.HUGE) is None
        assert storage.get_appointment(self.HUGE) is None
        assert storage.get_staff(self.HUGE) is None
        assert storage.get_schedule(self.HUGE) is None
        assert storage.get_analytic(self.HUGE) is None
        assert storage.get_user(self.HUGE) is None

    def test_filters_are_empty(self, storage):
        assert storage.get_appointments_by_patient(self.HUGE) == []
        assert storage.get_appointments_by_doctor(self.HUGE) == []
        assert storage.get_schedules_by_staff(self.HUGE) == []

    def test_updates_and_deletes_miss(self, storage):
        storage.create_patient(patient_payload())

        assert storage.update_patient(self.HUGE, PatientUpdate(age=2)) is None
        assert storage.update_appointment(self.HUGE, AppointmentUpdate(status="completed")) is None
        assert storage.delete_patient(self.HUGE) is False
        assert storage.delete_staff(self.HUGE) is False
        assert storage.delete_schedule(self.HUGE) is False
        assert storage.delete_analytic(self.HUGE) is False
        assert len(storage.get_patients()) == 1
