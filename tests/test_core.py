from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from vetclinic.core.config import Settings
from vetclinic.core.dates import end_of_day, parse_date_param, same_day, start_of_day, to_local_naive
from vetclinic.core.exceptions import DuplicateUsernameError, ReferenceConflictError, VetClinicError
from vetclinic.core.security import PASSWORD_SCHEME, hash_password, verify_password
from vetclinic.schemas import AppointmentStatusUpdate, PatientUpdate, ScheduleCreate

NOW = datetime(2024, 3, 15, 16, 45)


class TestParseDateParam:
    def test_today_and_tomorrow(self):
        assert parse_date_param("today", now=NOW) == NOW
        assert parse_date_param("tomorrow", now=NOW) == NOW + timedelta(days=1)
        assert parse_date_param(" Today ", now=NOW) == NOW

    def test_iso_date_and_datetime(self):
        assert parse_date_param("2024-03-15") == datetime(2024, 3, 15)
        assert parse_date_param("2024-03-15T09:30:00") == datetime(2024, 3, 15, 9, 30)

    def test_aware_value_becomes_local_naive(self):
        parsed = parse_date_param("2024-03-15T09:30:00+00:00")

        assert parsed.tzinfo is None
        assert parsed == datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

    @pytest.mark.parametrize("value", ["", "yesterday", "15/03/2024", "2024-13-01"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_date_param(value, now=NOW)


class TestDayBoundaries:
    def test_bounds(self):
        assert start_of_day(NOW) == datetime(2024, 3, 15)
        assert end_of_day(NOW) == datetime(2024, 3, 15, 23, 59, 59, 999999)

    def test_same_day(self):
        assert same_day(datetime(2024, 3, 15, 0, 0), datetime(2024, 3, 15, 23, 59))
        assert not same_day(datetime(2024, 3, 15, 23, 59), datetime(2024, 3, 16, 0, 0))

    def test_naive_values_untouched(self):
        assert to_local_naive(NOW) is NOW


class TestPasswords:
    def test_hash_format(self):
        stored = hash_password("admin123", iterations=1000)

        scheme, iterations, salt, digest = stored.split("$")
        assert scheme == PASSWORD_SCHEME
        assert iterations == "1000"
        assert len(bytes.fromhex(salt)) == 16
        assert digest

    def test_verify(self):
        stored = hash_password("admin123", iterations=1000)

        assert verify_password("admin123", stored)
        assert not verify_password("admin124", stored)

    def test_salted(self):
        assert hash_password("admin123", iterations=1000) != hash_password("admin123", iterations=1000)

    @pytest.mark.parametrize("stored", ["", "admin123", "pbkdf2_sha256$x$zz$yy", "pbkdf2_sha256$1000"])
    def test_rejects_plaintext_and_malformed(self, stored):
        assert verify_password("admin123", stored) is False


class TestExceptions:
    def test_status_codes(self):
        assert VetClinicError("boom").status_code == 500
        assert ReferenceConflictError("in use").status_code == 409
        assert DuplicateUsernameError("taken").status_code == 409

    def test_to_dict(self):
        assert ReferenceConflictError("in use").to_dict() == {"message": "in use"}
        assert ReferenceConflictError("in use", details={"staff_id": 1}).to_dict() == {
            "message": "in use",
            "details": {"staff_id": 1},
        }


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("VETCLINIC_STORAGE_BACKEND", raising=False)
        settings = Settings(_env_file=None)

        assert settings.storage_backend == "memory"
        assert settings.seed_demo_data is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("VETCLINIC_STORAGE_BACKEND", "sql")
        monkeypatch.setenv("VETCLINIC_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("VETCLINIC_SEED_DEMO_DATA", "false")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "sql"
        assert settings.database_url == "sqlite://"
        assert settings.seed_demo_data is False

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, storage_backend="redis")


class TestSchemas:
    def test_status_update_rejects_unknown_value(self):
        with pytest.raises(ValidationError):
            AppointmentStatusUpdate(status="teleported")

    def test_update_tracks_only_sent_fields(self):
        assert PatientUpdate(age=4).model_dump(exclude_unset=True) == {"age": 4}

    def test_schedule_window(self):
        with pytest.raises(ValidationError):
            ScheduleCreate(
                staff_id=1,
                date=NOW,
                start_time=NOW,
                end_time=NOW - timedelta(minutes=1),
                activity_type="meeting",
            )

    def test_schedule_zero_length_window_allowed(self):
        block = ScheduleCreate(staff_id=1, date=NOW, start_time=NOW, end_time=NOW, activity_type="break")

        assert block.activity_type == "break"
