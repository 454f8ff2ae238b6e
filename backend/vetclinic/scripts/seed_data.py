"""Module: seed_data.

Fill the configured SQL database with randomly generated clinic data:

    VETCLINIC_DATABASE_URL=sqlite:///./vetclinic.db python -m vetclinic.scripts.seed_data --patients 50
"""

import argparse
import random
from datetime import datetime, timedelta

from faker import Faker

from vetclinic.core.config import get_settings
from vetclinic.schemas import (
    AppointmentCreate,
    AppointmentStatus,
    AppointmentType,
    PatientCreate,
    StaffCreate,
)
from vetclinic.storage.base import Storage
from vetclinic.storage.sql import SqlStorage

fake = Faker()

SPECIES_BREEDS = {
    "Dog": ["Golden Retriever", "German Shepherd", "Beagle", "Labrador", "Border Collie"],
    "Cat": ["Siamese", "Maine Coon", "Persian", "Ragdoll", "Domestic Shorthair"],
    "Rabbit": ["Holland Lop", "Netherland Dwarf", "Rex"],
}
STAFF_ROLES = [
    ("Veterinarian", "General Care"),
    ("Veterinary Surgeon", "Surgery"),
    ("Feline Specialist", "Feline Care"),
    ("Exotic Animals Specialist", "Exotic Animals"),
]


# Shared helpers used by the seed builders.
def fake_patient() -> PatientCreate:
    species = random.choice(list(SPECIES_BREEDS))
    return PatientCreate(
        name=fake.first_name(),
        species=species,
        breed=random.choice(SPECIES_BREEDS[species]),
        age=random.randint(0, 15),
        gender=random.choice(["Male", "Female"]),
        owner_name=fake.name(),
        owner_phone=fake.numerify("555-###-####"),
        owner_email=fake.email(),
    )


def fake_staff() -> StaffCreate:
    role, specialty = random.choice(STAFF_ROLES)
    return StaffCreate(
        name=f"Dr. {fake.name()}",
        role=role,
        specialty=specialty,
        is_active=random.random() > 0.2,
    )


def fake_appointment(patient_id: int, doctor_id: int, around: datetime) -> AppointmentCreate:
    # Business hours within two weeks either side of ``around``.
    day = around + timedelta(days=random.randint(-14, 14))
    slot = day.replace(hour=random.randint(8, 17), minute=random.choice([0, 15, 30, 45]), second=0, microsecond=0)
    status = AppointmentStatus.COMPLETED if slot < around else AppointmentStatus.SCHEDULED
    return AppointmentCreate(
        patient_id=patient_id,
        doctor_id=doctor_id,
        date=slot,
        type=random.choice(list(AppointmentType)),
        status=status,
        notes=fake.sentence(nb_words=6),
    )


def seed(storage: Storage, patients: int, staff: int, appointments_per_patient: int) -> dict[str, int]:
    now = datetime.now()
    staff_rows = [storage.create_staff(fake_staff()) for _ in range(staff)]
    patient_rows = [storage.create_patient(fake_patient()) for _ in range(patients)]

    booked = 0
    for patient in patient_rows:
        for _ in range(random.randint(0, appointments_per_patient)):
            doctor = random.choice(staff_rows)
            storage.create_appointment(fake_appointment(patient.id, doctor.id, now))
            booked += 1

    return {"staff": len(staff_rows), "patients": len(patient_rows), "appointments": booked}


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the clinic database with fake data")
    parser.add_argument("--patients", type=int, default=50)
    parser.add_argument("--staff", type=int, default=6)
    parser.add_argument("--appointments-per-patient", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)
        Faker.seed(args.seed)

    settings = get_settings()
    storage = SqlStorage.from_url(settings.database_url)
    counts = seed(storage, args.patients, max(args.staff, 1), args.appointments_per_patient)
    print(
        f"Seeded {counts['staff']} staff, {counts['patients']} patients and "
        f"{counts['appointments']} appointments into {settings.database_url}."
    )


if __name__ == "__main__":
    main()
