"""Module: seed.

Demo clinic loaded into an empty store at startup: four vets, six patients,
today's flowboard, the lead vet's day plan and today's analytics.
"""

import logging
from datetime import datetime, timedelta

from vetclinic.schemas import (
    AnalyticCreate,
    AppointmentCreate,
    CheckinSeries,
    PatientCreate,
    ScheduleCreate,
    StaffCreate,
    UserCreate,
)
from vetclinic.storage.base import Storage

logger = logging.getLogger(__name__)

DEMO_STAFF = [
    {
        "name": "Dr. Sarah Wilson",
        "role": "Lead Veterinarian",
        "specialty": "General Care",
        "image_url": "https://images.unsplash.com/photo-1527980965255-d3b416303d12",
        "is_active": True,
    },
    {
        "name": "Dr. Marcus Chen",
        "role": "Veterinary Surgeon",
        "specialty": "Surgery",
        "image_url": "https://images.unsplash.com/photo-1639149888905-fb39731f2e6c",
        "is_active": True,
    },
    {
        "name": "Dr. Alex Thompson",
        "role": "Exotic Animals Specialist",
        "specialty": "Exotic Animals",
        "image_url": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d",
        "is_active": False,
    },
    {
        "name": "Dr. Maria Rodriguez",
        "role": "Feline Specialist",
        "specialty": "Feline Care",
        "image_url": "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2",
        "is_active": False,
    },
]

DEMO_PATIENTS = [
    ("Max", "Dog", "Golden Retriever", 5, "Male", "John & Sarah Peterson", "555-123-4567",
     "https://images.unsplash.com/photo-1517849845537-4d257902454a", "Annual checkup completed"),
    ("Luna", "Cat", "Siamese", 3, "Female", "Emily Johnson", "555-234-5678",
     "https://images.unsplash.com/photo-1533738363-b7f9aef128ce", "Vaccination completed"),
    ("Rocky", "Dog", "German Shepherd", 4, "Male", "Michael & Tina Rivera", "555-345-6789",
     "https://images.unsplash.com/photo-1425082661705-1834bfd09dca", "Surgery follow-up in progress"),
    ("Coco", "Rabbit", "Holland Lop", 2, "Female", "Kelly Zhang", "555-456-7890",
     "https://images.unsplash.com/photo-1518288774672-b94e808873ff", "Dental checkup scheduled"),
    ("Simba", "Cat", "Maine Coon", 6, "Male", "David & Amy Williams", "555-567-8901",
     "https://images.unsplash.com/photo-1560807707-8cc77767d783", "Vaccination due"),
    ("Bella", "Dog", "Beagle", 3, "Female", "Robert & Sue Anderson", "555-678-9012",
     "https://images.unsplash.com/photo-1541781774459-bb2af2f05b55", "Annual checkup scheduled"),
]

# (patient index, doctor index, hours after midnight, type, status, notes)
DEMO_APPOINTMENTS = [
    (0, 0, 9.0, "checkup", "completed", "Annual checkup"),
    (1, 1, 10.25, "vaccination", "completed", "Vaccination"),
    (2, 0, 11.5, "follow_up", "in_progress", "Surgery Follow-up"),
    (3, 1, 13.0, "dental", "scheduled", "Dental Checkup"),
    (4, 2, 14.75, "vaccination", "scheduled", "Vaccination"),
    (5, 0, 15.5, "checkup", "canceled", "Annual Checkup"),
]

# (start hour, end hour, activity, description) for the lead vet.
DEMO_DAY_PLAN = [
    (9.0, 10.5, "appointments", "Morning Appointments"),
    (10.5, 11.5, "meeting", "Staff Meeting"),
    (11.5, 13.0, "surgery", "Surgical Procedures"),
    (14.0, 17.0, "appointments", "Afternoon Appointments"),
]


def seed_demo_data(storage: Storage, now: datetime | None = None) -> None:
    today = (now or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)

    def at(hours: float) -> datetime:
        return today + timedelta(hours=hours)

    staff = [storage.create_staff(StaffCreate(**data)) for data in DEMO_STAFF]

    patients = [
        storage.create_patient(
            PatientCreate(
                name=name,
                species=species,
                breed=breed,
                age=age,
                gender=gender,
                owner_name=owner_name,
                owner_phone=owner_phone,
                image_url=image_url,
                notes=notes,
            )
        )
        for name, species, breed, age, gender, owner_name, owner_phone, image_url, notes in DEMO_PATIENTS
    ]

    for patient_idx, doctor_idx, hours, kind, status, notes in DEMO_APPOINTMENTS:
        storage.create_appointment(
            AppointmentCreate(
                patient_id=patients[patient_idx].id,
                doctor_id=staff[doctor_idx].id,
                date=at(hours),
                type=kind,
                status=status,
                notes=notes,
            )
        )

    for start, end, activity, description in DEMO_DAY_PLAN:
        storage.create_schedule(
            ScheduleCreate(
                staff_id=staff[0].id,
                date=today,
                start_time=at(start),
                end_time=at(end),
                activity_type=activity,
                description=description,
            )
        )

    storage.create_analytic(
        AnalyticCreate(
            date=today,
            appointment_counts={"checkup": 35, "vaccination": 28, "surgery": 15, "dental": 12, "other": 10},
            checkins=CheckinSeries(
                current=[14, 18, 16, 21, 15, 13, 8],
                previous=[12, 15, 14, 18, 12, 11, 7],
            ),
            revenue=8320,
            wait_time=14,
        )
    )

    storage.create_user(UserCreate(username="admin", password="admin123", staff_id=staff[0].id))

    logger.info(
        "Seeded demo data: %d staff, %d patients, %d appointments, %d schedule blocks",
        len(staff),
        len(patients),
        len(DEMO_APPOINTMENTS),
        len(DEMO_DAY_PLAN),
    )
