# backend/vetclinic/schemas/__init__.py

from vetclinic.schemas.analytic import Analytic, AnalyticCreate, AnalyticUpdate, CheckinSeries
from vetclinic.schemas.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentStatus,
    AppointmentStatusUpdate,
    AppointmentType,
    AppointmentUpdate,
)
from vetclinic.schemas.dashboard import DashboardMetrics
from vetclinic.schemas.patient import Patient, PatientCreate, PatientUpdate
from vetclinic.schemas.schedule import ActivityType, Schedule, ScheduleCreate, ScheduleUpdate
from vetclinic.schemas.staff import Staff, StaffCreate, StaffUpdate
from vetclinic.schemas.user import User, UserCreate
