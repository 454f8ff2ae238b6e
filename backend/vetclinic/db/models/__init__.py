# backend/vetclinic/db/models/__init__.py

from vetclinic.db.models.user import UserRow
from vetclinic.db.models.patient import PatientRow
from vetclinic.db.models.appointment import AppointmentRow
from vetclinic.db.models.staff import StaffRow
from vetclinic.db.models.schedule import ScheduleRow
from vetclinic.db.models.analytic import AnalyticRow
