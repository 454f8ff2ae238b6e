"""Module: dashboard."""

from datetime import datetime

from fastapi import APIRouter, Depends

from vetclinic.api.routes.deps import get_storage
from vetclinic.schemas import DashboardMetrics
from vetclinic.storage.base import Storage

router = APIRouter()


# Three independent reads, not taken as one snapshot: a write landing between
# them can show up in some numbers and not others. Accepted for a dashboard.
@router.get("", response_model=DashboardMetrics, summary="Headline metrics for today")
def dashboard_metrics(storage: Storage = Depends(get_storage)):
    today = datetime.now()
    appointments = storage.get_appointments_by_date(today)
    patients = storage.get_patients()
    analytic = storage.get_analytics_by_date(today)

    return DashboardMetrics(
        appointments_today=len(appointments),
        total_patients=len(patients),
        avg_wait_time=(analytic.wait_time if analytic else None) or 0,
        weekly_revenue=(analytic.revenue if analytic else None) or 0,
    )
