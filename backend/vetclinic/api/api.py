"""Module: api."""

# backend/vetclinic/api/api.py
from fastapi import APIRouter

# Operational routes.
from vetclinic.api.routes.health import router as health_router

# Domain routes used by the flowboard, schedule and dashboard pages.
from vetclinic.api.routes.patients import router as patients_router
from vetclinic.api.routes.appointments import router as appointments_router
from vetclinic.api.routes.staff import router as staff_router
from vetclinic.api.routes.schedules import router as schedules_router
from vetclinic.api.routes.analytics import router as analytics_router
from vetclinic.api.routes.dashboard import router as dashboard_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])

# Register business/domain endpoints consumed by the application UI.
api_router.include_router(patients_router, prefix="/patients", tags=["patients"])
api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])
api_router.include_router(staff_router, prefix="/staff", tags=["staff"])
api_router.include_router(schedules_router, prefix="/schedules", tags=["schedules"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
