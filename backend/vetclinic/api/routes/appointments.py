"""Module: appointments."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from vetclinic.api.routes.deps import get_storage, parse_date_or_400
from vetclinic.schemas import (
    Appointment,
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentUpdate,
)
from vetclinic.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[Appointment], summary="List appointments")
def list_appointments(storage: Storage = Depends(get_storage)):
    return storage.get_appointments()


@router.get("/date/{date}", response_model=list[Appointment], summary="Appointments on a calendar day")
def appointments_by_date(date: str, storage: Storage = Depends(get_storage)):
    return storage.get_appointments_by_date(parse_date_or_400(date))


@router.get("/patient/{patient_id}", response_model=list[Appointment], summary="Appointments for a patient")
def appointments_by_patient(patient_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_appointments_by_patient(patient_id)


@router.get("/doctor/{doctor_id}", response_model=list[Appointment], summary="Appointments for a doctor")
def appointments_by_doctor(doctor_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_appointments_by_doctor(doctor_id)


@router.get("/{appointment_id}", response_model=Appointment, summary="Get appointment")
def get_appointment(appointment_id: int, storage: Storage = Depends(get_storage)):
    appointment = storage.get_appointment(appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.post("", response_model=Appointment, status_code=201, summary="Book an appointment")
def create_appointment(payload: AppointmentCreate, storage: Storage = Depends(get_storage)):
    return storage.create_appointment(payload)


@router.put("/{appointment_id}", response_model=Appointment, summary="Update an appointment")
def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    storage: Storage = Depends(get_storage),
):
    appointment = storage.update_appointment(appointment_id, payload)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


# The body is validated against the status enum before the store is touched.
@router.patch("/{appointment_id}/status", response_model=Appointment, summary="Move appointment on the flowboard")
def update_appointment_status(
    appointment_id: int,
    payload: AppointmentStatusUpdate,
    storage: Storage = Depends(get_storage),
):
    appointment = storage.update_appointment(appointment_id, AppointmentUpdate(status=payload.status))
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    logger.info("Appointment %s moved to %s", appointment_id, appointment.status)
    return appointment


@router.delete("/{appointment_id}", status_code=204, summary="Delete an appointment")
def delete_appointment(appointment_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_appointment(appointment_id):
        raise HTTPException(status_code=404, detail="Appointment not found")
    return Response(status_code=204)
