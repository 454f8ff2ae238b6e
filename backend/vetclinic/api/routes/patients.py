"""Module: patients."""

from fastapi import APIRouter, Depends, HTTPException, Response

from vetclinic.api.routes.deps import get_storage
from vetclinic.schemas import Patient, PatientCreate, PatientUpdate
from vetclinic.storage.base import Storage

router = APIRouter()

DEFAULT_RECENT_LIMIT = 5


def _parse_limit(value: str) -> int:
    # Anything that is not a positive integer falls back to the default.
    try:
        limit = int(value)
    except ValueError:
        return DEFAULT_RECENT_LIMIT
    return limit if limit > 0 else DEFAULT_RECENT_LIMIT


@router.get("", response_model=list[Patient], summary="List patients")
def list_patients(storage: Storage = Depends(get_storage)):
    return storage.get_patients()


@router.get("/recent/{limit}", response_model=list[Patient], summary="Patients by most recent appointment")
def recent_patients(limit: str, storage: Storage = Depends(get_storage)):
    return storage.get_recent_patients(_parse_limit(limit))


@router.get("/{patient_id}", response_model=Patient, summary="Get patient detail")
def get_patient(patient_id: int, storage: Storage = Depends(get_storage)):
    patient = storage.get_patient(patient_id)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.post("", response_model=Patient, status_code=201, summary="Create patient")
def create_patient(payload: PatientCreate, storage: Storage = Depends(get_storage)):
    return storage.create_patient(payload)


@router.put("/{patient_id}", response_model=Patient, summary="Update patient details")
def update_patient(patient_id: int, payload: PatientUpdate, storage: Storage = Depends(get_storage)):
    patient = storage.update_patient(patient_id, payload)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.delete("/{patient_id}", status_code=204, summary="Delete patient and their appointments")
def delete_patient(patient_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_patient(patient_id):
        raise HTTPException(status_code=404, detail="Patient not found")
    return Response(status_code=204)
