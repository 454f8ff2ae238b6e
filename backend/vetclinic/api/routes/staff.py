"""Module: staff."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from vetclinic.api.routes.deps import get_storage
from vetclinic.schemas import Staff, StaffCreate, StaffUpdate
from vetclinic.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[Staff], summary="List staff")
def list_staff(storage: Storage = Depends(get_storage)):
    return storage.get_all_staff()


@router.get("/{staff_id}", response_model=Staff, summary="Get staff member")
def get_staff(staff_id: int, storage: Storage = Depends(get_storage)):
    member = storage.get_staff(staff_id)
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member


@router.post("", response_model=Staff, status_code=201, summary="Add staff member")
def create_staff(payload: StaffCreate, storage: Storage = Depends(get_storage)):
    return storage.create_staff(payload)


@router.put("/{staff_id}", response_model=Staff, summary="Update staff member")
def update_staff(staff_id: int, payload: StaffUpdate, storage: Storage = Depends(get_storage)):
    member = storage.update_staff(staff_id, payload)
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return member


# Refused with 409 (ReferenceConflictError) while appointments still name the member as doctor.
@router.delete("/{staff_id}", status_code=204, summary="Remove staff member and their schedule")
def delete_staff(staff_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_staff(staff_id):
        raise HTTPException(status_code=404, detail="Staff member not found")
    return Response(status_code=204)
