"""Module: schedules."""

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.exceptions import RequestValidationError

from vetclinic.api.routes.deps import get_storage, parse_date_or_400
from vetclinic.schemas import Schedule, ScheduleCreate, ScheduleUpdate
from vetclinic.schemas.schedule import check_time_window
from vetclinic.storage.base import Storage

router = APIRouter()


@router.get("", response_model=list[Schedule], summary="List schedule blocks")
def list_schedules(storage: Storage = Depends(get_storage)):
    return storage.get_schedules()


@router.get("/staff/{staff_id}", response_model=list[Schedule], summary="Schedule for a staff member")
def schedules_by_staff(staff_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_schedules_by_staff(staff_id)


@router.get("/date/{date}", response_model=list[Schedule], summary="Schedule blocks on a calendar day")
def schedules_by_date(date: str, storage: Storage = Depends(get_storage)):
    return storage.get_schedules_by_date(parse_date_or_400(date))


@router.get("/{schedule_id}", response_model=Schedule, summary="Get schedule block")
def get_schedule(schedule_id: int, storage: Storage = Depends(get_storage)):
    schedule = storage.get_schedule(schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.post("", response_model=Schedule, status_code=201, summary="Create schedule block")
def create_schedule(payload: ScheduleCreate, storage: Storage = Depends(get_storage)):
    return storage.create_schedule(payload)


@router.put("/{schedule_id}", response_model=Schedule, summary="Update schedule block")
def update_schedule(schedule_id: int, payload: ScheduleUpdate, storage: Storage = Depends(get_storage)):
    existing = storage.get_schedule(schedule_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Schedule not found")

    # A payload carrying only one end of the window is checked against the stored other end.
    try:
        check_time_window(
            payload.start_time or existing.start_time,
            payload.end_time or existing.end_time,
        )
    except ValueError as exc:
        field = "end_time" if payload.end_time is not None else "start_time"
        raise RequestValidationError([{"loc": ("body", field), "msg": str(exc), "type": "value_error"}])

    schedule = storage.update_schedule(schedule_id, payload)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.delete("/{schedule_id}", status_code=204, summary="Delete schedule block")
def delete_schedule(schedule_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_schedule(schedule_id):
        raise HTTPException(status_code=404, detail="Schedule not found")
    return Response(status_code=204)
