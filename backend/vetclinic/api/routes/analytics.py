"""Module: analytics."""

from fastapi import APIRouter, Depends, HTTPException, Response

from vetclinic.api.routes.deps import get_storage, parse_date_or_400
from vetclinic.schemas import Analytic, AnalyticCreate, AnalyticUpdate
from vetclinic.storage.base import Storage

router = APIRouter()


@router.get("", response_model=list[Analytic], summary="List daily analytics")
def list_analytics(storage: Storage = Depends(get_storage)):
    return storage.get_analytics()


@router.get("/date/{date}", response_model=Analytic, summary="Analytics for a calendar day")
def analytics_by_date(date: str, storage: Storage = Depends(get_storage)):
    analytic = storage.get_analytics_by_date(parse_date_or_400(date))
    if not analytic:
        raise HTTPException(status_code=404, detail="Analytics not found for the specified date")
    return analytic


@router.get("/{analytic_id}", response_model=Analytic, summary="Get analytics record")
def get_analytic(analytic_id: int, storage: Storage = Depends(get_storage)):
    analytic = storage.get_analytic(analytic_id)
    if not analytic:
        raise HTTPException(status_code=404, detail="Analytics not found")
    return analytic


@router.post("", response_model=Analytic, status_code=201, summary="Record daily analytics")
def create_analytic(payload: AnalyticCreate, storage: Storage = Depends(get_storage)):
    return storage.create_analytic(payload)


@router.put("/{analytic_id}", response_model=Analytic, summary="Update analytics record")
def update_analytic(analytic_id: int, payload: AnalyticUpdate, storage: Storage = Depends(get_storage)):
    analytic = storage.update_analytic(analytic_id, payload)
    if not analytic:
        raise HTTPException(status_code=404, detail="Analytics not found")
    return analytic


@router.delete("/{analytic_id}", status_code=204, summary="Delete analytics record")
def delete_analytic(analytic_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_analytic(analytic_id):
        raise HTTPException(status_code=404, detail="Analytics not found")
    return Response(status_code=204)
