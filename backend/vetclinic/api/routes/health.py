"""Module: health."""

from fastapi import APIRouter

router = APIRouter()


# Endpoint: lightweight health probe for service liveness.
@router.get("")
def health():
    return {"status": "ok"}
