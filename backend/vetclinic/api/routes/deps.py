"""Module: deps."""

from datetime import datetime

from fastapi import HTTPException, Request

from vetclinic.core.dates import parse_date_param
from vetclinic.storage.base import Storage


# Dependency provider: the store instance the app was built with.
def get_storage(request: Request) -> Storage:
    return request.app.state.storage


# Resolve a ``:date`` path segment ("today", "tomorrow" or ISO-8601).
def parse_date_or_400(value: str) -> datetime:
    try:
        return parse_date_param(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format")
