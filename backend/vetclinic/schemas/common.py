"""
Shared pieces for the request/record schemas.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict

from vetclinic.core.dates import to_local_naive

# Timestamps are kept naive in server-local time.
LocalDatetime = Annotated[datetime, AfterValidator(to_local_naive)]

Number = int | float

# Largest id a SQL INTEGER primary key can hold.
MAX_ID = 2**63 - 1


class ContractModel(BaseModel):
    """Base for Create/Update payloads."""

    model_config = ConfigDict(
        use_enum_values=True,
        str_strip_whitespace=True,
    )


class RecordModel(BaseModel):
    """Base for stored records. Top-level fields are frozen; stores hand out copies."""

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        frozen=True,
    )

    id: int


def reject_null(value: Any) -> Any:
    # Partial updates may omit a required field but may not null it out.
    if value is None:
        raise ValueError("may not be null")
    return value
