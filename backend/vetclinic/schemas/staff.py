from typing import Optional

from pydantic import Field, field_validator

from vetclinic.schemas.common import ContractModel, RecordModel, reject_null


class StaffBase(ContractModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: str = Field(..., min_length=1, max_length=100)
    specialty: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = None
    is_active: bool = True


class StaffCreate(StaffBase):
    pass


class StaffUpdate(ContractModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = Field(None, min_length=1, max_length=100)
    specialty: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "role", "is_active")
    @classmethod
    def validate_required_not_null(cls, value):
        return reject_null(value)


class Staff(StaffBase, RecordModel):
    pass
