"""
Patient schemas for API validation and serialization.
"""

from typing import Optional

from pydantic import Field, field_validator

from vetclinic.schemas.common import ContractModel, RecordModel, reject_null


class PatientBase(ContractModel):
    """Fields shared by patient payloads and stored patients."""

    name: str = Field(..., min_length=1, max_length=100)
    species: str = Field(..., min_length=1, max_length=50)
    breed: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=100, description="Age in years")
    gender: Optional[str] = Field(None, max_length=20)
    owner_name: str = Field(..., min_length=1, max_length=200)
    owner_phone: Optional[str] = Field(None, max_length=30)
    owner_email: Optional[str] = Field(None, max_length=254)
    image_url: Optional[str] = None
    notes: Optional[str] = None


class PatientCreate(PatientBase):
    pass


class PatientUpdate(ContractModel):
    """Partial patient update; omitted fields are left untouched."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    species: Optional[str] = Field(None, min_length=1, max_length=50)
    breed: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=100)
    gender: Optional[str] = Field(None, max_length=20)
    owner_name: Optional[str] = Field(None, min_length=1, max_length=200)
    owner_phone: Optional[str] = Field(None, max_length=30)
    owner_email: Optional[str] = Field(None, max_length=254)
    image_url: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name", "species", "owner_name")
    @classmethod
    def validate_required_not_null(cls, value):
        return reject_null(value)


class Patient(PatientBase, RecordModel):
    pass
