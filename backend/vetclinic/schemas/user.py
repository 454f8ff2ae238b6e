from typing import Optional

from pydantic import Field

from vetclinic.schemas.common import MAX_ID, ContractModel, RecordModel


class UserCreate(ContractModel):
    username: str = Field(..., min_length=3, max_length=50)
    # Plaintext only on the way in; the store keeps a PBKDF2 hash.
    password: str = Field(..., min_length=8, max_length=128, repr=False)
    staff_id: Optional[int] = Field(None, ge=1, le=MAX_ID)


class User(RecordModel):
    username: str
    password_hash: str = Field(..., repr=False, exclude=True)
    staff_id: Optional[int] = None
