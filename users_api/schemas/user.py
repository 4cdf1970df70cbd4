"""User Schemas — Pydantic row mappers and response envelopes for the users API.

Invariants:
    - UserRow mirrors one stored row (user_id, name, age)
    - CreateUserReq requires name; age optional
    - UpdateUserReq: every field optional, null means "do not change"
    - Integers are bounded to PostgreSQL `integer`

Design Decisions:
    - from_attributes on UserRow: built straight from ORM instances
    - Envelopes are generic over their payload so each route declares its own shape
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from users_api.core.domain_types import INT4_MAX, INT4_MIN
from users_api.core.partial_update import collect_changes

T = TypeVar("T")


class UserRow(BaseModel):
    """A stored user, as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: str
    age: int | None = None


class CreateUserReq(BaseModel):
    """User creation payload."""
    name: str
    age: int | None = Field(None, ge=INT4_MIN, le=INT4_MAX)


class CreateUserRow(BaseModel):
    """Result of an insert — only the database-assigned id."""
    user_id: int


class UpdateUserReq(BaseModel):
    """Partial update payload. Absent or null fields are left untouched."""
    name: str | None = None
    age: int | None = Field(None, ge=INT4_MIN, le=INT4_MAX)

    def changes(self) -> dict[str, object]:
        return collect_changes(self.model_dump())


# --- Envelopes ---------------------------------------------------------------

class DataEnvelope(BaseModel, Generic[T]):
    """Success envelope carrying a payload."""
    success: bool = True
    data: T


class SuccessEnvelope(BaseModel):
    """Success envelope without a payload."""
    success: bool = True
