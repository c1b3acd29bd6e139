from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from borne_api.models.user import UserRole


class UserIn(BaseModel):
    """
    Payload for creating or replacing a user.
    """

    last_name: str = Field(..., min_length=2, max_length=70)
    first_name: str = Field(..., min_length=2, max_length=70)
    username: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    role: UserRole = UserRole.CLIENT
    birth_date: Optional[date] = None
    iban: Optional[str] = Field(default=None, min_length=14, max_length=34)
    vehicle: Optional[str] = Field(default=None, min_length=2, max_length=50)
    banned: bool = False


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    last_name: str
    first_name: str
    username: str
    email: str
    role: UserRole
    birth_date: Optional[date] = None
    iban: Optional[str] = None
    vehicle: Optional[str] = None
    banned: bool


class UserListResponse(BaseModel):
    items: list[UserOut] = Field(default_factory=list)
    total: int
