from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlaceAddressIn(BaseModel):
    street: str = Field(..., min_length=2, max_length=200)
    complement: Optional[str] = Field(default=None, min_length=2, max_length=300)
    postal_code: str = Field(..., min_length=2, max_length=30)
    city: str = Field(..., min_length=2, max_length=200)
    region: Optional[str] = Field(default=None, min_length=2, max_length=200)
    country: str = Field(..., min_length=2, max_length=200)


class PlaceAddressOut(PlaceAddressIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class PlaceIn(BaseModel):
    """
    Payload for creating or replacing a place.

    Omitting `address` on a replacement removes the stored address.
    """

    instructions: Optional[str] = Field(default=None, min_length=2, max_length=3000)
    owner_id: Optional[int] = None
    address: Optional[PlaceAddressIn] = None


class PlaceOut(BaseModel):
    """
    Public representation of a place, with its postal address.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    instructions: Optional[str] = None
    owner_id: Optional[int] = None
    address: Optional[PlaceAddressOut] = None


class PlaceListResponse(BaseModel):
    items: list[PlaceOut] = Field(default_factory=list)
    total: int
