from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from borne_api.models.station import StationStatus


class StationIn(BaseModel):
    """
    Payload for creating or replacing a charging station.
    """

    name: str = Field(..., min_length=1, max_length=128)
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")
    power_kw: Optional[float] = Field(default=None, ge=0)
    instructions: Optional[str] = None
    standing: bool = False
    status: StationStatus = StationStatus.ACTIVE
    occupied: bool = False
    last_maintenance: Optional[datetime] = None
    place_id: Optional[int] = None


class StationOut(BaseModel):
    """
    Public representation of a charging station.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    power_kw: Optional[float] = None
    instructions: Optional[str] = None
    standing: bool = False
    status: Optional[StationStatus] = None
    occupied: bool = False
    created_at: Optional[datetime] = None
    last_maintenance: Optional[datetime] = None
    place_id: Optional[int] = None


class StationListResponse(BaseModel):
    """
    Response payload for listing stations.
    """

    items: list[StationOut] = Field(default_factory=list)
    total: int
