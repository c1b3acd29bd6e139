from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from borne_api.models.reservation import ReservationStatus


class ReservationIn(BaseModel):
    """
    Payload for creating a reservation on a station.
    """

    station_id: int
    user_id: Optional[int] = None
    start_at: datetime = Field(..., description="Start of the reserved interval")
    end_at: datetime = Field(..., description="End of the reserved interval, after start_at")
    status: ReservationStatus = ReservationStatus.PENDING
    total_amount: Optional[float] = Field(default=None, ge=0)

    @field_validator("start_at", "end_at")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def check_interval(self) -> "ReservationIn":
        if self.end_at <= self.start_at:
            raise ValueError("end_at must be after start_at")
        return self


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationOut(BaseModel):
    """
    Public representation of a reservation.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    station_id: int
    user_id: Optional[int] = None
    start_at: datetime
    end_at: datetime
    status: ReservationStatus
    total_amount: Optional[float] = None
    validated_at: Optional[datetime] = None


class ReservationListResponse(BaseModel):
    items: list[ReservationOut] = Field(default_factory=list)
    total: int
