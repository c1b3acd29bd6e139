from datetime import date, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TariffIn(BaseModel):
    """
    Payload for adding an hourly tariff to a station.

    `weekday` follows ISO numbering (1 = Monday); omit it for a tariff
    that applies every day.
    """

    price_per_minute: float = Field(..., ge=0)
    start_time: time
    end_time: time
    weekday: Optional[int] = Field(default=None, ge=1, le=7)
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    active: bool = True

    @model_validator(mode="after")
    def check_windows(self) -> "TariffIn":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        if self.valid_from and self.valid_to and self.valid_to < self.valid_from:
            raise ValueError("valid_to must not be before valid_from")
        return self


class TariffOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    station_id: int
    price_per_minute: float
    start_time: time
    end_time: time
    weekday: Optional[int] = None
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    active: bool
