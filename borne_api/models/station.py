import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from borne_api.models.base import Base


class StationStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"


class Station(Base):
    """
    Charging station ("borne") entity.

    A fixed-location electric-vehicle charging point. Its coordinates are
    what the station locator measures distances from.
    """

    __tablename__ = "stations"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Internal unique identifier for the station",
    )

    name: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Human-readable station name",
    )

    latitude: Mapped[Decimal] = mapped_column(
        Numeric(9, 6),
        nullable=False,
        comment="Latitude in degrees, [-90, 90]",
    )

    longitude: Mapped[Decimal] = mapped_column(
        Numeric(9, 6),
        nullable=False,
        comment="Longitude in degrees, [-180, 180]",
    )

    power_kw: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(6, 2),
        nullable=True,
        comment="Charging power in kW",
    )

    instructions: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Access instructions for drivers",
    )

    standing: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Free-standing station (as opposed to wall-mounted)",
    )

    status: Mapped[StationStatus] = mapped_column(
        Enum(StationStatus, name="station_status"),
        nullable=False,
        default=StationStatus.ACTIVE,
        comment="Operational status",
    )

    occupied: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Occupancy flag maintained by the owner",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Creation timestamp",
    )

    last_maintenance: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of the last maintenance operation",
    )

    place_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("places.id"),
        nullable=True,
        comment="Place hosting the station",
    )

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    place = relationship("Place", back_populates="stations")

    reservations = relationship(
        "Reservation",
        back_populates="station",
        cascade="all, delete-orphan",
    )

    tariffs = relationship(
        "Tariff",
        back_populates="station",
        cascade="all, delete-orphan",
    )
