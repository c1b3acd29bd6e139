from datetime import date, time
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, Numeric, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from borne_api.models.base import Base


class Tariff(Base):
    """
    Hourly tariff of a station.

    Applies `price_per_minute` between `start_time` and `end_time` each day,
    or only on `weekday` (ISO, 1 = Monday) when set.
    """

    __tablename__ = "tariffs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    station_id: Mapped[int] = mapped_column(
        ForeignKey("stations.id"),
        nullable=False,
        comment="Station the tariff applies to",
    )

    price_per_minute: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)

    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    weekday: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    valid_from: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    valid_to: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    station = relationship(
        "Station",
        back_populates="tariffs",
    )

    __table_args__ = (
        CheckConstraint("weekday IS NULL OR (weekday BETWEEN 1 AND 7)", name="ck_tariff_weekday"),
    )
