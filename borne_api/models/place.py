from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from borne_api.models.base import Base


class Place(Base):
    """
    Place hosting one or more stations (a car park, a private driveway...).

    A place belongs to an owner and has at most one postal address.
    """

    __tablename__ = "places"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Internal unique identifier for the place",
    )

    instructions: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="How to reach the stations of the place",
    )

    owner_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
        comment="User owning the place",
    )

    owner = relationship("User", back_populates="places")

    address = relationship(
        "PlaceAddress",
        back_populates="place",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    # Deleting a place detaches its stations.
    stations = relationship("Station", back_populates="place")


class PlaceAddress(Base):
    """
    Postal address of a place.
    """

    __tablename__ = "place_addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    place_id: Mapped[int] = mapped_column(
        ForeignKey("places.id"),
        nullable=False,
        unique=True,
    )

    street: Mapped[str] = mapped_column(String(200), nullable=False)
    complement: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    postal_code: Mapped[str] = mapped_column(String(30), nullable=False)
    city: Mapped[str] = mapped_column(String(200), nullable=False)
    region: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    country: Mapped[str] = mapped_column(String(200), nullable=False)

    place = relationship("Place", back_populates="address")
