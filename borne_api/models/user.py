import enum
from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from borne_api.models.base import Base


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    OWNER = "OWNER"
    CLIENT = "CLIENT"


class User(Base):
    """
    Platform user.

    Owners publish places and their stations, clients reserve stations.
    Credentials live with the authentication layer, not here.
    """

    __tablename__ = "users"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Internal unique identifier for the user",
    )

    last_name: Mapped[str] = mapped_column(String(70), nullable=False)
    first_name: Mapped[str] = mapped_column(String(70), nullable=False)

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Public handle, unique across users",
    )

    email: Mapped[str] = mapped_column(
        String(254),
        nullable=False,
        unique=True,
        comment="Contact e-mail, unique across users",
    )

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.CLIENT,
    )

    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    iban: Mapped[Optional[str]] = mapped_column(
        String(34),
        nullable=True,
        comment="Bank account used to pay owners",
    )

    vehicle: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    # Deleting a user detaches (does not delete) its places and reservations.
    places = relationship("Place", back_populates="owner")
    reservations = relationship("Reservation", back_populates="user")
