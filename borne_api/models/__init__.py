from borne_api.models.base import Base
from borne_api.models.place import Place, PlaceAddress
from borne_api.models.reservation import Reservation, ReservationStatus
from borne_api.models.station import Station, StationStatus
from borne_api.models.tariff import Tariff
from borne_api.models.user import User, UserRole

__all__ = [
    "Base",
    "Place",
    "PlaceAddress",
    "Reservation",
    "ReservationStatus",
    "Station",
    "StationStatus",
    "Tariff",
    "User",
    "UserRole",
]
