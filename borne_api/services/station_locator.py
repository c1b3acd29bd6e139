from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from math import atan2, cos, radians, sin, sqrt
from typing import Any, List, Optional, Protocol, Sequence, Set, Union

import structlog

from borne_api.core.errors import InvalidArgumentError
from borne_api.models.reservation import ReservationStatus
from borne_api.schemas.stations import StationOut

logger = structlog.get_logger(__name__)

Coordinate = Optional[Union[Decimal, float]]

EARTH_RADIUS_KM = 6371


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair, in degrees."""

    latitude: Coordinate
    longitude: Coordinate


class StationLister(Protocol):
    async def list_all_stations(self) -> Sequence[Any]: ...


class ReservationLister(Protocol):
    async def list_all_reservations(self) -> Sequence[Any]: ...


def _validate_point(latitude: Coordinate, longitude: Coordinate) -> None:
    if latitude is None or longitude is None:
        raise InvalidArgumentError("Coordinates must not be null")
    if not -90 <= latitude <= 90:
        raise InvalidArgumentError("Invalid coordinates: latitude must be within [-90, 90]")
    if not -180 <= longitude <= 180:
        raise InvalidArgumentError("Invalid coordinates: longitude must be within [-180, 180]")


def _validate_instant(at: Optional[datetime]) -> None:
    if at is None:
        raise InvalidArgumentError("Instant must not be null")


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps (SQLite) are stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def distance_km(lat1: Coordinate, lon1: Coordinate, lat2: Coordinate, lon2: Coordinate) -> float:
    """
    Great-circle distance between two points using the Haversine formula.

    Args:
        lat1, lon1: First point, in degrees.
        lat2, lon2: Second point, in degrees.

    Returns:
        Distance in kilometers, on a sphere of radius 6371 km.

    Raises:
        InvalidArgumentError: if a coordinate is missing or out of range.
    """
    _validate_point(lat1, lon1)
    _validate_point(lat2, lon2)

    lat1, lon1, lat2, lon2 = float(lat1), float(lon1), float(lat2), float(lon2)

    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)

    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


class StationLocator:
    """
    Finds charging stations near a point and/or free at an instant.

    The locator holds no state besides its two listers: every query fetches
    fresh stations (and reservations when needed), filters them in memory
    and returns `StationOut` views in the listers' order. Lister errors are
    not caught.
    """

    def __init__(self, station_lister: StationLister, reservation_lister: ReservationLister):
        self.station_lister = station_lister
        self.reservation_lister = reservation_lister

    distance_km = staticmethod(distance_km)

    @staticmethod
    def is_occupied(reservation: Any, at: datetime) -> bool:
        """
        True if the reservation is accepted and its interval strictly contains `at`.

        A reservation ending (or starting) exactly at `at` does not occupy
        the station.
        """
        if reservation.status != ReservationStatus.ACCEPTED:
            return False
        at = _as_utc(at)
        return _as_utc(reservation.start_at) < at < _as_utc(reservation.end_at)

    async def find_nearby(self, center: GeoPoint, radius_km: float) -> List[StationOut]:
        """
        Return the stations within `radius_km` of `center`, boundary included.
        """
        _validate_point(center.latitude, center.longitude)

        stations = await self.station_lister.list_all_stations()
        nearby = [
            StationOut.model_validate(station)
            for station in stations
            if distance_km(center.latitude, center.longitude, station.latitude, station.longitude) <= radius_km
        ]

        logger.info(
            "nearby_stations_found",
            latitude=float(center.latitude),
            longitude=float(center.longitude),
            radius_km=radius_km,
            scanned=len(stations),
            count=len(nearby),
        )
        return nearby

    async def find_free(self, at: Optional[datetime]) -> List[StationOut]:
        """
        Return the stations with no accepted reservation covering `at`.
        """
        _validate_instant(at)

        stations = await self.station_lister.list_all_stations()
        reservations = await self.reservation_lister.list_all_reservations()

        occupied: Set[int] = {r.station_id for r in reservations if self.is_occupied(r, at)}
        free = [StationOut.model_validate(s) for s in stations if s.id not in occupied]

        logger.info(
            "free_stations_found",
            at=at.isoformat(),
            occupied=len(occupied),
            count=len(free),
        )
        return free

    async def find_free_nearby(
        self,
        center: GeoPoint,
        radius_km: float,
        at: Optional[datetime],
    ) -> List[StationOut]:
        """
        Return the stations that are both free at `at` and within `radius_km`
        of `center`, in nearby-search order.

        Both arguments are validated before any lister is called.
        """
        _validate_instant(at)
        _validate_point(center.latitude, center.longitude)

        free_ids = {station.id for station in await self.find_free(at)}
        nearby = await self.find_nearby(center, radius_km)

        return [station for station in nearby if station.id in free_ids]
