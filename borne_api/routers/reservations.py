from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.core.db import get_db
from borne_api.repositories.reservation_repository import ReservationRepository
from borne_api.repositories.station_repository import StationRepository
from borne_api.repositories.user_repository import UserRepository
from borne_api.schemas.reservations import (
    ReservationIn,
    ReservationListResponse,
    ReservationOut,
    ReservationStatusUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get(
    "",
    response_model=ReservationListResponse,
    summary="List reservations",
    description="Returns every reservation, or only those of `station_id` in chronological order.",
)
async def list_reservations(
    station_id: Optional[int] = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> ReservationListResponse:
    repo = ReservationRepository(db)

    if station_id is None:
        items = await repo.list_all_reservations()
    else:
        items = await repo.list_by_station(station_id)

    return ReservationListResponse(
        items=[ReservationOut.model_validate(x) for x in items],
        total=len(items),
    )


@router.get("/{reservation_id}", response_model=ReservationOut, summary="Get a reservation")
async def get_reservation(reservation_id: int, db: AsyncSession = Depends(get_db)) -> ReservationOut:
    reservation = await ReservationRepository(db).get_by_id(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return ReservationOut.model_validate(reservation)


@router.post(
    "",
    response_model=ReservationOut,
    status_code=status.HTTP_201_CREATED,
    summary="Reserve a station",
)
async def create_reservation(payload: ReservationIn, db: AsyncSession = Depends(get_db)) -> ReservationOut:
    """
    Create a reservation on an existing station.

    **Errors:**
    - 404 if the station (or the given user) does not exist
    - 422 if `end_at` is not after `start_at`
    """
    station = await StationRepository(db).get_by_id(payload.station_id)
    if not station:
        raise HTTPException(status_code=404, detail="Station not found")
    if payload.user_id is not None and not await UserRepository(db).get_by_id(payload.user_id):
        raise HTTPException(status_code=404, detail="User not found")

    reservation = await ReservationRepository(db).create(**payload.model_dump())
    logger.info(
        "reservation_created",
        reservation_id=reservation.id,
        station_id=reservation.station_id,
        status=reservation.status.value,
    )
    return ReservationOut.model_validate(reservation)


@router.patch(
    "/{reservation_id}/status",
    response_model=ReservationOut,
    summary="Change the status of a reservation",
)
async def update_reservation_status(
    reservation_id: int,
    payload: ReservationStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> ReservationOut:
    repo = ReservationRepository(db)
    reservation = await repo.get_by_id(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    previous = reservation.status
    reservation = await repo.set_status(reservation, payload.status)
    logger.info(
        "reservation_status_changed",
        reservation_id=reservation.id,
        previous=previous.value,
        status=reservation.status.value,
    )
    return ReservationOut.model_validate(reservation)
