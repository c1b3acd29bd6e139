from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.core.config import settings
from borne_api.core.db import get_db
from borne_api.models.station import StationStatus
from borne_api.repositories.place_repository import PlaceRepository
from borne_api.repositories.reservation_repository import ReservationRepository
from borne_api.repositories.station_repository import StationRepository
from borne_api.schemas.stations import StationIn, StationListResponse, StationOut
from borne_api.services.station_locator import GeoPoint, StationLocator

router = APIRouter(prefix="/stations", tags=["Stations"])


def get_station_locator(db: AsyncSession = Depends(get_db)) -> StationLocator:
    """
    Build a station locator backed by the request's database session.
    """
    return StationLocator(
        station_lister=StationRepository(db),
        reservation_lister=ReservationRepository(db),
    )


async def _require_place(place_id: Optional[int], db: AsyncSession) -> None:
    if place_id is not None and not await PlaceRepository(db).get_by_id(place_id):
        raise HTTPException(status_code=404, detail="Place not found")


def radius_query() -> float:
    return Query(
        default=settings.default_radius_km,
        gt=0,
        le=settings.max_radius_km,
        description="Search radius in kilometers",
    )


# ---------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------


@router.get(
    "/nearby",
    response_model=List[StationOut],
    summary="Stations near a point",
    description="Returns the stations within `radius_km` of the given point (boundary included).",
)
async def find_nearby_stations(
    latitude: float = Query(..., description="Latitude of the search center"),
    longitude: float = Query(..., description="Longitude of the search center"),
    radius_km: float = radius_query(),
    locator: StationLocator = Depends(get_station_locator),
) -> List[StationOut]:
    return await locator.find_nearby(GeoPoint(latitude, longitude), radius_km)


@router.get(
    "/free",
    response_model=List[StationOut],
    summary="Stations free at an instant",
    description=(
        "Returns the stations without an accepted reservation strictly covering `at`. "
        "A reservation starting or ending exactly at `at` does not make a station busy."
    ),
)
async def find_free_stations(
    at: datetime = Query(..., description="Instant to check (ISO 8601, naive values are UTC)"),
    locator: StationLocator = Depends(get_station_locator),
) -> List[StationOut]:
    return await locator.find_free(at)


@router.get(
    "/free-nearby",
    response_model=List[StationOut],
    summary="Free stations near a point",
    description="Intersection of the nearby and free searches.",
)
async def find_free_nearby_stations(
    latitude: float = Query(...),
    longitude: float = Query(...),
    at: datetime = Query(...),
    radius_km: float = radius_query(),
    locator: StationLocator = Depends(get_station_locator),
) -> List[StationOut]:
    return await locator.find_free_nearby(GeoPoint(latitude, longitude), radius_km, at)


# ---------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------


@router.get(
    "",
    response_model=StationListResponse,
    summary="List stations",
    description="Returns stored stations. Optionally filter by operational status.",
)
async def list_stations(
    status_filter: Optional[StationStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=200, ge=1, le=5000),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> StationListResponse:
    repo = StationRepository(db)

    items = await repo.list_stations(status=status_filter, limit=limit, offset=offset)
    total = await repo.count_stations(status=status_filter)

    return StationListResponse(
        items=[StationOut.model_validate(x) for x in items],
        total=total,
    )


@router.get("/{station_id}", response_model=StationOut, summary="Get a station")
async def get_station(station_id: int, db: AsyncSession = Depends(get_db)) -> StationOut:
    station = await StationRepository(db).get_by_id(station_id)
    if not station:
        raise HTTPException(status_code=404, detail="Station not found")
    return StationOut.model_validate(station)


@router.post(
    "",
    response_model=StationOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a station",
)
async def create_station(payload: StationIn, db: AsyncSession = Depends(get_db)) -> StationOut:
    await _require_place(payload.place_id, db)
    station = await StationRepository(db).create(**payload.model_dump())
    return StationOut.model_validate(station)


@router.put("/{station_id}", response_model=StationOut, summary="Replace a station")
async def update_station(
    station_id: int,
    payload: StationIn,
    db: AsyncSession = Depends(get_db),
) -> StationOut:
    repo = StationRepository(db)
    station = await repo.get_by_id(station_id)
    if not station:
        raise HTTPException(status_code=404, detail="Station not found")
    await _require_place(payload.place_id, db)

    station = await repo.update(station, **payload.model_dump())
    return StationOut.model_validate(station)


@router.delete(
    "/{station_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a station",
    description="Deletes the station together with its reservations and tariffs.",
)
async def delete_station(station_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    repo = StationRepository(db)
    station = await repo.get_by_id(station_id)
    if not station:
        raise HTTPException(status_code=404, detail="Station not found")

    await repo.delete(station)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
