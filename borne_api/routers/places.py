from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.core.db import get_db
from borne_api.repositories.place_repository import PlaceRepository
from borne_api.repositories.station_repository import StationRepository
from borne_api.repositories.user_repository import UserRepository
from borne_api.schemas.places import PlaceIn, PlaceListResponse, PlaceOut
from borne_api.schemas.stations import StationOut

router = APIRouter(prefix="/places", tags=["Places"])


async def _require_owner(owner_id: Optional[int], db: AsyncSession) -> None:
    if owner_id is not None and not await UserRepository(db).get_by_id(owner_id):
        raise HTTPException(status_code=404, detail="Owner not found")


@router.get(
    "",
    response_model=PlaceListResponse,
    summary="List places",
    description="Returns places with their address. Optionally filter by owner.",
)
async def list_places(
    owner_id: Optional[int] = Query(default=None),
    limit: int = Query(default=200, ge=1, le=5000),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> PlaceListResponse:
    repo = PlaceRepository(db)

    items = await repo.list_places(owner_id=owner_id, limit=limit, offset=offset)
    total = await repo.count_places(owner_id=owner_id)

    return PlaceListResponse(
        items=[PlaceOut.model_validate(x) for x in items],
        total=total,
    )


@router.get("/{place_id}", response_model=PlaceOut, summary="Get a place")
async def get_place(place_id: int, db: AsyncSession = Depends(get_db)) -> PlaceOut:
    place = await PlaceRepository(db).get_by_id(place_id)
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")
    return PlaceOut.model_validate(place)


@router.get(
    "/{place_id}/stations",
    response_model=List[StationOut],
    summary="List the stations of a place",
)
async def list_place_stations(place_id: int, db: AsyncSession = Depends(get_db)) -> List[StationOut]:
    if not await PlaceRepository(db).get_by_id(place_id):
        raise HTTPException(status_code=404, detail="Place not found")

    stations = await StationRepository(db).list_by_place(place_id)
    return [StationOut.model_validate(s) for s in stations]


@router.post(
    "",
    response_model=PlaceOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a place",
)
async def create_place(payload: PlaceIn, db: AsyncSession = Depends(get_db)) -> PlaceOut:
    await _require_owner(payload.owner_id, db)

    place = await PlaceRepository(db).create(**payload.model_dump())
    return PlaceOut.model_validate(place)


@router.put("/{place_id}", response_model=PlaceOut, summary="Replace a place")
async def update_place(place_id: int, payload: PlaceIn, db: AsyncSession = Depends(get_db)) -> PlaceOut:
    repo = PlaceRepository(db)
    place = await repo.get_by_id(place_id)
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")
    await _require_owner(payload.owner_id, db)

    place = await repo.update(place, **payload.model_dump())
    return PlaceOut.model_validate(place)


@router.delete(
    "/{place_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a place",
    description="Deletes the place and its address. Its stations are kept, without a place.",
)
async def delete_place(place_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    repo = PlaceRepository(db)
    place = await repo.get_by_id(place_id)
    if not place:
        raise HTTPException(status_code=404, detail="Place not found")

    await repo.delete(place)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
