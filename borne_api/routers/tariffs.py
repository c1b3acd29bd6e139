from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.core.db import get_db
from borne_api.repositories.station_repository import StationRepository
from borne_api.repositories.tariff_repository import TariffRepository
from borne_api.schemas.tariffs import TariffIn, TariffOut

router = APIRouter(prefix="/stations/{station_id}/tariffs", tags=["Tariffs"])


async def _require_station(station_id: int, db: AsyncSession) -> None:
    if not await StationRepository(db).get_by_id(station_id):
        raise HTTPException(status_code=404, detail="Station not found")


@router.get("", response_model=List[TariffOut], summary="List the hourly tariffs of a station")
async def list_tariffs(station_id: int, db: AsyncSession = Depends(get_db)) -> List[TariffOut]:
    await _require_station(station_id, db)
    tariffs = await TariffRepository(db).list_by_station(station_id)
    return [TariffOut.model_validate(t) for t in tariffs]


@router.post(
    "",
    response_model=TariffOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add an hourly tariff to a station",
)
async def create_tariff(station_id: int, payload: TariffIn, db: AsyncSession = Depends(get_db)) -> TariffOut:
    await _require_station(station_id, db)
    tariff = await TariffRepository(db).create(station_id=station_id, **payload.model_dump())
    return TariffOut.model_validate(tariff)
