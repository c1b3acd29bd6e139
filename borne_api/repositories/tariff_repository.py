from datetime import date, time
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.models.tariff import Tariff


class TariffRepository:
    """
    Repository for the hourly tariffs of stations.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_station(self, station_id: int) -> List[Tariff]:
        """
        Return the tariffs of a station ordered by weekday then start time.
        Tariffs without a weekday (every day) come first.
        """
        stmt = (
            select(Tariff)
            .where(Tariff.station_id == station_id)
            .order_by(Tariff.weekday.asc().nulls_first(), Tariff.start_time.asc())
        )
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def create(
        self,
        station_id: int,
        price_per_minute: float,
        start_time: time,
        end_time: time,
        weekday: Optional[int] = None,
        valid_from: Optional[date] = None,
        valid_to: Optional[date] = None,
        active: bool = True,
    ) -> Tariff:
        tariff = Tariff(
            station_id=station_id,
            price_per_minute=price_per_minute,
            start_time=start_time,
            end_time=end_time,
            weekday=weekday,
            valid_from=valid_from,
            valid_to=valid_to,
            active=active,
        )
        self.db.add(tariff)
        await self.db.commit()
        await self.db.refresh(tariff)
        return tariff
