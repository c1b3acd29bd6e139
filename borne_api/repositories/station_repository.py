from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.models.station import Station, StationStatus


class StationRepository:
    """
    Repository for managing charging station persistence.

    This repository encapsulates all database operations related to
    `Station` entities, providing a clean abstraction over SQLAlchemy
    queries and avoiding direct database access from services or routers.

    It is also the station lister consumed by the station locator.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def list_all_stations(self) -> List[Station]:
        """
        Return every known station, ordered by id, without filtering or pagination.
        """
        res = await self.db.execute(select(Station).order_by(Station.id.asc()))
        return list(res.scalars().all())

    async def get_by_id(self, station_id: int) -> Optional[Station]:
        """
        Return a station by its internal DB id, or None if not found.
        """
        stmt = select(Station).where(Station.id == station_id)
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def list_stations(
        self,
        status: Optional[StationStatus] = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> List[Station]:
        """
        List stations with optional status filtering and pagination.

        Args:
            status: Optional operational status filter.
            limit: Max items to return.
            offset: Pagination offset.

        Returns:
            A list of Station models.
        """
        stmt = select(Station)
        if status:
            stmt = stmt.where(Station.status == status)
        stmt = stmt.order_by(Station.id.asc()).limit(limit).offset(offset)

        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def list_by_place(self, place_id: int) -> List[Station]:
        stmt = select(Station).where(Station.place_id == place_id).order_by(Station.id.asc())
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def count_stations(self, status: Optional[StationStatus] = None) -> int:
        stmt = select(func.count(Station.id))
        if status:
            stmt = stmt.where(Station.status == status)
        return int((await self.db.execute(stmt)).scalar_one())

    async def create(self, **fields: Any) -> Station:
        """
        Persist a new station and return it with its generated id.
        """
        station = Station(**fields)
        self.db.add(station)
        await self.db.commit()
        await self.db.refresh(station)
        return station

    async def update(self, station: Station, **fields: Any) -> Station:
        for key, value in fields.items():
            setattr(station, key, value)
        await self.db.commit()
        await self.db.refresh(station)
        return station

    async def delete(self, station: Station) -> None:
        await self.db.delete(station)
        await self.db.commit()
