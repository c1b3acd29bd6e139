from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.models.place import Place, PlaceAddress


class PlaceRepository:
    """
    Repository for places and their postal addresses.

    A place and its address are written together; reads always return
    the place with its address loaded.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def get_by_id(self, place_id: int) -> Optional[Place]:
        """
        Return a place by id, reloaded from the database, or None if not found.
        """
        stmt = (
            select(Place)
            .where(Place.id == place_id)
            .execution_options(populate_existing=True)
        )
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def list_places(
        self,
        owner_id: Optional[int] = None,
        limit: int = 1000,
        offset: int = 0,
    ) -> List[Place]:
        stmt = select(Place)
        if owner_id is not None:
            stmt = stmt.where(Place.owner_id == owner_id)
        stmt = stmt.order_by(Place.id.asc()).limit(limit).offset(offset)

        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def count_places(self, owner_id: Optional[int] = None) -> int:
        stmt = select(func.count(Place.id))
        if owner_id is not None:
            stmt = stmt.where(Place.owner_id == owner_id)
        return int((await self.db.execute(stmt)).scalar_one())

    async def create(
        self,
        instructions: Optional[str] = None,
        owner_id: Optional[int] = None,
        address: Optional[Dict[str, Any]] = None,
    ) -> Place:
        """
        Persist a new place, with its address when one is given.

        Args:
            instructions: Access instructions.
            owner_id: Owning user.
            address: Address fields (street, postal_code, city, country...).

        Returns:
            The created `Place` with its address loaded.
        """
        place = Place(
            instructions=instructions,
            owner_id=owner_id,
            address=PlaceAddress(**address) if address else None,
        )
        self.db.add(place)
        await self.db.commit()
        return await self.get_by_id(place.id)

    async def update(
        self,
        place: Place,
        instructions: Optional[str] = None,
        owner_id: Optional[int] = None,
        address: Optional[Dict[str, Any]] = None,
    ) -> Place:
        """
        Replace the fields of a place. A missing `address` deletes the stored one.
        """
        place.instructions = instructions
        place.owner_id = owner_id

        if address is None:
            place.address = None
        elif place.address is None:
            place.address = PlaceAddress(**address)
        else:
            for key, value in address.items():
                setattr(place.address, key, value)

        await self.db.commit()
        return await self.get_by_id(place.id)

    async def delete(self, place: Place) -> None:
        """
        Delete a place and its address. Its stations are kept without a place.
        """
        await self.db.delete(place)
        await self.db.commit()
