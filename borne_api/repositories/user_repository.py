from typing import Any, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.models.user import User


class UserRepository:
    """
    Repository for managing user persistence.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def find_conflict(
        self,
        username: str,
        email: str,
        exclude_id: Optional[int] = None,
    ) -> Optional[User]:
        """
        Return a user already using `username` or `email`, ignoring `exclude_id`.

        Args:
            username: Handle to check.
            email: E-mail address to check.
            exclude_id: User being replaced, which may keep its own values.

        Returns:
            The first conflicting `User`, or None.
        """
        stmt = select(User).where(or_(User.username == username, User.email == email))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        res = await self.db.execute(stmt.limit(1))
        return res.scalar_one_or_none()

    async def list_users(self, limit: int = 1000, offset: int = 0) -> List[User]:
        stmt = select(User).order_by(User.id.asc()).limit(limit).offset(offset)
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def count_users(self) -> int:
        return int((await self.db.execute(select(func.count(User.id)))).scalar_one())

    async def create(self, **fields: Any) -> User:
        user = User(**fields)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update(self, user: User, **fields: Any) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """
        Delete a user. Its places and reservations are kept without a user.
        """
        await self.db.delete(user)
        await self.db.commit()
