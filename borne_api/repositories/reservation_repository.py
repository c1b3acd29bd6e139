from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from borne_api.models.reservation import Reservation, ReservationStatus


class ReservationRepository:
    """
    Repository for managing reservation persistence.

    Besides the usual lookups it serves as the reservation lister consumed
    by the station locator.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def list_all_reservations(self) -> List[Reservation]:
        """
        Return every known reservation, ordered by id, whatever its status.
        """
        res = await self.db.execute(select(Reservation).order_by(Reservation.id.asc()))
        return list(res.scalars().all())

    async def list_by_station(self, station_id: int) -> List[Reservation]:
        """
        Return the reservations of one station in chronological order.
        """
        stmt = (
            select(Reservation)
            .where(Reservation.station_id == station_id)
            .order_by(Reservation.start_at.asc(), Reservation.id.asc())
        )
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        stmt = select(Reservation).where(Reservation.id == reservation_id)
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def create(
        self,
        station_id: int,
        start_at: datetime,
        end_at: datetime,
        status: ReservationStatus = ReservationStatus.PENDING,
        total_amount: Optional[float] = None,
        user_id: Optional[int] = None,
    ) -> Reservation:
        """
        Persist a new reservation.

        Args:
            station_id: Reserved station.
            start_at: Start of the interval.
            end_at: End of the interval.
            status: Initial lifecycle status.
            total_amount: Optional amount charged.
            user_id: Optional user holding the reservation.

        Returns:
            The newly created `Reservation` instance.
        """
        reservation = Reservation(
            station_id=station_id,
            user_id=user_id,
            start_at=start_at,
            end_at=end_at,
            status=status,
            total_amount=total_amount,
            validated_at=self._now() if status == ReservationStatus.ACCEPTED else None,
        )
        self.db.add(reservation)
        await self.db.commit()
        await self.db.refresh(reservation)
        return reservation

    async def set_status(self, reservation: Reservation, status: ReservationStatus) -> Reservation:
        """
        Move a reservation to a new status, stamping `validated_at` on acceptance.
        """
        reservation.status = status
        if status == ReservationStatus.ACCEPTED:
            reservation.validated_at = self._now()
        await self.db.commit()
        await self.db.refresh(reservation)
        return reservation

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)
