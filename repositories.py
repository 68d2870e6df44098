import logging
from abc import ABC, abstractmethod
from datetime import date, time
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from errors import SlotTakenError
from models import Booking, MeetingRoom

logger = logging.getLogger(__name__)


class RoomDirectory(ABC):
    @abstractmethod
    async def find_by_id(self, room_id: int) -> Optional[MeetingRoom]:
        """Return the room, or None if it does not exist."""

    @abstractmethod
    async def list_all(self) -> List[MeetingRoom]:
        """Return every room ordered by id."""


class BookingStore(ABC):
    @abstractmethod
    async def find_overlapping(
        self, room: MeetingRoom, booking_date: date, time_from: time, time_to: time
    ) -> List[Booking]:
        """Return bookings of the room on that date intersecting [time_from, time_to)."""

    @abstractmethod
    async def find_by_room_and_date(self, room: MeetingRoom, booking_date: date) -> List[Booking]:
        ...

    @abstractmethod
    async def save(self, booking: Booking) -> Booking:
        """Persist the booking; the store assigns its id.

        May raise SlotTakenError when the storage layer itself rejects the slot.
        """

    @abstractmethod
    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        ...

    @abstractmethod
    async def delete_by_id(self, booking_id: int) -> None:
        ...


class SqlRoomDirectory(RoomDirectory):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, room_id: int) -> Optional[MeetingRoom]:
        return await self.session.get(MeetingRoom, room_id)

    async def list_all(self) -> List[MeetingRoom]:
        statement = select(MeetingRoom).order_by(MeetingRoom.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class SqlBookingStore(BookingStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_overlapping(
        self, room: MeetingRoom, booking_date: date, time_from: time, time_to: time
    ) -> List[Booking]:
        # Half-open intervals: touching bookings (end == start) do not overlap
        statement = select(Booking).where(
            Booking.room_id == room.id,
            Booking.booking_date == booking_date,
            Booking.time_from < time_to,
            Booking.time_to > time_from,
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def find_by_room_and_date(self, room: MeetingRoom, booking_date: date) -> List[Booking]:
        statement = (
            select(Booking)
            .where(Booking.room_id == room.id, Booking.booking_date == booking_date)
            .order_by(Booking.time_from)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def save(self, booking: Booking) -> Booking:
        try:
            self.session.add(booking)
            await self.session.commit()
        except IntegrityError as exc:
            # A concurrent writer took the slot between the overlap check and this insert
            await self.session.rollback()
            logger.warning("Insert rejected by storage constraint: %s", exc.orig)
            raise SlotTakenError() from exc
        await self.session.refresh(booking)
        return booking

    async def find_by_id(self, booking_id: int) -> Optional[Booking]:
        return await self.session.get(Booking, booking_id)

    async def delete_by_id(self, booking_id: int) -> None:
        booking = await self.session.get(Booking, booking_id)
        if booking is not None:
            await self.session.delete(booking)
            await self.session.commit()
