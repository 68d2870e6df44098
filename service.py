import logging
from datetime import date, datetime, time, timedelta
from typing import List

from errors import BookingNotFoundError, InvalidDurationError, RoomNotFoundError, SlotTakenError
from models import Booking, BookingRequest, BookingResponse, MeetingRoom, RoomResponse
from repositories import BookingStore, RoomDirectory

logger = logging.getLogger(__name__)

SLOT_LENGTH = timedelta(hours=1)


def is_valid_duration(booking_date: date, time_from: time, time_to: time) -> bool:
    duration = datetime.combine(booking_date, time_to) - datetime.combine(booking_date, time_from)
    return duration > timedelta(0) and duration % SLOT_LENGTH == timedelta(0)


def to_response(booking: Booking, room: MeetingRoom) -> BookingResponse:
    return BookingResponse(
        room=room.name,
        booking_date=booking.booking_date,
        time_from=booking.time_from,
        time_to=booking.time_to,
        email=booking.employee_email,
    )


class BookingService:
    def __init__(self, rooms: RoomDirectory, bookings: BookingStore):
        self.rooms = rooms
        self.bookings = bookings

    async def _get_room(self, room_id: int) -> MeetingRoom:
        room = await self.rooms.find_by_id(room_id)
        if room is None:
            logger.warning("Meeting room %s not found", room_id)
            raise RoomNotFoundError()
        return room

    async def create_booking(self, request: BookingRequest) -> BookingResponse:
        room = await self._get_room(request.room_id)

        if not is_valid_duration(request.booking_date, request.time_from, request.time_to):
            logger.warning(
                "Rejected booking for room %s: invalid duration %s-%s",
                room.id, request.time_from, request.time_to,
            )
            raise InvalidDurationError()

        overlapping = await self.bookings.find_overlapping(
            room, request.booking_date, request.time_from, request.time_to
        )
        if overlapping:
            logger.warning(
                "Rejected booking for room %s on %s %s-%s: %d overlapping booking(s)",
                room.id, request.booking_date, request.time_from, request.time_to, len(overlapping),
            )
            raise SlotTakenError()

        booking = await self.bookings.save(
            Booking(
                room_id=room.id,
                booking_date=request.booking_date,
                time_from=request.time_from,
                time_to=request.time_to,
                employee_email=request.employee_email,
            )
        )
        logger.info(
            "Booking %s created for room %s on %s %s-%s",
            booking.id, room.id, booking.booking_date, booking.time_from, booking.time_to,
        )
        return to_response(booking, room)

    async def list_bookings(self, room_id: int, booking_date: date) -> List[BookingResponse]:
        room = await self._get_room(room_id)
        bookings = await self.bookings.find_by_room_and_date(room, booking_date)
        return [to_response(booking, room) for booking in bookings]

    async def cancel_booking(self, booking_id: int) -> None:
        booking = await self.bookings.find_by_id(booking_id)
        if booking is None:
            logger.warning("Booking %s not found", booking_id)
            raise BookingNotFoundError(booking_id)

        await self.bookings.delete_by_id(booking_id)
        logger.info("Booking %s cancelled", booking_id)

    async def list_rooms(self) -> List[RoomResponse]:
        rooms = await self.rooms.list_all()
        return [RoomResponse(id=room.id, name=room.name) for room in rooms]
