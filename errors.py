class BookingError(Exception):
    """Base class for booking-domain failures."""

    message = "Booking request could not be processed."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class RoomNotFoundError(BookingError):
    message = "Meeting room not found."


class BookingNotFoundError(BookingError):
    def __init__(self, booking_id: int):
        self.booking_id = booking_id
        super().__init__(f"Booking with ID {booking_id} not found.")


class InvalidDurationError(BookingError):
    # Covers both end <= start and durations that are not whole hours
    message = "Booking duration must be at least 1 hour and in multiples of 1 hour."


class SlotTakenError(BookingError):
    message = "The room is already booked for the given time slot."
