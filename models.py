from typing import Optional
from datetime import date, time
from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint, UniqueConstraint
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel


class MeetingRoom(SQLModel, table=True):
    __tablename__ = "meeting_rooms"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    __table_args__ = (
        # Storage-level backstop against two concurrent bookings of the same start slot
        UniqueConstraint("room_id", "booking_date", "time_from", name="unique_booking_start"),
        CheckConstraint("time_to > time_from", name="booking_time_order"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    room_id: int = Field(foreign_key="meeting_rooms.id", index=True)
    booking_date: date = Field(index=True)
    time_from: time
    time_to: time
    employee_email: str


# Pydantic Schemas for Request/Response (camelCase on the wire)
class BookingRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room_id: int
    employee_email: EmailStr
    booking_date: date
    time_from: time
    time_to: time

    @field_validator("time_from", "time_to")
    @classmethod
    def must_be_naive(cls, value: time) -> time:
        # Bookings live in a single implicit zone
        if value.tzinfo is not None:
            raise ValueError("time must not carry a UTC offset")
        return value


class BookingResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room: str
    booking_date: date
    time_from: time
    time_to: time
    email: str


class RoomResponse(BaseModel):
    id: int
    name: str
