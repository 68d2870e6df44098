"""Pytest configuration and shared fixtures for the booking backend tests."""

import os

# settings.py reads these at import time, so they must be set before any app module loads
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SEED_ROOMS"] = "My meeting room,Board room"

from datetime import date, time

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from models import Booking, MeetingRoom

BOOKING_DATE = date(2024, 11, 27)


@pytest.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def room(session):
    room = MeetingRoom(name="My meeting room")
    session.add(room)
    await session.commit()
    await session.refresh(room)
    return room


def make_booking(room_id, time_from, time_to, booking_date=BOOKING_DATE, email="test@acme.com"):
    return Booking(
        room_id=room_id,
        booking_date=booking_date,
        time_from=time_from,
        time_to=time_to,
        employee_email=email,
    )


@pytest.fixture
def default_booking():
    """The 09:30-10:30 booking on room 1 used across the scenarios."""
    return make_booking(1, time(9, 30), time(10, 30))
