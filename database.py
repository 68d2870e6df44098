import logging
from typing import AsyncIterator, List

from sqlmodel import SQLModel, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

import settings
from models import MeetingRoom

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, future=True)

async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def seed_rooms(session: AsyncSession, names: List[str]) -> None:
    """Insert one room per name, only when no room exists yet."""
    # Names are unique in the table
    names = list(dict.fromkeys(names))
    if not names:
        return
    result = await session.execute(select(MeetingRoom.id).limit(1))
    if result.first() is not None:
        return
    session.add_all([MeetingRoom(name=name) for name in names])
    await session.commit()
    logger.info("Seeded %d meeting room(s)", len(names))


async def init_db():
    async with engine.begin() as conn:
        # This creates the tables if they don't exist
        await conn.run_sync(SQLModel.metadata.create_all)
    async with async_session() as session:
        await seed_rooms(session, settings.SEED_ROOMS)


async def close_db():
    await engine.dispose()


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session
