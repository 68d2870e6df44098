import logging
from datetime import date
from typing import List

from fastapi import FastAPI, Depends, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import settings
from database import init_db, close_db, get_session
from errors import (
    BookingError,
    BookingNotFoundError,
    InvalidDurationError,
    RoomNotFoundError,
    SlotTakenError,
)
from models import BookingRequest, BookingResponse, RoomResponse
from repositories import SqlBookingStore, SqlRoomDirectory
from service import BookingService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Meeting Room Booking System")

ERROR_STATUS = {
    RoomNotFoundError: status.HTTP_404_NOT_FOUND,
    BookingNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidDurationError: status.HTTP_400_BAD_REQUEST,
    SlotTakenError: status.HTTP_409_CONFLICT,
}


async def get_booking_service(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(SqlRoomDirectory(session), SqlBookingStore(session))


@app.on_event("startup")
async def on_startup():
    await init_db()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return PlainTextResponse(
        exc.message,
        status_code=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed or missing fields are a plain bad request, the service is never reached
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return PlainTextResponse(
        "Internal storage error.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# --- GET /api/rooms ---
@app.get("/api/rooms", response_model=List[RoomResponse])
async def list_rooms(service: BookingService = Depends(get_booking_service)):
    return await service.list_rooms()


# --- GET /api/rooms/{room_id}/bookings ---
@app.get("/api/rooms/{room_id}/bookings", response_model=List[BookingResponse])
async def get_bookings(
    room_id: int,
    booking_date: date = Query(alias="date"),
    service: BookingService = Depends(get_booking_service),
):
    return await service.list_bookings(room_id, booking_date)


# --- POST /api/bookings ---
@app.post("/api/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingRequest,
    service: BookingService = Depends(get_booking_service),
):
    return await service.create_booking(booking_data)


# --- DELETE /api/booking/{booking_id} ---
@app.delete("/api/booking/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
):
    await service.cancel_booking(booking_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
