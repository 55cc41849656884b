from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from miniparty.core.errors import BookingValidationError, StorageError
from miniparty.core.logger import logger
from miniparty.core.security import verify_admin_token
from miniparty.models.booking import BookingCreate, BookingCreatedResponse
from miniparty.services.booking_service import BookingService
from miniparty.services.db_service import BookingStore

router = APIRouter()

def get_store(request: Request) -> BookingStore:
    return request.app.state.store

def get_booking_service(store: BookingStore = Depends(get_store)) -> BookingService:
    return BookingService(store)

@router.post("/book", status_code=201)
async def create_booking(
    request: Request,
    booking_service: BookingService = Depends(get_booking_service)
):
    # Body is parsed by hand so that bad JSON and wrong types share one 400
    try:
        payload = await request.json()
        candidate = BookingCreate.model_validate(payload)
    except ValueError:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    try:
        booking = await booking_service.create_booking(candidate)
    except BookingValidationError as e:
        return JSONResponse(status_code=400, content={"errors": e.errors})
    except StorageError:
        return JSONResponse(status_code=500, content={"error": "Failed to save booking"})

    return JSONResponse(
        status_code=201,
        content=BookingCreatedResponse(booking=booking).model_dump()
    )

@router.get("/bookings", dependencies=[Depends(verify_admin_token)])
async def list_bookings(booking_service: BookingService = Depends(get_booking_service)):
    try:
        bookings = await booking_service.list_bookings()
    except StorageError:
        return JSONResponse(status_code=500, content={"error": "Failed to fetch bookings"})

    logger.info(f"📋 Admin listed {len(bookings)} booking(s)")
    return [booking.model_dump() for booking in bookings]
