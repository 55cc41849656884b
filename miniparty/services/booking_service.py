from typing import List

from miniparty.core.errors import BookingValidationError
from miniparty.core.logger import logger
from miniparty.models.booking import Booking, BookingCreate
from miniparty.services.db_service import BookingStore
from miniparty.services.validation import validate_booking

class BookingService:
    def __init__(self, store: BookingStore):
        self.store = store

    async def create_booking(self, candidate: BookingCreate) -> Booking:
        """
        Validates and stores a booking.
        Raises BookingValidationError with every violation, or StorageError if the insert fails.
        """
        booking, errors = validate_booking(candidate)
        if errors:
            logger.info(f"🚫 Booking rejected with {len(errors)} error(s)")
            raise BookingValidationError(errors)

        logger.info(f'📥 Booking Request - Date: {booking.date}, Time: {booking.time}, Guests: {booking.guests}')
        stored = await self.store.insert(booking)
        logger.info(f"✅ Booking {stored.id} saved for {stored.date} {stored.time}")
        return stored

    async def list_bookings(self) -> List[Booking]:
        return await self.store.list_all()
