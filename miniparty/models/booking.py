from pydantic import BaseModel, ConfigDict, field_validator

class BookingCreate(BaseModel):
    # Strict so that "3" or 3.5 is a malformed body rather than a coerced int.
    # Missing or null fields fall back to zero values and are reported by the validator.
    model_config = ConfigDict(strict=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    date: str = ""  # YYYY-MM-DD, sorted as a plain string
    time: str = ""  # HH:MM (24h), sorted as a plain string
    duration: int = 0
    guests: int = 0

    @field_validator("name", "email", "phone", "date", "time", mode="before")
    @classmethod
    def null_as_empty_string(cls, value):
        return "" if value is None else value

    @field_validator("duration", "guests", mode="before")
    @classmethod
    def null_as_zero(cls, value):
        return 0 if value is None else value

class Booking(BookingCreate):
    id: int

class BookingCreatedResponse(BaseModel):
    message: str = "Booking confirmed!"
    booking: Booking
