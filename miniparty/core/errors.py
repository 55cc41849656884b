class StorageError(Exception):
    """Raised by a booking store when the underlying medium cannot be read or written."""


class BookingValidationError(Exception):
    """Raised when a submitted booking breaks one or more rules. Carries every violation."""

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
