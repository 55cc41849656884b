from typing import List, Tuple

from email_validator import EmailNotValidError, validate_email

from miniparty.models.booking import BookingCreate

MIN_PHONE_LENGTH = 7
MIN_DURATION, MAX_DURATION = 1, 8
MIN_GUESTS, MAX_GUESTS = 1, 100

def is_valid_email(value: str) -> bool:
    """
    Accepts a single mailbox, either `addr@host` or `Name <addr@host>`.
    Only the syntax is checked: dotless and special-use domains, quoted
    local parts and domain literals all pass.
    """
    try:
        validate_email(
            value,
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
            allow_quoted_local=True,
            allow_domain_literal=True,
            allow_display_name=True,
        )
    except EmailNotValidError:
        return False
    return True

def validate_booking(candidate: BookingCreate) -> Tuple[BookingCreate, List[str]]:
    """
    Normalizes a submitted booking and checks it.
    Returns the trimmed record and the list of violations, which is empty
    only when the record may be stored. Every rule is checked, errors accumulate.
    Date and time are taken as-is; no calendar or overlap checks are done.
    """
    booking = candidate.model_copy(update={
        "name": candidate.name.strip(),
        "email": candidate.email.strip(),
        "phone": candidate.phone.strip(),
    })

    errors = []
    if not booking.name:
        errors.append("Name is required")
    if not is_valid_email(booking.email):
        errors.append("Valid email is required")
    if len(booking.phone) < MIN_PHONE_LENGTH:
        errors.append("Valid phone number is required")
    if not booking.date:
        errors.append("Date is required")
    if not booking.time:
        errors.append("Time is required")
    if not MIN_DURATION <= booking.duration <= MAX_DURATION:
        errors.append(f"Duration must be between {MIN_DURATION} and {MAX_DURATION} hours")
    if not MIN_GUESTS <= booking.guests <= MAX_GUESTS:
        errors.append(f"Guests must be between {MIN_GUESTS} and {MAX_GUESTS}")

    return booking, errors
