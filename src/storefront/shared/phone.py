"""Mobile number validation shared by users and orders."""

import re

from protean.exceptions import ValidationError

# Ten digits, first digit 6-9 (Indian mobile numbering)
MOBILE_NUMBER = re.compile(r"^[6-9]\d{9}$")


def validate_mobile(number: str | None, field: str = "phone") -> str:
    """Return the number stripped of surrounding whitespace, or raise ValidationError."""
    value = (number or "").strip()
    if not MOBILE_NUMBER.match(value):
        raise ValidationError({field: ["Please enter a valid 10-digit phone number"]})
    return value
