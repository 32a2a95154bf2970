"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Union


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Args:
        phone: Phone number string in various formats

    Returns:
        Digits only, keeping a leading '+' when given

    Raises:
        ValueError: If the number has fewer than 7 or more than 15 digits
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)
    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 7 and 15 digits")

    return f"+{digits}" if phone.strip().startswith("+") else digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def normalize_timestamp(value: datetime) -> datetime:
    """
    Timestamps are stored naive. Offset-aware input is converted to UTC first
    so that two clients in different zones compare on the same clock.
    """
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert a money-like value without binary floating point drift"""
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps 0.1 as Decimal("0.1") instead of 0.1000000000000000055...
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
