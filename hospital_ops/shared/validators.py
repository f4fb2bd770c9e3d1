"""Shared validation utilities"""

import re
from typing import Optional

from ..utils.date_time import TIME_12H_PATTERN, parse_date_string

NAME_PATTERN = re.compile(r"^[a-zA-Z]+(?:\s[a-zA-Z]+)*$")
ALPHANUMERIC_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")


def validate_mobile_number(mobile: str) -> str:
    """
    Validate a 10-digit mobile number.

    Raises:
        ValueError: If the number is not exactly 10 digits
    """
    mobile = (mobile or "").strip()
    if not re.fullmatch(r"\d{10}", mobile):
        raise ValueError("Mobile number must be 10 digits")
    return mobile


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


def validate_person_name(name: str) -> str:
    """Letters separated by single spaces, 3 to 30 characters"""
    name = (name or "").strip()
    if not 3 <= len(name) <= 30 or not NAME_PATTERN.match(name):
        raise ValueError("Name must be 3-30 letters, words separated by single spaces")
    return name


def validate_reference_id(value: Optional[str]) -> Optional[str]:
    """Op-ids and electronic ids: alphanumeric, 4 to 30 characters"""
    if value is None:
        return value
    value = value.strip()
    if not 4 <= len(value) <= 30 or not ALPHANUMERIC_PATTERN.match(value):
        raise ValueError("Identifier must be 4-30 alphanumeric characters")
    return value


def validate_appointment_date(value: str) -> str:
    """YYYY-MM-DD that names a real calendar day"""
    return parse_date_string(value).isoformat()


def validate_appointment_time(value: str) -> str:
    """
    Normalize a 12-hour clock time to "hh:mm AM|PM".

    Raises:
        ValueError: If the value is not a 12-hour time
    """
    match = TIME_12H_PATTERN.match((value or "").strip())
    if not match:
        raise ValueError("Time must be in hh:mm AM/PM format")
    return f"{int(match.group(1)):02d}:{match.group(2)} {match.group(3).upper()}"


def validate_scan_type(value: str) -> str:
    """Scan type names: letters separated by single spaces, 3 to 30 characters"""
    value = (value or "").strip()
    if not 3 <= len(value) <= 30 or not NAME_PATTERN.match(value):
        raise ValueError("Scan type must be 3-30 letters, words separated by single spaces")
    return value


def validate_gender(value: str) -> str:
    """Single word, letters only, stored lowercase"""
    value = (value or "").strip().lower()
    if not value.isalpha():
        raise ValueError("Gender must contain letters only")
    return value


def validate_pin_code(value: int) -> int:
    """Six digit postal code"""
    if not 100000 <= value <= 999999:
        raise ValueError("Pin code must be 6 digits")
    return value
