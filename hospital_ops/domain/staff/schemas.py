"""Staff domain schemas - Pydantic models for validation"""

import re
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import (
    validate_email,
    validate_mobile_number,
    validate_person_name,
    validate_reference_id,
)


class StaffCreate(BaseModel):
    """Fields every staff account carries"""

    name: str
    email: str
    contact_number: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return validate_person_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("contact_number")
    @classmethod
    def validate_contact_number(cls, v):
        return validate_mobile_number(v)


class SystemAdminCreate(StaffCreate):
    branch_id: int


class DoctorCreate(StaffCreate):
    registration_id: str
    training_completed_year: str
    department_id: int
    time_from: Optional[str] = None
    time_to: Optional[str] = None

    @field_validator("registration_id")
    @classmethod
    def validate_registration_id(cls, v):
        return validate_reference_id(v)

    @field_validator("training_completed_year")
    @classmethod
    def validate_year(cls, v):
        v = (v or "").strip()
        if not re.fullmatch(r"(19|20)\d{2}", v):
            raise ValueError("Year must be a 4 digit year")
        return v

    @field_validator("time_from", "time_to")
    @classmethod
    def validate_shift_time(cls, v):
        """24-hour HH:MM"""
        if v is None:
            return v
        v = v.strip()
        if not re.fullmatch(r"([01]\d|2[0-3]):[0-5]\d", v):
            raise ValueError("Time must be in HH:MM format")
        return v
