"""Appointment domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import (
    validate_appointment_date,
    validate_appointment_time,
    validate_email,
    validate_gender,
    validate_mobile_number,
    validate_person_name,
    validate_reference_id,
    validate_scan_type,
)
from ..patients.schemas import PatientFields

PATIENT_REQUIRED_FIELDS = ("mobile_number", "name", "gender", "age", "pin_code")


class ScheduleFields(BaseModel):
    """Date ("YYYY-MM-DD") and 12-hour time ("hh:mm AM|PM") of an appointment"""

    date: str
    time: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        return validate_appointment_date(v)

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_appointment_time(v)


class AppointmentCreate(ScheduleFields):
    """
    Schema for booking an appointment.

    Either ``patient_id`` names an existing patient, or the patient fields
    describe a new patient that is registered together with the appointment.
    """

    patient_id: Optional[int] = None
    op_id: Optional[str] = None
    billing_id: Optional[str] = None
    usg_ref_id: Optional[str] = None

    doctor_id: int
    branch_id: int
    robot_id: int
    scan_type: str
    differential_diagnosis: str = Field(min_length=1, max_length=2000)

    mobile_number: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=130)
    pin_code: Optional[int] = None
    electronic_id: Optional[str] = None
    address: Optional[str] = None

    @field_validator("op_id", "electronic_id", "billing_id", "usg_ref_id")
    @classmethod
    def validate_reference(cls, v):
        return validate_reference_id(v)

    @field_validator("scan_type")
    @classmethod
    def validate_scan(cls, v):
        return validate_scan_type(v)

    @field_validator("mobile_number")
    @classmethod
    def validate_mobile(cls, v):
        if v is None:
            return v
        return validate_mobile_number(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        return validate_person_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("gender")
    @classmethod
    def validate_gender_field(cls, v):
        if v is None:
            return v
        return validate_gender(v)

    @model_validator(mode="after")
    def require_patient(self):
        if self.patient_id is None:
            for field in PATIENT_REQUIRED_FIELDS:
                if getattr(self, field) is None:
                    raise ValueError(f"{field} is required when patient_id is not given")
        return self

    def patient_fields(self) -> PatientFields:
        """The new patient's details, for bookings without ``patient_id``"""
        return PatientFields(
            mobile_number=self.mobile_number,
            name=self.name,
            email=self.email,
            gender=self.gender,
            age=self.age,
            pin_code=self.pin_code,
            electronic_id=self.electronic_id,
            address=self.address,
        )


class AppointmentUpdate(ScheduleFields):
    """Full replacement of an appointment's bookable fields"""

    doctor_id: int
    branch_id: int
    robot_id: int
    scan_type: str
    differential_diagnosis: str = Field(min_length=1, max_length=2000)
    billing_id: Optional[str] = None

    @field_validator("scan_type")
    @classmethod
    def validate_scan(cls, v):
        return validate_scan_type(v)

    @field_validator("billing_id")
    @classmethod
    def validate_billing(cls, v):
        return validate_reference_id(v)


class AppointmentReschedule(ScheduleFields):
    """New slot plus the doctor display name used as the conference owner"""

    doctor_name: str = Field(min_length=1, max_length=100)
