"""Patient domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import (
    validate_email,
    validate_gender,
    validate_mobile_number,
    validate_person_name,
    validate_reference_id,
)


class PatientFields(BaseModel):
    """Demographic fields shared by patient creation and appointment creation"""

    mobile_number: str
    name: str
    email: Optional[str] = None
    gender: str
    age: int = Field(ge=0, le=130)
    pin_code: int
    electronic_id: Optional[str] = None
    address: Optional[str] = None

    @field_validator("mobile_number")
    @classmethod
    def validate_mobile(cls, v):
        return validate_mobile_number(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return validate_person_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("gender")
    @classmethod
    def validate_gender_field(cls, v):
        return validate_gender(v)

    @field_validator("electronic_id")
    @classmethod
    def validate_electronic_id(cls, v):
        return validate_reference_id(v)


class PatientCreate(PatientFields):
    """Schema for registering a patient directly"""

    op_id: Optional[str] = None

    @field_validator("op_id")
    @classmethod
    def validate_op_id(cls, v):
        return validate_reference_id(v)


class PatientUpdate(PatientCreate):
    """Full replacement of a patient's details"""


class PatientResponse(BaseModel):
    patient_id: int
    op_id: Optional[str] = None
    mobile_number: str
    name: str
    email: Optional[str] = None
    gender: str
    age: int
    pin_code: int
    electronic_id: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_model(cls, patient) -> "PatientResponse":
        return cls(
            patient_id=patient.id,
            op_id=patient.op_id,
            mobile_number=patient.mobile_number,
            name=patient.name,
            email=patient.email,
            gender=patient.gender,
            age=patient.age,
            pin_code=patient.pin_code,
            electronic_id=patient.electronic_id,
            address=patient.address,
        )
