"""Directory domain schemas - Pydantic models for branches and robots"""

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_mobile_number, validate_pin_code, validate_reference_id


class HealthCenterCreate(BaseModel):
    branch_name: str
    branch_contact_number: str
    branch_location: str
    branch_pin_code: int

    @field_validator("branch_name", "branch_location")
    @classmethod
    def validate_text(cls, v):
        v = (v or "").strip()
        if not 3 <= len(v) <= 100:
            raise ValueError("Must be 3-100 characters")
        return v

    @field_validator("branch_contact_number")
    @classmethod
    def validate_contact_number(cls, v):
        return validate_mobile_number(v)

    @field_validator("branch_pin_code")
    @classmethod
    def validate_branch_pin_code(cls, v):
        return validate_pin_code(v)


class RobotCreate(BaseModel):
    robot_registration_id: str

    @field_validator("robot_registration_id")
    @classmethod
    def validate_registration_id(cls, v):
        return validate_reference_id(v)


class RobotMaintenanceUpdate(BaseModel):
    under_maintenance: bool
