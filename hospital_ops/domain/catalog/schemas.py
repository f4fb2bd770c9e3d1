"""Catalog domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_scan_type


class ScanTypeCreate(BaseModel):
    scan_type: str

    @field_validator("scan_type")
    @classmethod
    def validate_scan_type(cls, v):
        return validate_scan_type(v)


class DepartmentCreate(BaseModel):
    department: str

    @field_validator("department")
    @classmethod
    def validate_department(cls, v):
        v = (v or "").strip()
        if not 2 <= len(v) <= 50:
            raise ValueError("Department must be 2-50 characters")
        return v


class TemplateCreate(BaseModel):
    template_name: str
    template: str = Field(min_length=1, max_length=20000)

    @field_validator("template_name")
    @classmethod
    def validate_template_name(cls, v):
        v = (v or "").strip()
        if not 3 <= len(v) <= 50:
            raise ValueError("Template name must be 3-50 characters")
        return v
