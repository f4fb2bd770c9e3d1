"""Report domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, Field


class ReportUpdate(BaseModel):
    report_details: str = Field(min_length=1, max_length=20000)


class ReportCreate(ReportUpdate):
    appointment_id: int
