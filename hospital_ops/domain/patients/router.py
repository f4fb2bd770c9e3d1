"""Patient router - FastAPI endpoints for the patient registry"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import Actor, get_current_actor
from ...config import RoleConfig, get_role_config
from ...database import get_db
from .schemas import PatientCreate, PatientUpdate
from .service import PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(
    db: Session = Depends(get_db),
    roles: RoleConfig = Depends(get_role_config),
) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db, roles)


@router.post("", status_code=201)
async def create_patient(
    data: PatientCreate,
    actor: Actor = Depends(get_current_actor),
    service: PatientService = Depends(get_patient_service),
):
    return service.create_patient(actor, data)


@router.get("")
async def list_patients(
    actor: Actor = Depends(get_current_actor),
    service: PatientService = Depends(get_patient_service),
):
    return service.list_patients(actor)


@router.get("/search")
async def search_patients(
    mobile_number: str = Query(..., pattern=r"^\d{10}$"),
    actor: Actor = Depends(get_current_actor),
    service: PatientService = Depends(get_patient_service),
):
    """Find a tenant's patients by mobile number"""
    return service.search_patients(actor, mobile_number)


@router.get("/{patient_id}")
async def get_patient(
    patient_id: int,
    actor: Actor = Depends(get_current_actor),
    service: PatientService = Depends(get_patient_service),
):
    return service.get_patient(actor, patient_id)


@router.put("/{patient_id}")
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    actor: Actor = Depends(get_current_actor),
    service: PatientService = Depends(get_patient_service),
):
    return service.update_patient(actor, patient_id, data)
