"""Staff router - Account creation endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, get_current_actor
from ...config import RoleConfig, get_role_config
from ...database import get_db
from .schemas import DoctorCreate, StaffCreate, SystemAdminCreate
from .service import StaffService

router = APIRouter(prefix="/staff", tags=["Staff"])


def get_staff_service(
    db: Session = Depends(get_db),
    roles: RoleConfig = Depends(get_role_config),
) -> StaffService:
    """Dependency injection for StaffService"""
    return StaffService(db, roles)


@router.post("/admins", status_code=201)
async def create_admin(
    data: StaffCreate,
    actor: Actor = Depends(get_current_actor),
    service: StaffService = Depends(get_staff_service),
):
    return service.create_admin(actor, data)


@router.post("/system-admins", status_code=201)
async def create_system_admin(
    data: SystemAdminCreate,
    actor: Actor = Depends(get_current_actor),
    service: StaffService = Depends(get_staff_service),
):
    return service.create_system_admin(actor, data)


@router.post("/doctors", status_code=201)
async def create_doctor(
    data: DoctorCreate,
    actor: Actor = Depends(get_current_actor),
    service: StaffService = Depends(get_staff_service),
):
    return service.create_doctor(actor, data)
