"""Report router - Scan report endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, get_current_actor
from ...config import RoleConfig, get_role_config
from ...database import get_db
from .schemas import ReportCreate, ReportUpdate
from .service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(
    db: Session = Depends(get_db),
    roles: RoleConfig = Depends(get_role_config),
) -> ReportService:
    """Dependency injection for ReportService"""
    return ReportService(db, roles)


@router.post("", status_code=201)
async def create_report(
    data: ReportCreate,
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.create_report(actor, data)


@router.get("")
async def list_reports(
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.list_reports(actor)


@router.get("/{appointment_id}")
async def get_report(
    appointment_id: int,
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.get_report(actor, appointment_id)


@router.put("/{appointment_id}")
async def edit_report(
    appointment_id: int,
    data: ReportUpdate,
    actor: Actor = Depends(get_current_actor),
    service: ReportService = Depends(get_report_service),
):
    return service.edit_report(actor, appointment_id, data)
