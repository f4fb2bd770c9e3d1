"""Appointment router - FastAPI endpoints for the appointment lifecycle"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, sessionmaker

from ...auth import Actor, get_current_actor
from ...config import EngineSettings, RoleConfig, get_engine_settings, get_role_config
from ...database import get_db, get_session_factory
from ...services.conferencing_service import ConferencingGateway, get_conferencing_gateway
from ...utils.date_time import DATE_PATTERN
from .schemas import AppointmentCreate, AppointmentReschedule, AppointmentUpdate
from .service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    roles: RoleConfig = Depends(get_role_config),
    settings: EngineSettings = Depends(get_engine_settings),
    conferencing: ConferencingGateway = Depends(get_conferencing_gateway),
) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db, session_factory, roles, settings, conferencing)


@router.post("", status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    actor: Actor = Depends(get_current_actor),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment for an existing or a new patient"""
    return await service.create_appointment(actor, data)


@router.get("")
async def list_appointments(
    date: str = Query(..., pattern=DATE_PATTERN.pattern),
    actor: Actor = Depends(get_current_actor),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments of the caller's hospital on one day"""
    return service.list_appointments(actor, date)


@router.get("/{appointment_id}")
async def appointment_details(
    appointment_id: int,
    actor: Actor = Depends(get_current_actor),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.appointment_details(actor, appointment_id)


@router.put("/{appointment_id}")
async def edit_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    actor: Actor = Depends(get_current_actor),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.edit_appointment(actor, appointment_id, data)


@router.patch("/{appointment_id}/reschedule")
async def reschedule_appointment(
    appointment_id: int,
    data: AppointmentReschedule,
    actor: Actor = Depends(get_current_actor),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.reschedule_appointment(actor, appointment_id, data)


@router.delete("/{appointment_id}")
async def cancel_appointment(
    appointment_id: int,
    actor: Actor = Depends(get_current_actor),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.cancel_appointment(actor, appointment_id)
