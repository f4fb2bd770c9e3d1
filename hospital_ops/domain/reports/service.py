"""Report service - Doctors write one report per appointment"""

import logging

from sqlalchemy.orm import Session

from ...auth import Actor
from ...config import RoleConfig
from ...errors import DomainError, ErrorKind
from ...models import Appointment
from ...shared.responses import ok
from ..appointments.repository import AppointmentRepository
from ..directory.service import resolve_actor
from .repository import ReportRepository
from .schemas import ReportCreate, ReportUpdate

logger = logging.getLogger(__name__)


class ReportService:
    """Service layer for scan reports"""

    def __init__(self, db: Session, roles: RoleConfig):
        self.db = db
        self.roles = roles
        self.repo = ReportRepository()

    def _appointment(self, client_id: int, appointment_id: int) -> Appointment:
        appointment = AppointmentRepository.get_appointment(self.db, appointment_id, client_id)
        if appointment is None:
            raise DomainError(ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id not found")
        return appointment

    def create_report(self, actor: Actor, data: ReportCreate) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_write_reports, "create patient reports")
        appointment = self._appointment(staff.client_id, data.appointment_id)

        if appointment.is_report_sent or self.repo.get_by_appointment(self.db, appointment.id):
            raise DomainError(ErrorKind.DUPLICATE_REPORT, "report already created for this appointment")

        report = self.repo.create_report(self.db, appointment, actor.id, data.report_details)
        logger.info(f"📝 Report {report.id} written for appointment {appointment.id} by {actor.id}")
        return ok("report is created", {"report_id": report.id})

    def edit_report(self, actor: Actor, appointment_id: int, data: ReportUpdate) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_write_reports, "update patient reports")
        appointment = self._appointment(staff.client_id, appointment_id)

        report = self.repo.get_by_appointment(self.db, appointment.id)
        if report is None:
            raise DomainError(ErrorKind.NOT_FOUND, "report is not found")

        self.repo.update_report(self.db, report, report_details=data.report_details)
        logger.info(f"📝 Report {report.id} updated by {actor.id}")
        return ok("report is updated")

    def get_report(self, actor: Actor, appointment_id: int) -> dict:
        """Report of an appointment. Every read counts as a view."""
        staff = resolve_actor(self.db, actor, self.roles.can_view_reports, "view patient reports")
        appointment = self._appointment(staff.client_id, appointment_id)

        report = self.repo.get_by_appointment(self.db, appointment.id)
        if report is None:
            raise DomainError(ErrorKind.NOT_FOUND, "report is not found")

        report = self.repo.update_report(self.db, report, view_count=report.view_count + 1)
        return ok(
            "report details",
            {
                "report_id": report.id,
                "appointment_id": appointment.id,
                "report_details": report.report_details,
                "status": report.status,
                "created_by": report.created_by,
                "view_count": report.view_count,
            },
        )

    def list_reports(self, actor: Actor) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_view_reports, "view list of report")
        rows = self.repo.list_for_tenant(self.db, staff.client_id)
        return ok(
            "list of reports",
            [
                {
                    "appointment_id": appointment_id,
                    "scan_type": scan_type,
                    "report_status": report_sent,
                    "patient_name": patient_name,
                    "doctor_name": doctor_name,
                }
                for appointment_id, scan_type, report_sent, patient_name, doctor_name in rows
            ],
        )
