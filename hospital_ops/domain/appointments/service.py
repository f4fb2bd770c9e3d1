"""
Appointment service - Appointment lifecycle engine

Creates, edits, reschedules and cancels appointments while keeping the
doctor, branch, robot, patient and scan type of every appointment inside
the requesting staff member's tenant.

Independent lookups run concurrently, each in its own short-lived session
taken from ``session_factory``. When several of them miss, the reported
error follows a fixed order, never the order in which lookups finished.
Writes are sequential on the request session.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session, sessionmaker

from ...auth import Actor
from ...config import EngineSettings, RoleConfig
from ...errors import DomainError, ErrorKind
from ...models import Appointment
from ...services.conferencing_service import ConferenceLinks, ConferencingGateway
from ...shared.responses import ok
from ...utils.date_time import convert_to_24_hour, is_future_date_time
from ..directory.repository import DirectoryRepository
from ..directory.service import resolve_actor
from ..patients.repository import PatientRepository
from ..patients.service import ensure_op_id_available, patient_columns
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentReschedule, AppointmentUpdate

logger = logging.getLogger(__name__)

STATUS_UP_COMING = "up_coming"
TYPE_NORMAL = "normal_appointment"

MANAGE_ACTION = "access this api"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def first_missing(checks: list[tuple[Any, ErrorKind, str]]) -> None:
    """
    Raise for the first ``(value, kind, message)`` whose value is None.

    ``checks`` is ordered by reporting precedence.
    """
    for value, kind, message in checks:
        if value is None:
            raise DomainError(kind, message)


def serialize_appointment(appointment: Appointment) -> dict:
    return {
        "appointment_id": appointment.id,
        "op_id": appointment.op_id,
        "billing_id": appointment.billing_id,
        "usg_ref_id": appointment.usg_ref_id,
        "patient_id": appointment.patient_id,
        "doctor_id": appointment.doctor_id,
        "branch_id": appointment.branch_id,
        "robot_id": appointment.robot_id,
        "date": appointment.date,
        "time": appointment.time,
        "scan_type": appointment.scan_type,
        "differential_diagnosis": appointment.differential_diagnosis,
        "status": appointment.status,
        "call_url": appointment.call_url,
    }


class AppointmentService:
    """Service layer for the appointment lifecycle"""

    def __init__(
        self,
        db: Session,
        session_factory: sessionmaker,
        roles: RoleConfig,
        settings: EngineSettings,
        conferencing: ConferencingGateway,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.db = db
        self.session_factory = session_factory
        self.roles = roles
        self.settings = settings
        self.conferencing = conferencing
        self.clock = clock
        self.repo = AppointmentRepository()

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    async def _lookup(self, query: Callable[..., Any], *args: Any) -> Any:
        """Run a read-only repository call in a worker thread with its own session"""

        def run():
            session = self.session_factory()
            try:
                return query(session, *args)
            finally:
                session.close()

        return await asyncio.to_thread(run)

    def _ensure_future(self, date: str, time: str) -> None:
        if not is_future_date_time(date, time, now=self.clock(), tz=self.settings.timezone):
            raise DomainError(
                ErrorKind.INVALID_SCHEDULE,
                "appointment date and time should be in the future",
            )

    @staticmethod
    def _ensure_scan_type(scan_types: Optional[list], scan_type: str) -> None:
        if scan_type not in (scan_types or []):
            raise DomainError(ErrorKind.UNKNOWN_SCAN_TYPE, f"scan type {scan_type} is not found")

    async def _provision(self, owner: str, date: str, time: str) -> Optional[dict]:
        links: Optional[ConferenceLinks] = await self.conferencing.provision(
            owner, date, convert_to_24_hour(time)
        )
        if links is None:
            logger.warning(f"⚠️ No conference link for {owner} on {date} {time}, saving appointment without one")
            return None
        return links.to_json()

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    async def create_appointment(self, actor: Actor, data: AppointmentCreate) -> dict:
        """Book an appointment, registering the patient first when no patient id is given"""
        staff = resolve_actor(self.db, actor, self.roles.can_manage_appointments, MANAGE_ACTION)
        client_id = staff.client_id
        logger.info(f"📥 Creating appointment for client {client_id} by {actor.id} on {data.date} {data.time}")

        doctor, branch, robot, client = await asyncio.gather(
            self._lookup(DirectoryRepository.get_doctor_in_tenant, data.doctor_id, client_id),
            self._lookup(DirectoryRepository.get_branch_in_tenant, data.branch_id, client_id),
            self._lookup(DirectoryRepository.get_robot_in_branch, data.robot_id, data.branch_id),
            self._lookup(DirectoryRepository.get_client, client_id),
        )
        first_missing(
            [
                (doctor, ErrorKind.DOCTOR_NOT_FOUND, "doctor id is not found"),
                (branch, ErrorKind.BRANCH_NOT_FOUND, "branch id is not found"),
                (robot, ErrorKind.ROBOT_NOT_FOUND, "robot id is not found"),
                (client, ErrorKind.CLIENT_NOT_FOUND, "client id is not found"),
            ]
        )

        if data.billing_id and self.repo.get_by_billing_id(self.db, data.billing_id):
            raise DomainError(ErrorKind.DUPLICATE_BILLING_ID, "billing id is duplicate")

        self._ensure_scan_type(client.scan_types, data.scan_type)
        self._ensure_future(data.date, data.time)

        created_patient_id = None
        if data.patient_id is None:
            ensure_op_id_available(self.db, data.op_id)
            patient = PatientRepository.create_patient(
                self.db,
                client_id,
                actor.id,
                op_id=data.op_id,
                **patient_columns(data.patient_fields()),
            )
            created_patient_id = patient.id
            patient_id = patient.id
            logger.info(f"✅ Patient {patient_id} registered with the appointment")
        else:
            patient = PatientRepository.get_patient(self.db, data.patient_id, client_id, data.op_id)
            if patient is None:
                raise DomainError(ErrorKind.PATIENT_NOT_FOUND, "patient id is not found")
            patient_id = patient.id

        try:
            doctor_name = DirectoryRepository.get_doctor_name(self.db, doctor.id)
            if doctor_name is None:
                raise DomainError(ErrorKind.DOCTOR_NOT_FOUND, "doctor id is not found")

            call_url = await self._provision(doctor_name, data.date, data.time)

            appointment_data = {
                "client_id": client_id,
                "patient_id": patient_id,
                "doctor_id": doctor.id,
                "branch_id": branch.id,
                "robot_id": robot.id,
                "date": data.date,
                "time": data.time,
                "scan_type": data.scan_type,
                "differential_diagnosis": data.differential_diagnosis,
                "usg_ref_id": data.usg_ref_id,
                "status": STATUS_UP_COMING,
                "appointment_type": TYPE_NORMAL,
                "created_by": actor.id,
                "is_report_sent": False,
                "call_url": call_url,
            }
            if data.op_id:
                appointment_data["op_id"] = data.op_id
            if data.billing_id:
                appointment_data["billing_id"] = data.billing_id

            appointment = self.repo.create_appointment(self.db, **appointment_data)
        except BaseException:
            # Includes cancellation while waiting on the conferencing provider
            if created_patient_id is not None:
                self.db.rollback()
                PatientRepository.delete_patient(self.db, created_patient_id)
                logger.warning(f"⚠️ Appointment write failed, removed patient {created_patient_id}")
            raise

        logger.info(f"✅ Appointment {appointment.id} created for patient {patient_id}")
        return ok(
            f"appointment is created on {data.date}",
            {
                "appointment_id": appointment.id,
                "patient_id": patient_id,
                "call_url": call_url,
            },
        )

    # ------------------------------------------------------------------
    # edit / reschedule / cancel
    # ------------------------------------------------------------------

    async def edit_appointment(self, actor: Actor, appointment_id: int, data: AppointmentUpdate) -> dict:
        """Replace the bookable fields of an appointment and issue a fresh conference link"""
        staff = resolve_actor(self.db, actor, self.roles.can_manage_appointments, MANAGE_ACTION)
        client_id = staff.client_id

        appointment, doctor, doctor_name, branch, robot, client = await asyncio.gather(
            self._lookup(AppointmentRepository.get_appointment, appointment_id, client_id),
            self._lookup(DirectoryRepository.get_doctor_in_tenant, data.doctor_id, client_id),
            self._lookup(DirectoryRepository.get_doctor_name, data.doctor_id),
            self._lookup(DirectoryRepository.get_branch_in_tenant, data.branch_id, client_id),
            self._lookup(DirectoryRepository.get_robot_in_branch, data.robot_id, data.branch_id),
            self._lookup(DirectoryRepository.get_client, client_id),
        )
        first_missing(
            [
                (appointment, ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id not found"),
                (doctor, ErrorKind.DOCTOR_NOT_FOUND, "doctor id is not found"),
                (doctor_name, ErrorKind.DOCTOR_NOT_FOUND, "doctor id is not found"),
                (branch, ErrorKind.BRANCH_NOT_FOUND, "branch id is not found"),
                (robot, ErrorKind.ROBOT_NOT_FOUND, "robot id is not found"),
                (client, ErrorKind.CLIENT_NOT_FOUND, "client id is not found"),
            ]
        )

        self._ensure_scan_type(client.scan_types, data.scan_type)

        if self.settings.edit_requires_upcoming and appointment.status != STATUS_UP_COMING:
            raise DomainError(
                ErrorKind.INVALID_STATUS,
                f"appointment can't be edited once it is {appointment.status}",
            )

        self._ensure_future(data.date, data.time)

        if data.billing_id and self.repo.get_by_billing_id(self.db, data.billing_id, exclude_id=appointment.id):
            raise DomainError(ErrorKind.DUPLICATE_BILLING_ID, "billing id is duplicate")

        updates = {
            "doctor_id": doctor.id,
            "branch_id": branch.id,
            "robot_id": robot.id,
            "date": data.date,
            "time": data.time,
            "scan_type": data.scan_type,
            "differential_diagnosis": data.differential_diagnosis,
            "call_url": await self._provision(doctor_name, data.date, data.time),
        }
        if data.billing_id:
            updates["billing_id"] = data.billing_id

        if not self.repo.update_appointment(self.db, appointment.id, client_id, **updates):
            raise DomainError(ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id not found")

        logger.info(f"✅ Appointment {appointment.id} edited by {actor.id}")
        return ok("appointment is edited")

    async def reschedule_appointment(
        self, actor: Actor, appointment_id: int, data: AppointmentReschedule
    ) -> dict:
        """Move an appointment to a new slot. Only date, time and conference link change."""
        staff = resolve_actor(self.db, actor)
        client_id = staff.client_id

        appointment = self.repo.get_appointment(self.db, appointment_id, client_id)
        if appointment is None:
            raise DomainError(ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id not found")

        self._ensure_future(data.date, data.time)

        call_url = await self._provision(data.doctor_name, data.date, data.time)
        if not self.repo.update_appointment(
            self.db, appointment_id, client_id, date=data.date, time=data.time, call_url=call_url
        ):
            raise DomainError(ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id not found")

        logger.info(f"✅ Appointment {appointment_id} rescheduled to {data.date} {data.time}")
        return ok("appointment is rescheduled")

    def cancel_appointment(self, actor: Actor, appointment_id: int) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_manage_appointments, MANAGE_ACTION)

        if not self.repo.delete_appointment(self.db, appointment_id, staff.client_id):
            raise DomainError(ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id not found")

        logger.info(f"🗑️ Appointment {appointment_id} cancelled by {actor.id}")
        return ok("appointment is cancelled")

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def list_appointments(self, actor: Actor, date: str) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_manage_appointments, MANAGE_ACTION)
        rows = self.repo.list_for_date(self.db, staff.client_id, date)
        appointments = [
            {
                "appointment_id": appointment_id,
                "scan_type": scan_type,
                "doctor_id": doctor_id,
                "time": time,
                "status": status,
                "patient_name": patient_name,
                "doctor_name": doctor_name,
            }
            for appointment_id, scan_type, doctor_id, time, status, patient_name, doctor_name in rows
        ]
        return ok(f"list of appointment on {date}", appointments)

    async def appointment_details(self, actor: Actor, appointment_id: int) -> dict:
        """Appointment with its patient, robot and doctor. Readable by any staff member of the tenant."""
        staff = resolve_actor(self.db, actor)
        client_id = staff.client_id

        appointment = self.repo.get_appointment(self.db, appointment_id, client_id)
        if appointment is None:
            raise DomainError(ErrorKind.APPOINTMENT_NOT_FOUND, "appointment id is not found")

        patient, doctor_name, robot = await asyncio.gather(
            self._lookup(PatientRepository.get_patient, appointment.patient_id, client_id),
            self._lookup(DirectoryRepository.get_doctor_name, appointment.doctor_id),
            self._lookup(DirectoryRepository.get_robot, appointment.robot_id),
        )
        if patient is None or doctor_name is None or robot is None:
            raise DomainError(
                ErrorKind.NOT_FOUND,
                "Either one of the following id is not found [doctor, robot, patient]",
            )

        details = {
            "patient_name": patient.name,
            "patient_email": patient.email,
            "patient_gender": patient.gender,
            "patient_age": patient.age,
            "patient_mobile_number": patient.mobile_number,
            "patient_pin_code": patient.pin_code,
            "electronic_id": patient.electronic_id,
            "robot_registration_id": robot.registration_id,
            "doctor_name": doctor_name,
            **serialize_appointment(appointment),
        }
        return ok("appointment details", details)
