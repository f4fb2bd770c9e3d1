"""Patient service - Business logic for the patient registry"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import Actor
from ...config import RoleConfig
from ...errors import DomainError, ErrorKind
from ...models import Patient, StaffMember
from ...shared.responses import ok
from ..directory.service import resolve_actor
from .repository import PatientRepository
from .schemas import PatientCreate, PatientFields, PatientResponse, PatientUpdate

logger = logging.getLogger(__name__)


def patient_columns(data: PatientFields) -> dict:
    """Map validated patient fields onto Patient columns"""
    return {
        "mobile_number": data.mobile_number,
        "name": data.name,
        "email": data.email,
        "gender": data.gender,
        "age": data.age,
        "pin_code": data.pin_code,
        "electronic_id": data.electronic_id,
        "address": data.address,
    }


def ensure_op_id_available(db: Session, op_id: Optional[str]) -> None:
    """Raise DUPLICATE_OP_ID when another patient already holds ``op_id``"""
    if op_id and PatientRepository.get_by_op_id(db, op_id) is not None:
        raise DomainError(ErrorKind.DUPLICATE_OP_ID, "OP-ID is duplicate")


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session, roles: RoleConfig):
        self.db = db
        self.roles = roles
        self.repo = PatientRepository()

    def _manager(self, actor: Actor, action: str) -> StaffMember:
        return resolve_actor(self.db, actor, self.roles.can_manage_appointments, action)

    def _get_patient(self, patient_id: int, client_id: int) -> Patient:
        patient = self.repo.get_patient(self.db, patient_id, client_id)
        if patient is None:
            raise DomainError(ErrorKind.PATIENT_NOT_FOUND, "patient id is not found")
        return patient

    def create_patient(self, actor: Actor, data: PatientCreate) -> dict:
        staff = self._manager(actor, "create new patient")
        logger.info(f"📥 Creating patient for client {staff.client_id} by {actor.id}")

        ensure_op_id_available(self.db, data.op_id)
        patient = self.repo.create_patient(
            self.db,
            staff.client_id,
            actor.id,
            op_id=data.op_id,
            **patient_columns(data),
        )

        logger.info(f"✅ Patient {patient.id} created")
        return ok("patient is created", {"patient_id": patient.id})

    def list_patients(self, actor: Actor) -> dict:
        staff = self._manager(actor, "access list of patients details")
        patients = self.repo.get_patients(self.db, staff.client_id)
        return ok("list of patients", [PatientResponse.from_model(p).model_dump() for p in patients])

    def search_patients(self, actor: Actor, mobile_number: str) -> dict:
        staff = self._manager(actor, "search patients")
        patients = self.repo.search_by_mobile(self.db, staff.client_id, mobile_number)
        return ok("list of patient's details", [PatientResponse.from_model(p).model_dump() for p in patients])

    def get_patient(self, actor: Actor, patient_id: int) -> dict:
        staff = self._manager(actor, "access patient details")
        patient = self._get_patient(patient_id, staff.client_id)
        return ok("patient details", PatientResponse.from_model(patient).model_dump())

    def update_patient(self, actor: Actor, patient_id: int, data: PatientUpdate) -> dict:
        staff = self._manager(actor, "edit patients details")
        patient = self._get_patient(patient_id, staff.client_id)

        updates = patient_columns(data)
        # Optional fields are only overwritten when supplied
        for key in ("email", "electronic_id", "address"):
            if updates[key] is None:
                updates.pop(key)

        if data.op_id and data.op_id != patient.op_id:
            ensure_op_id_available(self.db, data.op_id)
            updates["op_id"] = data.op_id

        self.repo.update_patient(self.db, patient, **updates)
        logger.info(f"✅ Patient {patient.id} updated by {actor.id}")
        return ok("patient details are updated")
