"""
Staff service - Account creation for admins, system admins and doctors

A super admin creates the tenant's admins; an admin creates system admins
(attached to one branch) and doctors (with a doctor profile). Accounts
that span two rows are removed again when the second write fails.
"""

import logging

from sqlalchemy.orm import Session

from ...auth import Actor
from ...config import RoleConfig
from ...errors import DomainError, ErrorKind
from ...shared.responses import ok
from ..directory.repository import DirectoryRepository
from ..directory.service import resolve_actor
from .repository import StaffRepository
from .schemas import DoctorCreate, StaffCreate, SystemAdminCreate

logger = logging.getLogger(__name__)


class StaffService:
    """Service layer for staff accounts"""

    def __init__(self, db: Session, roles: RoleConfig):
        self.db = db
        self.roles = roles
        self.repo = StaffRepository()

    def _ensure_email_available(self, email: str) -> None:
        if self.repo.get_by_email(self.db, email):
            raise DomainError(ErrorKind.DUPLICATE_EMAIL, "email id is already exists")

    def create_admin(self, actor: Actor, data: StaffCreate) -> dict:
        owner = resolve_actor(self.db, actor, self.roles.can_manage_facilities, "create new admin")
        self._ensure_email_available(data.email)

        staff = self.repo.create_staff(
            self.db,
            client_id=owner.client_id,
            branch_id=None,
            role=self.roles.admin,
            created_by=actor.id,
            **data.model_dump(),
        )
        logger.info(f"✅ Admin {staff.id} created for client {owner.client_id}")
        return ok("admin is created", {"user_id": staff.id})

    def create_system_admin(self, actor: Actor, data: SystemAdminCreate) -> dict:
        admin = resolve_actor(self.db, actor, self.roles.can_manage_staff, "create a new system admin")
        self._ensure_email_available(data.email)

        branch = DirectoryRepository.get_branch_in_tenant(self.db, data.branch_id, admin.client_id)
        if branch is None:
            raise DomainError(ErrorKind.BRANCH_NOT_FOUND, "branch id is not found")

        staff = self.repo.create_staff(
            self.db,
            client_id=admin.client_id,
            role=self.roles.system_admin,
            created_by=actor.id,
            **data.model_dump(),
        )
        try:
            DirectoryRepository.add_system_admin(self.db, branch, staff.id)
        except Exception:
            self.db.rollback()
            self.repo.delete_staff(self.db, staff.id)
            logger.warning(f"⚠️ Could not attach system admin {staff.id} to branch {branch.id}, account removed")
            raise

        logger.info(f"✅ System admin {staff.id} created for branch {branch.id}")
        return ok("system admin is created", {"user_id": staff.id})

    def create_doctor(self, actor: Actor, data: DoctorCreate) -> dict:
        admin = resolve_actor(self.db, actor, self.roles.can_manage_staff, "create new doctor")
        self._ensure_email_available(data.email)

        if self.repo.get_profile_by_registration_id(self.db, data.registration_id):
            raise DomainError(ErrorKind.DUPLICATE_REGISTRATION_ID, "doctor registration id is already exist")

        client = DirectoryRepository.get_client(self.db, admin.client_id)
        if client is None:
            raise DomainError(ErrorKind.CLIENT_NOT_FOUND, "client id is not found")
        if not any(
            d["id"] == data.department_id and not d.get("is_archive") for d in (client.departments or [])
        ):
            raise DomainError(ErrorKind.NOT_FOUND, "department is not found")

        profile = self.repo.create_doctor_profile(
            self.db,
            registration_id=data.registration_id,
            department_id=data.department_id,
            training_completed_year=data.training_completed_year,
            time_from=data.time_from,
            time_to=data.time_to,
        )
        try:
            staff = self.repo.create_staff(
                self.db,
                client_id=admin.client_id,
                branch_id=None,
                role=self.roles.doctor,
                created_by=actor.id,
                doctor_profile_id=profile.id,
                name=data.name,
                email=data.email,
                contact_number=data.contact_number,
            )
        except Exception:
            self.db.rollback()
            self.repo.delete_doctor_profile(self.db, profile.id)
            logger.warning(f"⚠️ Doctor account write failed, removed profile {profile.id}")
            raise

        logger.info(f"✅ Doctor {staff.id} ({data.registration_id}) created for client {admin.client_id}")
        return ok("doctor is created", {"doctor_id": staff.id})
