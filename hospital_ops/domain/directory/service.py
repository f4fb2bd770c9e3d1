"""Directory service - Actor resolution, tenant resource listings and facility setup"""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...auth import Actor
from ...config import RoleConfig
from ...errors import DomainError, ErrorKind, actor_not_found, forbidden
from ...models import StaffMember
from ...shared.responses import ok
from .repository import DirectoryRepository
from .schemas import HealthCenterCreate, RobotCreate, RobotMaintenanceUpdate

logger = logging.getLogger(__name__)


def resolve_actor(
    db: Session,
    actor: Actor,
    allowed: Optional[Callable[[str], bool]] = None,
    action: str = "access this api",
) -> StaffMember:
    """
    Look up the acting staff member and check the role claim.

    Raises:
        DomainError: ACTOR_NOT_FOUND when the staff member does not exist,
            FORBIDDEN when ``allowed`` rejects the role
    """
    staff = DirectoryRepository.get_staff(db, actor.id)
    if staff is None:
        logger.warning(f"⚠️ Unknown actor {actor.id} attempted to {action}")
        raise actor_not_found()
    if allowed is not None and not allowed(actor.role):
        logger.warning(f"⚠️ Actor {actor.id} with role {actor.role} attempted to {action}")
        raise forbidden(actor.role, action)
    return staff


class DirectoryService:
    """Branches, doctors, robots and scan types of the actor's tenant"""

    def __init__(self, db: Session, roles: RoleConfig):
        self.db = db
        self.roles = roles
        self.repo = DirectoryRepository()

    def _manager(self, actor: Actor, action: str) -> StaffMember:
        return resolve_actor(self.db, actor, self.roles.can_manage_appointments, action)

    def list_health_centers(self, actor: Actor) -> dict:
        staff = self._manager(actor, "access list of health centers")
        branches = self.repo.list_branches(self.db, staff.client_id)
        return ok(
            "list of health centers",
            [{"branch_id": b.id, "branch_name": b.branch_name} for b in branches],
        )

    def list_doctors(self, actor: Actor) -> dict:
        staff = self._manager(actor, "access list of doctors")
        doctors = self.repo.list_doctors(self.db, staff.client_id)
        return ok(
            "list of doctors",
            [{"doctor_id": d.id, "doctor_name": d.name} for d in doctors],
        )

    def list_robots(self, actor: Actor, branch_id: int) -> dict:
        staff = self._manager(actor, "access list of robots")
        branch = self.repo.get_branch_in_tenant(self.db, branch_id, staff.client_id)
        if branch is None:
            raise DomainError(ErrorKind.BRANCH_NOT_FOUND, "branch id is not found")

        robots = self.repo.list_robots(self.db, branch.id)
        return ok(
            "list of robots",
            [
                {
                    "robot_id": r.id,
                    "robot_registration_id": r.registration_id,
                    "under_maintenance": r.under_maintenance,
                }
                for r in robots
            ],
        )

    def list_scan_types(self, actor: Actor) -> dict:
        staff = self._manager(actor, "access list of scan types")
        client = self.repo.get_client(self.db, staff.client_id)
        if client is None:
            raise DomainError(ErrorKind.CLIENT_NOT_FOUND, "client id is not found")
        return ok("list of scan types", list(client.scan_types or []))

    # ------------------------------------------------------------------
    # facilities
    # ------------------------------------------------------------------

    def create_health_center(self, actor: Actor, data: HealthCenterCreate) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_manage_facilities, "create new health center")
        branch = self.repo.create_branch(self.db, staff.client_id, actor.id, **data.model_dump())
        logger.info(f"✅ Health center {branch.id} '{branch.branch_name}' created for client {staff.client_id}")
        return ok("health center is created", {"branch_id": branch.id})

    def create_robot(self, actor: Actor, branch_id: int, data: RobotCreate) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_manage_facilities, "create new robot")

        if self.repo.get_robot_by_registration_id(self.db, data.robot_registration_id):
            raise DomainError(ErrorKind.DUPLICATE_REGISTRATION_ID, "robot registration id already exists")

        branch = self.repo.get_branch_in_tenant(self.db, branch_id, staff.client_id)
        if branch is None:
            raise DomainError(ErrorKind.BRANCH_NOT_FOUND, "branch id is not found")

        robot = self.repo.create_robot(self.db, branch.id, data.robot_registration_id, actor.id)
        logger.info(f"🤖 Robot {robot.registration_id} added to branch {branch.id}")
        return ok("new robot created", {"robot_id": robot.id})

    def set_robot_maintenance(self, actor: Actor, robot_id: int, data: RobotMaintenanceUpdate) -> dict:
        staff = resolve_actor(self.db, actor, self.roles.can_maintain_robots, "change robot maintenance status")

        robot = self.repo.get_robot_in_tenant(self.db, robot_id, staff.client_id)
        if robot is None:
            raise DomainError(ErrorKind.ROBOT_NOT_FOUND, "robot id is not found")

        self.repo.set_robot_maintenance(self.db, robot, data.under_maintenance)
        state = "under maintenance" if data.under_maintenance else "available"
        logger.info(f"🔧 Robot {robot.id} marked {state} by {actor.id}")
        return ok(f"robot is marked {state}")
