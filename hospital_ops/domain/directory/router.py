"""Directory router - Tenant branches, robots and the lists used to fill appointment forms"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, get_current_actor
from ...config import RoleConfig, get_role_config
from ...database import get_db
from .schemas import HealthCenterCreate, RobotCreate, RobotMaintenanceUpdate
from .service import DirectoryService

router = APIRouter(prefix="/directory", tags=["Directory"])


def get_directory_service(
    db: Session = Depends(get_db),
    roles: RoleConfig = Depends(get_role_config),
) -> DirectoryService:
    """Dependency injection for DirectoryService"""
    return DirectoryService(db, roles)


@router.get("/health-centers")
async def list_health_centers(
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.list_health_centers(actor)


@router.get("/health-centers/{branch_id}/robots")
async def list_robots(
    branch_id: int,
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.list_robots(actor, branch_id)


@router.get("/doctors")
async def list_doctors(
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.list_doctors(actor)


@router.get("/scan-types")
async def list_scan_types(
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.list_scan_types(actor)


# ============================================================================
# FACILITIES
# ============================================================================


@router.post("/health-centers", status_code=201)
async def create_health_center(
    data: HealthCenterCreate,
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.create_health_center(actor, data)


@router.post("/health-centers/{branch_id}/robots", status_code=201)
async def create_robot(
    branch_id: int,
    data: RobotCreate,
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.create_robot(actor, branch_id, data)


@router.patch("/robots/{robot_id}/maintenance")
async def set_robot_maintenance(
    robot_id: int,
    data: RobotMaintenanceUpdate,
    actor: Actor = Depends(get_current_actor),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.set_robot_maintenance(actor, robot_id, data)
