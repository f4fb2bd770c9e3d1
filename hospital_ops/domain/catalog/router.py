"""Catalog router - Scan types, departments and report templates"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, get_current_actor
from ...config import RoleConfig, get_role_config
from ...database import get_db
from .schemas import DepartmentCreate, ScanTypeCreate, TemplateCreate
from .service import CatalogService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


def get_catalog_service(
    db: Session = Depends(get_db),
    roles: RoleConfig = Depends(get_role_config),
) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db, roles)


# ============================================================================
# SCAN TYPES
# ============================================================================


@router.post("/scan-types", status_code=201)
async def add_scan_type(
    data: ScanTypeCreate,
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.add_scan_type(actor, data)


@router.delete("/scan-types/{scan_type}")
async def remove_scan_type(
    scan_type: str,
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.remove_scan_type(actor, scan_type)


# ============================================================================
# DEPARTMENTS
# ============================================================================


@router.get("/departments")
async def list_departments(
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_departments(actor)


@router.post("/departments", status_code=201)
async def add_department(
    data: DepartmentCreate,
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.add_department(actor, data)


@router.delete("/departments/{department_id}")
async def archive_department(
    department_id: int,
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    """Archive a department. Archived entries stay in the catalog list."""
    return service.archive_department(actor, department_id)


# ============================================================================
# REPORT TEMPLATES
# ============================================================================


@router.get("/templates")
async def list_templates(
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_templates(actor)


@router.post("/templates", status_code=201)
async def add_template(
    data: TemplateCreate,
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.add_template(actor, data)


@router.delete("/templates/{template_id}")
async def archive_template(
    template_id: int,
    actor: Actor = Depends(get_current_actor),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.archive_template(actor, template_id)
