"""Catalog service - Scan types and departments (super admin) and report templates (admin, doctor)"""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...auth import Actor
from ...config import RoleConfig
from ...errors import DomainError, ErrorKind
from ...models import HospitalClient
from ...shared.responses import ok
from ..directory.service import resolve_actor
from .repository import CatalogRepository
from .schemas import DepartmentCreate, ScanTypeCreate, TemplateCreate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the tenant catalogs"""

    def __init__(self, db: Session, roles: RoleConfig):
        self.db = db
        self.roles = roles
        self.repo = CatalogRepository()

    def _tenant(
        self, actor: Actor, action: str, allowed: Optional[Callable[[str], bool]] = None
    ) -> HospitalClient:
        staff = resolve_actor(self.db, actor, allowed or self.roles.can_manage_catalog, action)
        client = self.repo.get_client(self.db, staff.client_id)
        if client is None:
            raise DomainError(ErrorKind.CLIENT_NOT_FOUND, "client id is not found")
        return client

    def add_scan_type(self, actor: Actor, data: ScanTypeCreate) -> dict:
        client = self._tenant(actor, "add scan type")
        scan_types = list(client.scan_types or [])

        if any(existing.lower() == data.scan_type.lower() for existing in scan_types):
            raise DomainError(ErrorKind.DUPLICATE_SCAN_TYPE, "given scan type is already exist")

        scan_types.append(data.scan_type)
        self.repo.set_scan_types(self.db, client, scan_types)
        logger.info(f"✅ Scan type '{data.scan_type}' added for client {client.id}")
        return ok("scan type is added")

    def remove_scan_type(self, actor: Actor, scan_type: str) -> dict:
        client = self._tenant(actor, "delete scan type")
        scan_types = list(client.scan_types or [])

        if scan_type not in scan_types:
            raise DomainError(ErrorKind.NOT_FOUND, "given scan type is not found")

        scan_types.remove(scan_type)
        self.repo.set_scan_types(self.db, client, scan_types)
        logger.info(f"🗑️ Scan type '{scan_type}' removed for client {client.id}")
        return ok("scan type is deleted")

    def list_departments(self, actor: Actor) -> dict:
        client = self._tenant(actor, "access list of departments")
        departments = [d for d in (client.departments or []) if not d.get("is_archive")]
        return ok("list of departments", departments)

    def add_department(self, actor: Actor, data: DepartmentCreate) -> dict:
        client = self._tenant(actor, "add department")
        departments = list(client.departments or [])

        for department in departments:
            if department["name"] == data.department and not department.get("is_archive"):
                raise DomainError(ErrorKind.DUPLICATE_DEPARTMENT, "given department is already exist")

        # Ids keep counting past archived entries
        next_id = max((d["id"] for d in departments), default=0) + 1
        departments.append({"id": next_id, "name": data.department, "is_archive": False})
        self.repo.set_departments(self.db, client, departments)
        logger.info(f"✅ Department '{data.department}' added for client {client.id} with id {next_id}")
        return ok("department is added", {"department_id": next_id})

    def archive_department(self, actor: Actor, department_id: int) -> dict:
        client = self._tenant(actor, "delete department")
        departments = [dict(d) for d in (client.departments or [])]

        target = next(
            (d for d in departments if d["id"] == department_id and not d.get("is_archive")),
            None,
        )
        if target is None:
            raise DomainError(ErrorKind.NOT_FOUND, "department is not found")

        target["is_archive"] = True
        self.repo.set_departments(self.db, client, departments)
        logger.info(f"🗑️ Department {department_id} archived for client {client.id}")
        return ok("given department is deleted")

    # ------------------------------------------------------------------
    # report templates
    # ------------------------------------------------------------------

    def list_templates(self, actor: Actor) -> dict:
        client = self._tenant(actor, "view list of report template", self.roles.can_manage_templates)
        templates = [t for t in (client.templates or []) if not t.get("is_archive")]
        return ok("list of templates", templates)

    def add_template(self, actor: Actor, data: TemplateCreate) -> dict:
        client = self._tenant(actor, "add new report template", self.roles.can_manage_templates)
        templates = list(client.templates or [])

        for template in templates:
            if template["name"] == data.template_name and not template.get("is_archive"):
                raise DomainError(ErrorKind.DUPLICATE_TEMPLATE, "given template is already exist")

        next_id = max((t["id"] for t in templates), default=0) + 1
        templates.append({"id": next_id, "name": data.template_name, "body": data.template, "is_archive": False})
        self.repo.set_templates(self.db, client, templates)
        logger.info(f"✅ Report template '{data.template_name}' added for client {client.id} with id {next_id}")
        return ok("template is added", {"template_id": next_id})

    def archive_template(self, actor: Actor, template_id: int) -> dict:
        client = self._tenant(actor, "delete report template", self.roles.can_manage_templates)
        templates = [dict(t) for t in (client.templates or [])]

        target = next((t for t in templates if t["id"] == template_id and not t.get("is_archive")), None)
        if target is None:
            raise DomainError(ErrorKind.NOT_FOUND, "template is not found")

        target["is_archive"] = True
        self.repo.set_templates(self.db, client, templates)
        logger.info(f"🗑️ Report template {template_id} archived for client {client.id}")
        return ok("given template is deleted")
