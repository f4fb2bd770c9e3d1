"""Catalog repository - Tenant scan-type, department and report-template lists"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import HospitalClient


class CatalogRepository:
    """Repository for the JSON catalogs stored on the tenant row"""

    @staticmethod
    def get_client(db: Session, client_id: int) -> Optional[HospitalClient]:
        return db.query(HospitalClient).filter(HospitalClient.id == client_id).first()

    @staticmethod
    def set_scan_types(db: Session, client: HospitalClient, scan_types: list[str]) -> HospitalClient:
        # JSON columns are only flushed on reassignment
        client.scan_types = list(scan_types)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def set_departments(db: Session, client: HospitalClient, departments: list[dict]) -> HospitalClient:
        client.departments = [dict(d) for d in departments]
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def set_templates(db: Session, client: HospitalClient, templates: list[dict]) -> HospitalClient:
        client.templates = [dict(t) for t in templates]
        db.commit()
        db.refresh(client)
        return client
