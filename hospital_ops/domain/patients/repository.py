"""Patient repository - Database operations for patients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patients(db: Session, client_id: int) -> list[Patient]:
        return db.query(Patient).filter(Patient.client_id == client_id).order_by(Patient.id.asc()).all()

    @staticmethod
    def get_patient(
        db: Session, patient_id: int, client_id: int, op_id: Optional[str] = None
    ) -> Optional[Patient]:
        """Get a tenant's patient by ID, optionally also matching the op-id"""
        query = db.query(Patient).filter(Patient.id == patient_id, Patient.client_id == client_id)
        if op_id:
            query = query.filter(Patient.op_id == op_id)
        return query.first()

    @staticmethod
    def get_by_op_id(db: Session, op_id: str) -> Optional[Patient]:
        """Op-ids are unique across tenants"""
        return db.query(Patient).filter(Patient.op_id == op_id).first()

    @staticmethod
    def search_by_mobile(db: Session, client_id: int, mobile_number: str) -> list[Patient]:
        return (
            db.query(Patient)
            .filter(Patient.client_id == client_id, Patient.mobile_number == mobile_number)
            .order_by(Patient.id.asc())
            .all()
        )

    @staticmethod
    def create_patient(db: Session, client_id: int, created_by: int, **patient_data) -> Patient:
        patient = Patient(
            client_id=client_id,
            created_by=created_by,
            action_required=False,
            **patient_data,
        )
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        for key, value in updates.items():
            setattr(patient, key, value)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def delete_patient(db: Session, patient_id: int) -> bool:
        deleted = db.query(Patient).filter(Patient.id == patient_id).delete(synchronize_session=False)
        db.commit()
        return deleted > 0
