"""Appointment repository - Database operations for appointments"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from ...models import Appointment, DoctorProfile, Patient, StaffMember


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointment(db: Session, appointment_id: int, client_id: int) -> Optional[Appointment]:
        """Get an appointment by ID within a tenant"""
        return (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id, Appointment.client_id == client_id)
            .first()
        )

    @staticmethod
    def get_by_billing_id(
        db: Session, billing_id: str, exclude_id: Optional[int] = None
    ) -> Optional[Appointment]:
        """Billing ids are unique across tenants"""
        query = db.query(Appointment).filter(Appointment.billing_id == billing_id)
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.first()

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment_id: int, client_id: int, **updates: Any) -> bool:
        """Set the named columns on one appointment. Returns False when nothing matched."""
        updated = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id, Appointment.client_id == client_id)
            .update(updates, synchronize_session=False)
        )
        db.commit()
        return updated > 0

    @staticmethod
    def delete_appointment(db: Session, appointment_id: int, client_id: int) -> bool:
        """Hard delete scoped by tenant. Returns False when nothing was deleted."""
        deleted = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id, Appointment.client_id == client_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted > 0

    @staticmethod
    def list_for_date(db: Session, client_id: int, date: str) -> list[tuple]:
        """
        Appointments of a tenant on a date with patient and doctor names.

        Inner joins drop appointments whose patient or doctor no longer exists.
        """
        return (
            db.query(
                Appointment.id,
                Appointment.scan_type,
                Appointment.doctor_id,
                Appointment.time,
                Appointment.status,
                Patient.name,
                StaffMember.name,
            )
            .join(Patient, Appointment.patient_id == Patient.id)
            .join(StaffMember, Appointment.doctor_id == StaffMember.id)
            .join(DoctorProfile, StaffMember.doctor_profile_id == DoctorProfile.id)
            .filter(Appointment.client_id == client_id, Appointment.date == date)
            .order_by(Appointment.id.asc())
            .all()
        )
