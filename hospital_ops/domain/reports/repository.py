"""Report repository - Database operations for reports"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Patient, Report, StaffMember


class ReportRepository:
    """Repository for report database operations"""

    @staticmethod
    def get_by_appointment(db: Session, appointment_id: int) -> Optional[Report]:
        return db.query(Report).filter(Report.appointment_id == appointment_id).first()

    @staticmethod
    def create_report(db: Session, appointment: Appointment, created_by: int, report_details: str) -> Report:
        """Insert the report and flag the appointment in a single commit"""
        report = Report(
            appointment_id=appointment.id,
            report_details=report_details,
            created_by=created_by,
            view_count=0,
        )
        db.add(report)
        appointment.is_report_sent = True
        db.commit()
        db.refresh(report)
        return report

    @staticmethod
    def update_report(db: Session, report: Report, **updates) -> Report:
        for key, value in updates.items():
            setattr(report, key, value)
        db.commit()
        db.refresh(report)
        return report

    @staticmethod
    def list_for_tenant(db: Session, client_id: int) -> list[tuple]:
        """(appointment id, scan type, report sent, patient name, doctor name) per appointment"""
        return (
            db.query(
                Appointment.id,
                Appointment.scan_type,
                Appointment.is_report_sent,
                Patient.name,
                StaffMember.name,
            )
            .join(Patient, Appointment.patient_id == Patient.id)
            .join(StaffMember, Appointment.doctor_id == StaffMember.id)
            .filter(Appointment.client_id == client_id)
            .order_by(Appointment.id.asc())
            .all()
        )
