"""Staff repository - Database operations for staff accounts"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import DoctorProfile, StaffMember


class StaffRepository:
    """Repository for staff and doctor profile database operations"""

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[StaffMember]:
        """Emails are unique across tenants"""
        return db.query(StaffMember).filter(StaffMember.email == email).first()

    @staticmethod
    def get_profile_by_registration_id(db: Session, registration_id: str) -> Optional[DoctorProfile]:
        return db.query(DoctorProfile).filter(DoctorProfile.registration_id == registration_id).first()

    @staticmethod
    def create_staff(db: Session, **staff_data) -> StaffMember:
        staff = StaffMember(is_archive=False, **staff_data)
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff

    @staticmethod
    def create_doctor_profile(db: Session, **profile_data) -> DoctorProfile:
        profile = DoctorProfile(is_approved=True, **profile_data)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def delete_staff(db: Session, staff_id: int) -> bool:
        deleted = db.query(StaffMember).filter(StaffMember.id == staff_id).delete(synchronize_session=False)
        db.commit()
        return deleted > 0

    @staticmethod
    def delete_doctor_profile(db: Session, profile_id: int) -> bool:
        deleted = db.query(DoctorProfile).filter(DoctorProfile.id == profile_id).delete(synchronize_session=False)
        db.commit()
        return deleted > 0
