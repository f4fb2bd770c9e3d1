"""Directory repository - Staff, branch, robot and tenant lookups"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import DoctorProfile, HealthCenter, HospitalClient, Robot, StaffMember


class DirectoryRepository:
    """Repository for identity and resource lookups"""

    @staticmethod
    def get_staff(db: Session, user_id: int) -> Optional[StaffMember]:
        """Get an active staff member by ID"""
        return (
            db.query(StaffMember)
            .filter(StaffMember.id == user_id, StaffMember.is_archive.is_(False))
            .first()
        )

    @staticmethod
    def get_doctor_in_tenant(db: Session, doctor_id: int, client_id: int) -> Optional[StaffMember]:
        """Get a doctor that belongs to the given tenant"""
        return (
            db.query(StaffMember)
            .filter(
                StaffMember.id == doctor_id,
                StaffMember.client_id == client_id,
                StaffMember.doctor_profile_id.isnot(None),
            )
            .first()
        )

    @staticmethod
    def get_doctor_name(db: Session, doctor_id: int) -> Optional[str]:
        """Display name of a doctor, joined through the doctor profile"""
        row = (
            db.query(StaffMember.name)
            .join(DoctorProfile, StaffMember.doctor_profile_id == DoctorProfile.id)
            .filter(StaffMember.id == doctor_id)
            .first()
        )
        return row[0] if row else None

    @staticmethod
    def get_branch_in_tenant(db: Session, branch_id: int, client_id: int) -> Optional[HealthCenter]:
        return (
            db.query(HealthCenter)
            .filter(HealthCenter.id == branch_id, HealthCenter.client_id == client_id)
            .first()
        )

    @staticmethod
    def get_robot_in_branch(db: Session, robot_id: int, branch_id: int) -> Optional[Robot]:
        return db.query(Robot).filter(Robot.id == robot_id, Robot.branch_id == branch_id).first()

    @staticmethod
    def get_robot(db: Session, robot_id: int) -> Optional[Robot]:
        return db.query(Robot).filter(Robot.id == robot_id).first()

    @staticmethod
    def get_client(db: Session, client_id: int) -> Optional[HospitalClient]:
        return db.query(HospitalClient).filter(HospitalClient.id == client_id).first()

    @staticmethod
    def list_branches(db: Session, client_id: int) -> list[HealthCenter]:
        return (
            db.query(HealthCenter)
            .filter(HealthCenter.client_id == client_id)
            .order_by(HealthCenter.id.asc())
            .all()
        )

    @staticmethod
    def list_doctors(db: Session, client_id: int) -> list[StaffMember]:
        """Doctors of a tenant, i.e. staff members that carry a doctor profile"""
        return (
            db.query(StaffMember)
            .filter(
                StaffMember.client_id == client_id,
                StaffMember.doctor_profile_id.isnot(None),
                StaffMember.is_archive.is_(False),
            )
            .order_by(StaffMember.id.asc())
            .all()
        )

    @staticmethod
    def list_robots(db: Session, branch_id: int) -> list[Robot]:
        return db.query(Robot).filter(Robot.branch_id == branch_id).order_by(Robot.id.asc()).all()

    @staticmethod
    def get_robot_in_tenant(db: Session, robot_id: int, client_id: int) -> Optional[Robot]:
        """Get a robot whose branch belongs to the given tenant"""
        return (
            db.query(Robot)
            .join(HealthCenter, Robot.branch_id == HealthCenter.id)
            .filter(Robot.id == robot_id, HealthCenter.client_id == client_id)
            .first()
        )

    @staticmethod
    def get_robot_by_registration_id(db: Session, registration_id: str) -> Optional[Robot]:
        """Registration ids are unique across tenants"""
        return db.query(Robot).filter(Robot.registration_id == registration_id).first()

    @staticmethod
    def create_branch(db: Session, client_id: int, created_by: int, **branch_data) -> HealthCenter:
        branch = HealthCenter(client_id=client_id, created_by=created_by, system_admin_ids=[], **branch_data)
        db.add(branch)
        db.commit()
        db.refresh(branch)
        return branch

    @staticmethod
    def create_robot(db: Session, branch_id: int, registration_id: str, created_by: int) -> Robot:
        robot = Robot(
            registration_id=registration_id,
            branch_id=branch_id,
            under_maintenance=False,
            created_by=created_by,
        )
        db.add(robot)
        db.commit()
        db.refresh(robot)
        return robot

    @staticmethod
    def set_robot_maintenance(db: Session, robot: Robot, under_maintenance: bool) -> Robot:
        robot.under_maintenance = under_maintenance
        db.commit()
        db.refresh(robot)
        return robot

    @staticmethod
    def add_system_admin(db: Session, branch: HealthCenter, staff_id: int) -> HealthCenter:
        # JSON columns are only flushed on reassignment
        branch.system_admin_ids = [*(branch.system_admin_ids or []), staff_id]
        db.commit()
        db.refresh(branch)
        return branch
