from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class HospitalClient(Base):
    """A tenant. Owns the scan-type, department and report-template catalogs."""

    __tablename__ = "hospital_clients"

    id = Column(Integer, primary_key=True, index=True)
    hospital_name = Column(String(255), unique=True, nullable=False)
    logo_url = Column(String(500), nullable=True)
    domain_url = Column(String(255), nullable=True)
    scan_types = Column(JSON, default=list, nullable=False)  # ordered list of names
    departments = Column(JSON, default=list, nullable=False)  # [{id, name, is_archive}]
    templates = Column(JSON, default=list, nullable=False)  # [{id, name, body, is_archive}]
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class DoctorProfile(Base):
    __tablename__ = "doctor_profiles"

    id = Column(Integer, primary_key=True, index=True)
    registration_id = Column(String(100), unique=True, nullable=False)
    department_id = Column(Integer, nullable=False)
    training_completed_year = Column(String(4), nullable=False)
    time_from = Column(String(8), nullable=True)  # HH:MM[:SS]
    time_to = Column(String(8), nullable=True)
    # No verification workflow exists yet, doctors are approved at creation
    is_approved = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    staff = relationship("StaffMember", back_populates="doctor_profile", uselist=False)


class StaffMember(Base):
    """Any system user other than a patient: super admin, admin, system admin, doctor."""

    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("hospital_clients.id"), nullable=False, index=True)
    branch_id = Column(Integer, nullable=True)  # null for tenant-wide roles
    role = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    contact_number = Column(String(10), nullable=True)
    is_archive = Column(Boolean, default=False, nullable=False)
    created_by = Column(Integer, nullable=True)  # null only for the tenant's first super admin
    doctor_profile_id = Column(Integer, ForeignKey("doctor_profiles.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    doctor_profile = relationship("DoctorProfile", back_populates="staff")


class HealthCenter(Base):
    """A branch of a tenant"""

    __tablename__ = "health_centers"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("hospital_clients.id"), nullable=False, index=True)
    branch_name = Column(String(255), nullable=False)
    branch_contact_number = Column(String(20), nullable=False)
    branch_location = Column(String(255), nullable=False)
    branch_pin_code = Column(Integer, nullable=False)
    system_admin_ids = Column(JSON, default=list, nullable=False)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Robot(Base):
    __tablename__ = "robots"

    id = Column(Integer, primary_key=True, index=True)
    registration_id = Column(String(100), unique=True, nullable=False)
    branch_id = Column(Integer, ForeignKey("health_centers.id"), nullable=False, index=True)
    under_maintenance = Column(Boolean, default=False, nullable=False)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("hospital_clients.id"), nullable=False, index=True)
    op_id = Column(String(30), unique=True, nullable=True)  # external hospital reference
    mobile_number = Column(String(10), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    gender = Column(String(20), nullable=False)
    age = Column(Integer, nullable=False)
    pin_code = Column(Integer, nullable=False)
    electronic_id = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    action_required = Column(Boolean, default=False, nullable=False)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("hospital_clients.id"), nullable=False, index=True)
    op_id = Column(String(30), nullable=True)
    billing_id = Column(String(50), unique=True, nullable=True)
    usg_ref_id = Column(String(50), nullable=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("staff_members.id"), nullable=False)
    branch_id = Column(Integer, ForeignKey("health_centers.id"), nullable=False)
    robot_id = Column(Integer, ForeignKey("robots.id"), nullable=False)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time = Column(String(8), nullable=False)  # hh:mm AM|PM
    scan_type = Column(String(30), nullable=False)
    differential_diagnosis = Column(Text, nullable=False)
    status = Column(String(50), default="up_coming", nullable=False)
    appointment_type = Column(String(50), default="normal_appointment", nullable=False)
    created_by = Column(Integer, nullable=False)
    is_report_sent = Column(Boolean, default=False, nullable=False)
    # {"meetingUrl": ..., "moderatorUrl": ...}; NULL when the provider was unavailable
    call_url = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Report(Base):
    """A doctor's scan report. At most one per appointment, checked when the report is written."""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    report_details = Column(Text, nullable=False)
    status = Column(String(50), default="created", nullable=False)
    created_by = Column(Integer, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
