import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./hospital_ops.db")

# Connection pool (ignored for SQLite)
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "20"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "30"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))
# Statements slower than this are logged; 0 disables the check
DB_SLOW_QUERY_SECONDS = float(os.getenv("DB_SLOW_QUERY_SECONDS", "1.0"))

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_HOURS = int(os.getenv("JWT_EXPIRE_HOURS", "8"))

# Video conferencing provider (meeting/moderator URLs for appointments)
CONFERENCING_BASE_URL = os.getenv("CONFERENCING_BASE_URL", "https://tr.atrehealthtech.com")
CONFERENCING_TIMEOUT_SECONDS = float(os.getenv("CONFERENCING_TIMEOUT_SECONDS", "10"))
# Provider runs a self-signed certificate in some environments
CONFERENCING_VERIFY_TLS = os.getenv("CONFERENCING_VERIFY_TLS", "true").lower() == "true"

# Appointment dates/times are wall-clock values in the hospital's timezone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Kolkata")

# CORS - comma separated list of frontend origins
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

# When enabled, appointments that have left "up_coming" can no longer be edited
EDIT_REQUIRES_UPCOMING = os.getenv("EDIT_REQUIRES_UPCOMING", "false").lower() == "true"

# Role names as they appear in the token's role claim
SUPER_ADMIN = os.getenv("SUPER_ADMIN", "super_admin")
ADMIN = os.getenv("ADMIN", "admin")
SYSTEM_ADMIN = os.getenv("SYSTEM_ADMIN", "system_admin")
DOCTOR = os.getenv("DOCTOR", "doctor")


@dataclass(frozen=True)
class RoleConfig:
    """Role names known to the engine. Passed into services, never read globally."""

    super_admin: str = "super_admin"
    admin: str = "admin"
    system_admin: str = "system_admin"
    doctor: str = "doctor"

    @property
    def appointment_managers(self) -> frozenset[str]:
        return frozenset({self.admin, self.system_admin})

    def can_manage_appointments(self, role: str) -> bool:
        return role in self.appointment_managers

    def can_manage_catalog(self, role: str) -> bool:
        return role == self.super_admin

    def can_manage_facilities(self, role: str) -> bool:
        """Branches, robots and tenant admins are created by the super admin"""
        return role == self.super_admin

    def can_manage_staff(self, role: str) -> bool:
        """System admins and doctors are created by an admin"""
        return role == self.admin

    def can_maintain_robots(self, role: str) -> bool:
        return role in {self.super_admin, self.admin, self.system_admin}

    def can_write_reports(self, role: str) -> bool:
        return role == self.doctor

    def can_view_reports(self, role: str) -> bool:
        return role in {self.admin, self.system_admin, self.doctor}

    def can_manage_templates(self, role: str) -> bool:
        return role in {self.admin, self.doctor}


@dataclass(frozen=True)
class EngineSettings:
    timezone: str = "Asia/Kolkata"
    edit_requires_upcoming: bool = False


def get_role_config() -> RoleConfig:
    """FastAPI dependency for the configured role names"""
    return RoleConfig(
        super_admin=SUPER_ADMIN,
        admin=ADMIN,
        system_admin=SYSTEM_ADMIN,
        doctor=DOCTOR,
    )


def get_engine_settings() -> EngineSettings:
    """FastAPI dependency for appointment engine settings"""
    return EngineSettings(timezone=APP_TIMEZONE, edit_requires_upcoming=EDIT_REQUIRES_UPCOMING)
