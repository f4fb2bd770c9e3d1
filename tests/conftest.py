"""Shared test fixtures: a file-backed SQLite database per test, a seeded
pair of tenants, a fake conferencing gateway and an API client."""

import os
from datetime import datetime, timezone
from types import SimpleNamespace

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker

from hospital_ops.auth import Actor, create_access_token
from hospital_ops.config import EngineSettings, RoleConfig, get_engine_settings
from hospital_ops.database import Base, build_engine, get_db, get_session_factory
from hospital_ops.domain.appointments.schemas import AppointmentCreate
from hospital_ops.domain.appointments.service import AppointmentService
from hospital_ops.main import app
from hospital_ops.models import (
    DoctorProfile,
    HealthCenter,
    HospitalClient,
    Patient,
    Robot,
    StaffMember,
)
from hospital_ops.services.conferencing_service import ConferenceLinks, get_conferencing_gateway

# 10:00 AM in Asia/Kolkata on 2025-06-01
FIXED_NOW = datetime(2025, 6, 1, 4, 30, tzinfo=timezone.utc)
NEXT_DAY = "2025-06-02"
FAR_FUTURE = "2099-01-15"
TIMEZONE = "Asia/Kolkata"


class FakeGateway:
    """Records provisioning calls and returns a fixed result"""

    def __init__(self, links=None, degraded=False):
        self.links = links or ConferenceLinks(
            meeting_url="https://meet.test/room-1",
            moderator_url="https://meet.test/room-1?moderator=1",
        )
        self.degraded = degraded
        self.calls = []

    async def provision(self, owner, date, time):
        self.calls.append((owner, date, time))
        return None if self.degraded else self.links


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'hospital_ops_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _staff(db, client_id, role, name, email, **extra):
    staff = StaffMember(client_id=client_id, role=role, name=name, email=email, **extra)
    db.add(staff)
    db.flush()
    return staff


def _doctor(db, client_id, name, email, registration_id):
    profile = DoctorProfile(
        registration_id=registration_id,
        department_id=1,
        training_completed_year="2015",
        time_from="09:00",
        time_to="17:00",
    )
    db.add(profile)
    db.flush()
    return _staff(db, client_id, "doctor", name, email, doctor_profile_id=profile.id)


def _branch(db, client_id, name, created_by):
    branch = HealthCenter(
        client_id=client_id,
        branch_name=name,
        branch_contact_number="9876543210",
        branch_location="Chennai",
        branch_pin_code=600001,
        system_admin_ids=[],
        created_by=created_by,
    )
    db.add(branch)
    db.flush()
    return branch


def _robot(db, branch_id, registration_id, created_by):
    robot = Robot(registration_id=registration_id, branch_id=branch_id, created_by=created_by)
    db.add(robot)
    db.flush()
    return robot


@pytest.fixture
def seed(db):
    """
    Tenant T with two branches and a robot in each, plus tenant U with
    its own doctor, branch and robot. Returns the ids.
    """
    tenant = HospitalClient(
        hospital_name="Sunrise Hospital",
        scan_types=["Ultrasound", "Thyroid Scan"],
        departments=[{"id": 1, "name": "Radiology", "is_archive": False}],
        templates=[],
    )
    other = HospitalClient(hospital_name="Lakeview Clinic", scan_types=["Ultrasound"], departments=[], templates=[])
    db.add_all([tenant, other])
    db.flush()

    super_admin = _staff(db, tenant.id, "super_admin", "Meera Iyer", "owner@sunrise.test")
    admin = _staff(db, tenant.id, "admin", "Ravi Kumar", "admin@sunrise.test", created_by=super_admin.id)
    system_admin = _staff(db, tenant.id, "system_admin", "Divya Nair", "sysadmin@sunrise.test", created_by=admin.id)
    archived_admin = _staff(
        db, tenant.id, "admin", "Old Admin", "old@sunrise.test", created_by=super_admin.id, is_archive=True
    )
    doctor = _doctor(db, tenant.id, "Asha Rao", "asha@sunrise.test", "REG1001")
    second_doctor = _doctor(db, tenant.id, "Vikram Shah", "vikram@sunrise.test", "REG1002")

    other_admin = _staff(db, other.id, "admin", "Lena Thomas", "admin@lakeview.test")
    other_doctor = _doctor(db, other.id, "Paul George", "paul@lakeview.test", "REG2001")

    branch = _branch(db, tenant.id, "Anna Nagar", super_admin.id)
    second_branch = _branch(db, tenant.id, "Adyar", super_admin.id)
    other_branch = _branch(db, other.id, "Lakeview Main", other_admin.id)

    robot = _robot(db, branch.id, "ROBOT001", super_admin.id)
    second_robot = _robot(db, second_branch.id, "ROBOT002", super_admin.id)
    other_robot = _robot(db, other_branch.id, "ROBOT900", other_admin.id)

    patient = Patient(
        client_id=tenant.id,
        op_id="OPX1001",
        mobile_number="9123456780",
        name="Kiran Das",
        gender="male",
        age=42,
        pin_code=600020,
        created_by=admin.id,
    )
    other_patient = Patient(
        client_id=other.id,
        mobile_number="9000000001",
        name="Sara Paul",
        gender="female",
        age=30,
        pin_code=682001,
        created_by=other_admin.id,
    )
    db.add_all([patient, other_patient])
    db.commit()

    return SimpleNamespace(
        client_id=tenant.id,
        other_client_id=other.id,
        super_admin=super_admin.id,
        admin=admin.id,
        system_admin=system_admin.id,
        archived_admin=archived_admin.id,
        doctor=doctor.id,
        second_doctor=second_doctor.id,
        other_admin=other_admin.id,
        other_doctor=other_doctor.id,
        branch=branch.id,
        second_branch=second_branch.id,
        other_branch=other_branch.id,
        robot=robot.id,
        second_robot=second_robot.id,
        other_robot=other_robot.id,
        patient=patient.id,
        other_patient=other_patient.id,
    )


@pytest.fixture
def admin(seed):
    return Actor(id=seed.admin, role="admin")


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def make_service(db, session_factory, gateway):
    def _make(settings=None, roles=None, clock=lambda: FIXED_NOW):
        return AppointmentService(
            db,
            session_factory,
            roles or RoleConfig(),
            settings or EngineSettings(timezone=TIMEZONE),
            gateway,
            clock=clock,
        )

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def booking(seed):
    """Build a valid booking for a new patient; keyword arguments override fields"""

    def _booking(**overrides):
        payload = {
            "doctor_id": seed.doctor,
            "branch_id": seed.branch,
            "robot_id": seed.robot,
            "date": NEXT_DAY,
            "time": "10:30 AM",
            "scan_type": "Ultrasound",
            "differential_diagnosis": "Suspected gall stones",
            "mobile_number": "9876501234",
            "name": "Priya Menon",
            "email": "priya@example.com",
            "gender": "female",
            "age": 34,
            "pin_code": 600040,
        }
        payload.update(overrides)
        return AppointmentCreate(**payload)

    return _booking


def auth_header(user_id, role):
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def api_app(session_factory, gateway):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_conferencing_gateway] = lambda: gateway
    app.dependency_overrides[get_engine_settings] = lambda: EngineSettings(timezone=TIMEZONE)
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api(api_app):
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
