"""Tests for branch and robot setup."""

import pytest

from hospital_ops.auth import Actor
from hospital_ops.config import RoleConfig
from hospital_ops.domain.directory.schemas import HealthCenterCreate, RobotCreate, RobotMaintenanceUpdate
from hospital_ops.domain.directory.service import DirectoryService
from hospital_ops.errors import DomainError, ErrorKind
from hospital_ops.models import HealthCenter, Robot


@pytest.fixture
def directory(db):
    return DirectoryService(db, RoleConfig())


@pytest.fixture
def owner(seed):
    return Actor(id=seed.super_admin, role="super_admin")


def new_branch(**overrides):
    payload = {
        "branch_name": "Velachery",
        "branch_contact_number": "9876500011",
        "branch_location": "Chennai South",
        "branch_pin_code": 600042,
    }
    payload.update(overrides)
    return HealthCenterCreate(**payload)


class TestCreateHealthCenter:
    def test_create_lists_with_tenant_branches(self, directory, owner, admin, db, seed):
        result = directory.create_health_center(owner, new_branch())

        assert result["message"] == "health center is created"
        branch = db.query(HealthCenter).filter(HealthCenter.id == result["data"]["branch_id"]).one()
        assert branch.client_id == seed.client_id
        assert branch.created_by == seed.super_admin
        assert branch.system_admin_ids == []
        names = [b["branch_name"] for b in directory.list_health_centers(admin)["data"]]
        assert names == ["Anna Nagar", "Adyar", "Velachery"]

    def test_admin_is_forbidden(self, directory, admin):
        with pytest.raises(DomainError) as exc:
            directory.create_health_center(admin, new_branch())
        assert exc.value.kind == ErrorKind.FORBIDDEN
        assert exc.value.message == "admin user can't able to create new health center"

    def test_invalid_pin_code(self):
        with pytest.raises(ValueError):
            new_branch(branch_pin_code=1234)


class TestCreateRobot:
    def test_create_in_own_branch(self, directory, owner, admin, seed):
        result = directory.create_robot(owner, seed.second_branch, RobotCreate(robot_registration_id="ROBOT003"))

        assert result["message"] == "new robot created"
        robots = directory.list_robots(admin, seed.second_branch)["data"]
        assert [r["robot_registration_id"] for r in robots] == ["ROBOT002", "ROBOT003"]

    def test_duplicate_registration_id(self, directory, owner, seed):
        with pytest.raises(DomainError) as exc:
            directory.create_robot(owner, seed.branch, RobotCreate(robot_registration_id="ROBOT900"))
        assert exc.value.kind == ErrorKind.DUPLICATE_REGISTRATION_ID
        assert exc.value.status_code == 409

    def test_foreign_branch(self, directory, owner, seed, db):
        with pytest.raises(DomainError) as exc:
            directory.create_robot(owner, seed.other_branch, RobotCreate(robot_registration_id="ROBOT004"))
        assert exc.value.kind == ErrorKind.BRANCH_NOT_FOUND
        assert db.query(Robot).filter(Robot.registration_id == "ROBOT004").first() is None


class TestRobotMaintenance:
    def test_toggle(self, directory, seed, db):
        system_admin = Actor(id=seed.system_admin, role="system_admin")

        result = directory.set_robot_maintenance(
            system_admin, seed.robot, RobotMaintenanceUpdate(under_maintenance=True)
        )

        assert result["message"] == "robot is marked under maintenance"
        db.expire_all()
        assert db.query(Robot).filter(Robot.id == seed.robot).one().under_maintenance is True

        directory.set_robot_maintenance(system_admin, seed.robot, RobotMaintenanceUpdate(under_maintenance=False))
        db.expire_all()
        assert db.query(Robot).filter(Robot.id == seed.robot).one().under_maintenance is False

    def test_robot_of_other_tenant(self, directory, admin, seed):
        with pytest.raises(DomainError) as exc:
            directory.set_robot_maintenance(admin, seed.other_robot, RobotMaintenanceUpdate(under_maintenance=True))
        assert exc.value.kind == ErrorKind.ROBOT_NOT_FOUND

    def test_doctor_is_forbidden(self, directory, seed):
        with pytest.raises(DomainError) as exc:
            directory.set_robot_maintenance(
                Actor(id=seed.doctor, role="doctor"), seed.robot, RobotMaintenanceUpdate(under_maintenance=True)
            )
        assert exc.value.kind == ErrorKind.FORBIDDEN
