"""Tests for tenant resource listings."""

import pytest

from hospital_ops.auth import Actor
from hospital_ops.config import RoleConfig
from hospital_ops.domain.directory.service import DirectoryService, resolve_actor
from hospital_ops.errors import DomainError, ErrorKind


@pytest.fixture
def directory(db):
    return DirectoryService(db, RoleConfig())


def test_resolve_actor_without_role_check(db, seed):
    staff = resolve_actor(db, Actor(id=seed.doctor, role="doctor"))
    assert staff.client_id == seed.client_id


def test_resolve_actor_unknown(db, seed):
    with pytest.raises(DomainError) as exc:
        resolve_actor(db, Actor(id=9999, role="admin"))
    assert exc.value.kind == ErrorKind.ACTOR_NOT_FOUND
    assert exc.value.status_code == 404


def test_health_centers_are_tenant_scoped(directory, admin, seed):
    result = directory.list_health_centers(admin)

    assert result["message"] == "list of health centers"
    assert [b["branch_id"] for b in result["data"]] == [seed.branch, seed.second_branch]


def test_doctors_exclude_other_roles_and_tenants(directory, admin, seed):
    result = directory.list_doctors(admin)

    assert result["data"] == [
        {"doctor_id": seed.doctor, "doctor_name": "Asha Rao"},
        {"doctor_id": seed.second_doctor, "doctor_name": "Vikram Shah"},
    ]


def test_robots_of_branch(directory, admin, seed):
    result = directory.list_robots(admin, seed.second_branch)

    assert result["data"] == [
        {"robot_id": seed.second_robot, "robot_registration_id": "ROBOT002", "under_maintenance": False}
    ]


def test_robots_of_foreign_branch(directory, admin, seed):
    with pytest.raises(DomainError) as exc:
        directory.list_robots(admin, seed.other_branch)
    assert exc.value.kind == ErrorKind.BRANCH_NOT_FOUND


def test_scan_types(directory, seed):
    result = directory.list_scan_types(Actor(id=seed.system_admin, role="system_admin"))
    assert result["data"] == ["Ultrasound", "Thyroid Scan"]


def test_doctor_cannot_list(directory, seed):
    with pytest.raises(DomainError) as exc:
        directory.list_health_centers(Actor(id=seed.doctor, role="doctor"))
    assert exc.value.kind == ErrorKind.FORBIDDEN
    assert exc.value.message == "doctor user can't able to access list of health centers"
