"""Tests for the patient registry."""

import pytest

from hospital_ops.auth import Actor
from hospital_ops.config import RoleConfig
from hospital_ops.domain.patients.schemas import PatientCreate, PatientUpdate
from hospital_ops.domain.patients.service import PatientService
from hospital_ops.errors import DomainError, ErrorKind
from hospital_ops.models import Patient


@pytest.fixture
def patients(db):
    return PatientService(db, RoleConfig())


def new_patient(**overrides):
    payload = {
        "mobile_number": "9812345670",
        "name": "Anil Varma",
        "gender": "Male",
        "age": 51,
        "pin_code": 600028,
    }
    payload.update(overrides)
    return PatientCreate(**payload)


class TestCreatePatient:
    def test_create(self, patients, admin, db, seed):
        result = patients.create_patient(admin, new_patient(op_id="OPA7788"))

        assert result["message"] == "patient is created"
        patient = db.query(Patient).filter(Patient.id == result["data"]["patient_id"]).one()
        assert patient.client_id == seed.client_id
        assert patient.created_by == seed.admin
        assert patient.gender == "male"
        assert patient.op_id == "OPA7788"

    def test_duplicate_op_id(self, patients, admin):
        with pytest.raises(DomainError) as exc:
            patients.create_patient(admin, new_patient(op_id="OPX1001"))
        assert exc.value.kind == ErrorKind.DUPLICATE_OP_ID

    def test_doctor_cannot_create(self, patients, seed):
        with pytest.raises(DomainError) as exc:
            patients.create_patient(Actor(id=seed.doctor, role="doctor"), new_patient())
        assert exc.value.kind == ErrorKind.FORBIDDEN


class TestReadPatients:
    def test_list_is_tenant_scoped(self, patients, admin, seed):
        result = patients.list_patients(admin)
        assert [p["patient_id"] for p in result["data"]] == [seed.patient]

    def test_search_by_mobile(self, patients, admin, seed):
        assert [p["patient_id"] for p in patients.search_patients(admin, "9123456780")["data"]] == [seed.patient]
        assert patients.search_patients(admin, "9000000001")["data"] == []

    def test_get_other_tenant_patient(self, patients, admin, seed):
        with pytest.raises(DomainError) as exc:
            patients.get_patient(admin, seed.other_patient)
        assert exc.value.kind == ErrorKind.PATIENT_NOT_FOUND

    def test_get(self, patients, admin, seed):
        data = patients.get_patient(admin, seed.patient)["data"]
        assert data["name"] == "Kiran Das"
        assert data["op_id"] == "OPX1001"


class TestUpdatePatient:
    def test_update_keeps_own_op_id(self, patients, admin, seed, db):
        payload = PatientUpdate(**new_patient(op_id="OPX1001").model_dump())
        result = patients.update_patient(admin, seed.patient, payload)

        assert result["message"] == "patient details are updated"
        db.expire_all()
        patient = db.query(Patient).filter(Patient.id == seed.patient).one()
        assert patient.name == "Anil Varma"
        assert patient.op_id == "OPX1001"

    def test_update_to_taken_op_id(self, patients, admin, seed):
        created = patients.create_patient(admin, new_patient(op_id="OPA7788"))
        payload = PatientUpdate(**new_patient(op_id="OPX1001").model_dump())

        with pytest.raises(DomainError) as exc:
            patients.update_patient(admin, created["data"]["patient_id"], payload)
        assert exc.value.kind == ErrorKind.DUPLICATE_OP_ID

    def test_update_unknown_patient(self, patients, admin):
        with pytest.raises(DomainError) as exc:
            patients.update_patient(admin, 9999, PatientUpdate(**new_patient().model_dump()))
        assert exc.value.kind == ErrorKind.PATIENT_NOT_FOUND
