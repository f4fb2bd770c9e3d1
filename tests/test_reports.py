"""Tests for scan reports."""

import pytest

from hospital_ops.auth import Actor
from hospital_ops.config import RoleConfig
from hospital_ops.domain.reports.schemas import ReportCreate, ReportUpdate
from hospital_ops.domain.reports.service import ReportService
from hospital_ops.errors import DomainError, ErrorKind
from hospital_ops.models import Appointment, Report


@pytest.fixture
def reports(db):
    return ReportService(db, RoleConfig())


@pytest.fixture
def doctor(seed):
    return Actor(id=seed.doctor, role="doctor")


@pytest.fixture
def appointment_id(db, seed):
    appointment = Appointment(
        client_id=seed.client_id,
        patient_id=seed.patient,
        doctor_id=seed.doctor,
        branch_id=seed.branch,
        robot_id=seed.robot,
        date="2099-01-15",
        time="10:30 AM",
        scan_type="Ultrasound",
        differential_diagnosis="Suspected gall stones",
        created_by=seed.admin,
    )
    db.add(appointment)
    db.commit()
    return appointment.id


def write(reports, doctor, appointment_id, text="No abnormality detected"):
    return reports.create_report(doctor, ReportCreate(appointment_id=appointment_id, report_details=text))


class TestCreateReport:
    def test_create_flags_appointment(self, reports, doctor, appointment_id, db, seed):
        result = write(reports, doctor, appointment_id)

        assert result["message"] == "report is created"
        report = db.query(Report).filter(Report.id == result["data"]["report_id"]).one()
        assert report.created_by == seed.doctor
        assert report.view_count == 0
        db.expire_all()
        assert db.query(Appointment).filter(Appointment.id == appointment_id).one().is_report_sent is True

    def test_second_report_is_rejected(self, reports, doctor, appointment_id, db):
        write(reports, doctor, appointment_id)

        with pytest.raises(DomainError) as exc:
            write(reports, doctor, appointment_id, "Second opinion")

        assert exc.value.kind == ErrorKind.DUPLICATE_REPORT
        assert exc.value.message == "report already created for this appointment"
        assert db.query(Report).count() == 1

    def test_appointment_of_other_tenant(self, reports, seed, appointment_id):
        with pytest.raises(DomainError) as exc:
            write(reports, Actor(id=seed.other_doctor, role="doctor"), appointment_id)
        assert exc.value.kind == ErrorKind.APPOINTMENT_NOT_FOUND

    def test_admin_cannot_write(self, reports, admin, appointment_id):
        with pytest.raises(DomainError) as exc:
            write(reports, admin, appointment_id)
        assert exc.value.kind == ErrorKind.FORBIDDEN


class TestEditAndReadReport:
    def test_edit(self, reports, doctor, appointment_id, admin):
        write(reports, doctor, appointment_id)

        result = reports.edit_report(doctor, appointment_id, ReportUpdate(report_details="Small calculus seen"))

        assert result["message"] == "report is updated"
        assert reports.get_report(admin, appointment_id)["data"]["report_details"] == "Small calculus seen"

    def test_edit_without_report(self, reports, doctor, appointment_id):
        with pytest.raises(DomainError) as exc:
            reports.edit_report(doctor, appointment_id, ReportUpdate(report_details="Small calculus seen"))
        assert exc.value.message == "report is not found"

    def test_reads_are_counted(self, reports, doctor, appointment_id, admin):
        write(reports, doctor, appointment_id)

        reports.get_report(admin, appointment_id)
        data = reports.get_report(doctor, appointment_id)["data"]

        assert data["view_count"] == 2

    def test_list(self, reports, doctor, appointment_id, admin):
        write(reports, doctor, appointment_id)

        result = reports.list_reports(admin)

        assert result["data"] == [
            {
                "appointment_id": appointment_id,
                "scan_type": "Ultrasound",
                "report_status": True,
                "patient_name": "Kiran Das",
                "doctor_name": "Asha Rao",
            }
        ]

    def test_super_admin_cannot_list(self, reports, seed):
        with pytest.raises(DomainError) as exc:
            reports.list_reports(Actor(id=seed.super_admin, role="super_admin"))
        assert exc.value.message == "super_admin user can't able to view list of report"
