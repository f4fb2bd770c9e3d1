"""Domain errors raised by the services and mapped to responses in main.py"""

from enum import Enum


class ErrorKind(str, Enum):
    ACTOR_NOT_FOUND = "actor_not_found"
    FORBIDDEN = "forbidden"
    DOCTOR_NOT_FOUND = "doctor_not_found"
    BRANCH_NOT_FOUND = "branch_not_found"
    ROBOT_NOT_FOUND = "robot_not_found"
    CLIENT_NOT_FOUND = "client_not_found"
    APPOINTMENT_NOT_FOUND = "appointment_not_found"
    PATIENT_NOT_FOUND = "patient_not_found"
    NOT_FOUND = "not_found"
    DUPLICATE_BILLING_ID = "duplicate_billing_id"
    DUPLICATE_OP_ID = "duplicate_op_id"
    DUPLICATE_SCAN_TYPE = "duplicate_scan_type"
    DUPLICATE_DEPARTMENT = "duplicate_department"
    DUPLICATE_TEMPLATE = "duplicate_template"
    DUPLICATE_EMAIL = "duplicate_email"
    DUPLICATE_REGISTRATION_ID = "duplicate_registration_id"
    DUPLICATE_REPORT = "duplicate_report"
    UNKNOWN_SCAN_TYPE = "unknown_scan_type"
    INVALID_SCHEDULE = "invalid_schedule"
    INVALID_STATUS = "invalid_status"


NOT_FOUND_KINDS = frozenset(
    {
        ErrorKind.ACTOR_NOT_FOUND,
        ErrorKind.DOCTOR_NOT_FOUND,
        ErrorKind.BRANCH_NOT_FOUND,
        ErrorKind.ROBOT_NOT_FOUND,
        ErrorKind.CLIENT_NOT_FOUND,
        ErrorKind.APPOINTMENT_NOT_FOUND,
        ErrorKind.PATIENT_NOT_FOUND,
        ErrorKind.NOT_FOUND,
    }
)

CONFLICT_KINDS = frozenset(
    {
        ErrorKind.DUPLICATE_BILLING_ID,
        ErrorKind.DUPLICATE_OP_ID,
        ErrorKind.DUPLICATE_SCAN_TYPE,
        ErrorKind.DUPLICATE_DEPARTMENT,
        ErrorKind.DUPLICATE_TEMPLATE,
        ErrorKind.DUPLICATE_EMAIL,
        ErrorKind.DUPLICATE_REGISTRATION_ID,
        ErrorKind.DUPLICATE_REPORT,
    }
)


class DomainError(Exception):
    """An expected failure whose message is safe to show to the client."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        if self.kind in NOT_FOUND_KINDS:
            return 404
        if self.kind == ErrorKind.FORBIDDEN:
            return 403
        if self.kind in CONFLICT_KINDS:
            return 409
        return 422

    def __repr__(self) -> str:
        return f"DomainError(kind={self.kind.value!r}, message={self.message!r})"


def actor_not_found() -> DomainError:
    return DomainError(ErrorKind.ACTOR_NOT_FOUND, "user id not found")


def forbidden(role: str, action: str) -> DomainError:
    return DomainError(ErrorKind.FORBIDDEN, f"{role} user can't able to {action}")
