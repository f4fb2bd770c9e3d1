"""Uniform {status, message, data} response bodies"""

from typing import Any, Optional


def return_statement(status: bool, message: str, data: Optional[Any] = None) -> dict:
    """Build the response body shared by every endpoint. Missing data becomes {}."""
    return {
        "status": status,
        "message": message,
        "data": data if data is not None else {},
    }


def ok(message: str, data: Optional[Any] = None) -> dict:
    return return_statement(True, message, data)


def fail(message: str) -> dict:
    return return_statement(False, message)
