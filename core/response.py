# core/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Not Found ===
    # roll number, test title, or list position does not exist in the scope
    NOT_FOUND = "NOT_FOUND"

    # === Validation Failures ===
    # blob or record structure is malformed or incomplete
    INVALID_INPUT = "INVALID_INPUT"

    # field value is out of bounds or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # the value is valid in isolation, but violates gradebook rules (duplicate title, blank name)
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === Access ===
    # teacher code mismatch or a management action without authentication
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard Response object for Gradebook manipulator and lookup methods.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style response code.
        data (dict): Optional payload, varies by operation.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = 400,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def not_found(cls, detail: str) -> Response:
        return cls.fail(detail=detail, error=ErrorCode.NOT_FOUND, status_code=404)

