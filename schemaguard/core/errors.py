"""
Custom exception hierarchy for the schemaguard registry.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

Validation mismatches are NOT errors: they come back as a ValidationResult.
The classes below cover registry faults and unusable host-type input only.
"""
from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class SchemaGuardException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class SchemaNotFoundError(SchemaGuardException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "SCHEMA_NOT_FOUND"

    def __init__(self, reference_id: str):
        super().__init__(
            message=f"Schema {reference_id} does not exist.",
            details={"reference_id": reference_id},
        )


class SchemaAlreadyExistsError(SchemaGuardException):
    http_status = status.HTTP_409_CONFLICT
    code = "SCHEMA_ALREADY_EXISTS"

    def __init__(self, reference_id: str):
        super().__init__(
            message=f"Schema {reference_id} is already registered.",
            details={"reference_id": reference_id},
        )


class InvalidStateTransitionError(SchemaGuardException):
    http_status = status.HTTP_409_CONFLICT
    code = "INVALID_STATE_TRANSITION"

    def __init__(self, reference_id: str, current: str, target: str):
        super().__init__(
            message=f"Schema {reference_id} cannot move from {current} to {target}.",
            details={"reference_id": reference_id, "current": current, "target": target},
        )


class HostTypeResolutionError(SchemaGuardException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "HOST_TYPE_UNRESOLVABLE"

    def __init__(self, host_type: str, reason: str):
        super().__init__(
            message=f"Could not read the fields of {host_type}: {reason}",
            details={"host_type": host_type},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def schemaguard_exception_handler(
    request: Request, exc: SchemaGuardException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
