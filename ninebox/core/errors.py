"""
Error Handling - Nine-Box Talent Review
ninebox/core/errors.py

Structured error responses shared by every router, plus the exception
handlers registered in main.py.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from ninebox.core.exceptions import CorruptDocumentException, DatabaseConnectionException
from ninebox.models.assessment import ErrorResponse

logger = logging.getLogger(__name__)


#  Custom Exception Handlers

FIELD_MESSAGES = {
    "email": {
        "missing": "E-mail is required",
        "value_error": "E-mail must be a valid address",
        "string_pattern_mismatch": "E-mail must be a valid address",
    },
    "password": {
        "missing": "Password is required",
        "string_too_short": "Password must be at least 6 characters",
        "string_too_long": "Password must not exceed 72 characters",
    },
    "name": {
        "missing": "Name is required",
        "string_too_short": "Name must not be empty",
        "string_too_long": "Name must not exceed 255 characters",
    },
    "employee_id": {
        "missing": "Employee ID is required",
        "string_too_short": "Employee ID must not be empty",
    },
    "answers": {
        "missing": "Answers are required",
        "dict_type": "Answers must be an object mapping question ids to option values",
        "greater_than_equal": "Answer values must be between 0 and 3",
        "less_than_equal": "Answer values must be between 0 and 3",
        "int_parsing": "Answer values must be integers",
        "int_type": "Answer values must be integers",
    },
    "role": {
        "enum": "Role must be one of: admin, director, manager",
    },
    "category": {
        "missing": "Question category is required",
        "enum": "Category must be one of: performance, potential, calibration",
    },
    "axis": {
        "enum": "Axis must be one of: x, y",
    },
    "options": {
        "too_short": "A question needs at least one option",
    },
    "performance": {
        "enum": "Performance level must be 0, 1 or 2",
    },
    "potential": {
        "enum": "Potential level must be 0, 1 or 2",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "string_pattern_mismatch": "Field '{field}' has invalid format",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "float_parsing": "Field '{field}' must be a number",
    "bool_parsing": "Field '{field}' must be true or false",
    "enum": "Field '{field}' has an invalid value",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
    "value_error": "Field '{field}' is invalid",
}


def get_validation_message(field: str, error_type: str) -> str:
    top_level = field.split(".")[0]
    if top_level in FIELD_MESSAGES:
        field_msgs = FIELD_MESSAGES[top_level]
        for key in field_msgs:
            if key in error_type:
                return field_msgs[key]

    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)

    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error_code": "INVALID_REQUEST",
                "message": "Malformed JSON request body",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    field = ".".join(str(l) for l in loc if l not in ("body", "query", "path"))
    message = get_validation_message(field, error_type)

    # Model-level validators (e.g. low_max < med_max) carry their own message
    if error_type == "value_error" and err.get("msg"):
        message = err["msg"].removeprefix("Value error, ")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"field": field, "type": error_type} if field else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


async def store_unavailable_handler(request: Request, exc: Exception):
    """Document store could not be read, parsed or written."""
    logger.error(f"Document store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error_code": "STORE_UNAVAILABLE",
            "message": "Data store is temporarily unavailable",
            "details": {"reason": type(exc).__name__},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


STORE_EXCEPTIONS = (DatabaseConnectionException, CorruptDocumentException)


#  Exception Helpers

def error_detail(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None):
    raise HTTPException(
        status_code=status_code,
        detail=error_detail(error_code, message, details),
    )


def raise_not_found(entity: str):
    raise_error(status.HTTP_404_NOT_FOUND, f"{entity.upper()}_NOT_FOUND", f"{entity.capitalize()} not found")


def raise_forbidden(msg: str = "Insufficient role"):
    raise_error(status.HTTP_403_FORBIDDEN, "FORBIDDEN", msg)


def raise_conflict(error_code: str, msg: str):
    raise_error(status.HTTP_409_CONFLICT, error_code, msg)


def raise_bad_request(msg: str):
    raise_error(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", msg)


def raise_validation_error(msg: str, details: Optional[dict] = None):
    raise_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", msg, details)
