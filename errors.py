from enum import Enum
from typing import Optional, Dict, Any
from fastapi import HTTPException, status

from license import NotFoundReason


class ErrorCode(Enum):
    """
    Central registry of API error codes.
    Each code maps to an HTTP status and a default user-facing message.
    """
    # System Errors (1xxx)
    INTERNAL_SERVER_ERROR = ("SYS_1001", status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected internal server error occurred.")
    SERVICE_NOT_CONFIGURED = ("SYS_1003", status.HTTP_503_SERVICE_UNAVAILABLE, "The license page URL is not configured.")

    # License Errors (3xxx)
    LICENSE_NOT_FOUND = ("LIC_3001", status.HTTP_404_NOT_FOUND, "Latest license not found.")
    LICENSE_DATE_NOT_FOUND = ("LIC_3002", status.HTTP_404_NOT_FOUND, "No license expires on that date.")
    LICENSE_COUNT_NOT_FOUND = ("LIC_3003", status.HTTP_404_NOT_FOUND, "No license has that many remaining days.")

    # Request Errors (4xxx)
    INVALID_EXPIRATION = ("REQ_4001", status.HTTP_400_BAD_REQUEST, "Expiration must be a YYYY-MM-DD date or a number of days.")

    # License Source Errors (5xxx)
    LICENSE_SOURCE_UNAVAILABLE = ("SRC_5001", status.HTTP_502_BAD_GATEWAY, "The license page could not be retrieved.")
    LICENSE_SOURCE_MALFORMED = ("SRC_5002", status.HTTP_502_BAD_GATEWAY, "The license page could not be parsed.")

    def __init__(self, code: str, status_code: int, message: str):
        self.code = code
        self.status_code = status_code
        self.message = message


NOT_FOUND_CODES = {
    NotFoundReason.EMPTY: ErrorCode.LICENSE_NOT_FOUND,
    NotFoundReason.NO_DATE_MATCH: ErrorCode.LICENSE_DATE_NOT_FOUND,
    NotFoundReason.NO_COUNT_MATCH: ErrorCode.LICENSE_COUNT_NOT_FOUND,
}


def error_body(error_code: ErrorCode, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the flattened JSON error payload."""
    return {
        "error_code": error_code.code,
        "message": message or error_code.message,
        "details": details
    }


def raise_api_error(error_code: ErrorCode, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
    """
    Raise a structured HTTPException using the centralized ErrorRegistry.
    """
    raise HTTPException(
        status_code=error_code.status_code,
        detail=error_body(error_code, message, details)
    )
