"""
Response helpers for consistent API responses.

Every error leaving the API goes through error_response so clients can rely
on the same shape: {'success': False, 'error': ..., 'error_code': ..., 'details': ...}.
"""
from flask import jsonify
from typing import Any, Dict, Optional, Union
import logging

logger = logging.getLogger(__name__)


def error_response(
    message: str,
    status: int = 400,
    details: Optional[Union[str, Dict, list]] = None,
    error_code: Optional[str] = None
) -> tuple:
    """
    Create a standardized error response.

    Args:
        message: User-friendly error message (required)
        status: HTTP status code (default: 400 Bad Request)
        details: Additional error details (optional)
        error_code: Machine-readable error code (optional)

    Returns:
        Tuple of (response, status_code) suitable for Flask return

    Common status codes:
        400 - Bad Request (validation errors, business rule violations)
        401 - Unauthorized (no session or API key)
        403 - Forbidden (authenticated but not allowed)
        404 - Not Found
        500 - Internal Server Error
        503 - Service Unavailable (database or key-value store failure)
    """
    response: Dict[str, Any] = {
        'error': message,
        'success': False
    }

    if details is not None:
        response['details'] = details

    if error_code is not None:
        response['error_code'] = error_code

    logger.warning(f"Error response: {status} - {message}")
    if details:
        logger.debug(f"Error details: {details}")

    return jsonify(response), status


def validation_error_response(issues: list) -> tuple:
    """
    Create a standardized validation error response.

    Args:
        issues: List of {'field': ..., 'message': ...} dicts

    Returns:
        Tuple of (response, status_code) with status 400

    Example:
        return validation_error_response([{'field': 'url', 'message': 'Invalid URL format'}])
    """
    return error_response(
        message='Invalid input',
        status=400,
        details=issues,
        error_code='INVALID_INPUT'
    )


def service_unavailable_response() -> tuple:
    """
    Create a generic store-failure response.

    Internal details are logged by the caller, never returned.
    """
    return error_response(
        message='Service temporarily unavailable',
        status=503,
        error_code='STORE_UNAVAILABLE'
    )


def server_error_response() -> tuple:
    return error_response(
        message='An unexpected error occurred',
        status=500,
        error_code='INTERNAL_ERROR'
    )
