"""Custom exceptions for the SaveIt application.

These exceptions make it clear what went wrong and let the route layer map
each kind to a distinct HTTP response instead of catching generic Exception.
"""


class SaveItError(Exception):
    """Base exception for all SaveIt operations."""
    pass


class ApplicationError(SaveItError):
    """Expected business error, reported to the client as a 400."""

    def __init__(self, message, error_type=None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type or 'APPLICATION_ERROR'


class SafeRouteError(ApplicationError):
    """Error raised inside a safe route that carries its own HTTP status."""

    status = 400
    error_code = 'ROUTE_ERROR'

    def __init__(self, message, status=None):
        super().__init__(message, self.error_code)
        if status is not None:
            self.status = status


class Unauthorized(SafeRouteError):
    """No valid session or API key."""
    status = 401
    error_code = 'UNAUTHORIZED'

    def __init__(self, message='Unauthorized'):
        super().__init__(message)


class Forbidden(SafeRouteError):
    """Authenticated, but not allowed to use this route."""
    status = 403
    error_code = 'FORBIDDEN'

    def __init__(self, message='Forbidden'):
        super().__init__(message)


class NotFound(SafeRouteError):
    status = 404
    error_code = 'NOT_FOUND'


class InvalidInput(SafeRouteError):
    """Schema validation failed.

    ``issues`` is a list of ``{'field': ..., 'message': ...}`` dicts, one per
    failing field.
    """
    status = 400
    error_code = 'INVALID_INPUT'

    def __init__(self, issues, message='Invalid input'):
        super().__init__(message)
        self.issues = list(issues)


class BookmarkErrorType:
    MAX_BOOKMARKS = 'MAX_BOOKMARKS'
    BOOKMARK_ALREADY_EXISTS = 'BOOKMARK_ALREADY_EXISTS'


class BookmarkValidationError(ApplicationError):
    """Bookmark limits or uniqueness check failed."""
    pass


class StoreUnavailable(SaveItError):
    """Key-value store or database operation failed."""
    pass
