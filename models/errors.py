from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = 'not_found'
    AUTH_FAILED = 'auth_failed'
    BACKEND_ERROR = 'backend_error'
    CONFLICT = 'conflict'


class SalonApiError(Exception):
    """Failure of a backend operation, already phrased for display."""

    def __init__(self, kind, message, status_code=None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __str__(self):
        return self.message


HTTP_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.AUTH_FAILED: 401,
    ErrorKind.BACKEND_ERROR: 502,
    ErrorKind.CONFLICT: 409,
}


def http_status(error):
    return HTTP_STATUS.get(error.kind, 500)
