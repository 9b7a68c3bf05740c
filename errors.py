"""Error types raised by the domain modules.

Each carries the HTTP status it is rendered with; ``main`` installs a single
exception handler that turns them into ``{"error": message}`` responses.
"""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    status_code = 400


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class RateLimitedError(ApiError):
    status_code = 429


class StorageError(ApiError):
    status_code = 500
