"""Error taxonomy shared by services and the HTTP layer.

Every error raised to a request handler derives from ``AppError`` and carries
the status code and the client-facing message. Internal details travel on the
exception cause and are only ever logged.
"""
from typing import Optional


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing."""


class AppError(Exception):
    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInputError(AppError):
    status_code = 400
    message = "Invalid input"


class UnauthenticatedError(AppError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentialsError(UnauthenticatedError):
    message = "Invalid credentials"


class InvalidTokenError(UnauthenticatedError):
    message = "Invalid session token"


class ExpiredTokenError(UnauthenticatedError):
    message = "Session expired"


class ConflictError(AppError):
    status_code = 409
    message = "User already exists"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class UpstreamUnavailableError(AppError):
    status_code = 502


class StorageUnavailableError(UpstreamUnavailableError):
    status_code = 500


class OracleUnavailableError(UpstreamUnavailableError):
    pass


class OracleOutputInvalidError(AppError):
    status_code = 502
