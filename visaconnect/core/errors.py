"""Domain errors raised by the service layer.

Routers translate these into HTTP responses; services never import FastAPI
exceptions for business failures.
"""


class VisaConnectError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ReportValidationError(VisaConnectError, ValueError):
    status_code = 400


class NotFoundError(VisaConnectError, LookupError):
    status_code = 404


class ReportNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Report not found') -> None:
        super().__init__(message)


class TargetNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Report target not found') -> None:
        super().__init__(message)


class ReportStateConflictError(VisaConnectError):
    status_code = 409


class PermissionDeniedError(VisaConnectError):
    status_code = 403

    def __init__(self, message: str = 'Access denied') -> None:
        super().__init__(message)
