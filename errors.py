from fastapi import status


class PantryError(Exception):
    """Base class for errors surfaced to the client as a notice."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    recoverable = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {
            "detail": self.message,
            "error": type(self).__name__,
            "recoverable": self.recoverable,
        }


class ValidationError(PantryError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateSubmissionError(PantryError):
    """The entered quantity matches the stored one."""

    status_code = status.HTTP_409_CONFLICT


class DeviceAccessError(PantryError):
    """The camera is unavailable or permission was denied."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class RemoteOperationError(PantryError):
    """The document store or blob store failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    recoverable = False


class RemoteTimeoutError(RemoteOperationError):
    """A remote call did not complete within REMOTE_CALL_TIMEOUT."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    recoverable = True
