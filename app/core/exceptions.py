from fastapi import status


class SchedulingError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InputError(SchedulingError, ValueError):
    """Malformed date or time reaching the engine boundary."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND


class SlotUnavailableError(SchedulingError):
    status_code = status.HTTP_409_CONFLICT


class InvalidOperationError(SchedulingError):
    status_code = status.HTTP_400_BAD_REQUEST


class CollaboratorError(SchedulingError):
    """A backing store failed. Distinct from a legitimately empty result."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
