from __future__ import annotations


class SchedulingError(Exception):
    """Base for errors raised by the availability and booking services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BookingValidationError(SchedulingError):
    def __init__(
        self,
        message: str,
        *,
        missing_fields: list[str] | None = None,
        invalid_fields: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])
        self.invalid_fields = list(invalid_fields or [])


class SlotConflictError(SchedulingError):
    def __init__(self, message: str = "slot no longer available") -> None:
        super().__init__(message)


class NotFoundError(SchedulingError):
    pass
