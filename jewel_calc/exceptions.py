"""Exceptions raised by the jewelry calculators."""

from typing import Optional


class ErrorKind:
    """Validation failure categories."""

    INVALID_AMOUNT = "InvalidAmount"
    INVALID_DATE = "InvalidDate"
    INVALID_DATE_RANGE = "InvalidDateRange"
    INVALID_WASTAGE = "InvalidWastage"
    INVALID_CHOICE = "InvalidChoice"


class JewelCalcError(Exception):
    """Base exception for all calculator errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(JewelCalcError):
    """Raised when calculator input is rejected.

    ``kind`` is one of the :class:`ErrorKind` values and lets callers react
    to the category without parsing the message.
    """

    def __init__(self, message: str, kind: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.kind = kind

    def __str__(self):
        # details are for logs; users see the message only
        return self.message
