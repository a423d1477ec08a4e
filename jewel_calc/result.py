"""Result wrapper returned at the calculator boundary.

The engine raises :class:`~jewel_calc.exceptions.ValidationError` internally.
``accrue_interest`` and ``calculate_metal_price`` catch it and hand back a
``Result`` instead, so a caller always receives either a complete value or a
complete error, never a partially filled one.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a calculation.

    Attributes:
        success: Whether the calculation succeeded.
        value: The calculation result on success, None on failure.
        error: Error message on failure, None on success.
        error_type: The ``ErrorKind`` of the failure.

    Usage:
        result = accrue_interest(request)
        if result:
            print(result.value.final_amount)
        else:
            print(f"{result.error_type}: {result.error}")
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, error_type: str) -> "Result[T]":
        return cls(success=False, error=error, error_type=error_type)

    @classmethod
    def from_error(cls, exc: ValidationError) -> "Result[T]":
        return cls.fail(exc.message, exc.kind)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Return the value, re-raising the failure as ``ValidationError``."""
        if not self.success:
            raise ValidationError(self.error, self.error_type)
        return self.value
