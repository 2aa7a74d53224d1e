"""Exceptions raised by trademetrics.

Most degenerate inputs yield an undefined result (``None``) rather than
an exception. The classes here cover the cases that indicate a caller
bug and must fail loudly.
"""


class MetricsError(ValueError):
    """Base class for trademetrics errors."""


class EmptyInputError(MetricsError):
    """Raised when an explicit conversion receives an empty series."""


class LengthMismatchError(MetricsError):
    """Raised when two paired series do not have the same length."""

    def __init__(self, name: str, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"{name}: series must have the same length, got {left} and {right}"
        )
