"""Exceptions raised by the performance library."""


class PerformanceError(Exception):
    """Base exception for performance calculation errors."""

    pass


class InsufficientDataError(PerformanceError, ValueError):
    """NAV series too short for the requested calculation."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"At least {required} NAV observations required, got {actual}")


class LengthMismatchError(PerformanceError, ValueError):
    """Paired return series have different lengths."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Return series must have the same length, got {left} and {right}")
