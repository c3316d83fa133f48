"""Exceptions raised for programming errors in grid code.

Expected absences (a direction that is not allowed, an inverted rectangle)
are reported as ``None`` and never raise.
"""


class GridError(Exception):
    """Base class for grid errors."""


class KindMismatchError(GridError, TypeError):
    """Raised when coordinates, axes or sized grids of different kinds meet."""

    def __init__(self, operation: str, left, right) -> None:
        super().__init__(
            f"Cannot {operation} for different kinds of coordinates: {left} vs {right}"
        )
        self.operation = operation
        self.left = left
        self.right = right
