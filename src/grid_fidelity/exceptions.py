class GridError(Exception):
    """Base class for other exceptions."""


class InvalidAddress(GridError, IndexError):
    """Raised for malformed cell addresses and out of range cell references."""


class OverlappingMergeError(GridError):
    """Raised when a merge range intersects an existing merge range."""

    def __init__(self, existing: str, requested: str) -> None:
        self.existing = existing
        self.requested = requested
        super().__init__(f"cannot merge {requested}: overlaps merged range {existing}")


class RowCommittedError(GridError):
    """Raised when a committed row is modified."""


class FidelityError(GridError, AssertionError):
    """Base class for fidelity check failures."""

    kind = "feature"

    def __init__(self, address: str, field: str, expected, actual) -> None:
        self.address = address
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{address}: {self.kind} mismatch for '{field}': "
            + f"expected {expected!r}, got {actual!r}"
        )


class ValueMismatch(FidelityError):
    """Raised when a cell, row or document value differs from the reference."""

    kind = "value"


class TypeMismatch(FidelityError):
    """Raised when a cell's value type differs from the reference."""

    kind = "type"


class StyleMismatch(FidelityError):
    """Raised when a style attribute differs from the reference."""

    kind = "style"


class StreamError(GridError, AssertionError):
    """Base class for row stream failures."""


class IncompleteStream(StreamError):
    """Raised when a row stream ends without its terminal event."""


class StreamOrderError(StreamError):
    """Raised for row events delivered out of order."""


class GridWarning(UserWarning):
    """Raised for recoverable modelling events."""
