"""Error types raised by the dataset and query layers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple, Union


class JobDataError(Exception):
    """Base class for all job data errors."""


class UnknownColumn(JobDataError, KeyError):
    """Requested column is not part of the loaded table's header.

    Subclasses KeyError because the failure is a lookup miss on the record
    mapping; callers catching KeyError keep working.
    """

    def __init__(self, column: str, available: Iterable[str] = ()) -> None:
        self.column = column
        self.available: Tuple[str, ...] = tuple(available)
        super().__init__(column)

    def __str__(self) -> str:
        if self.available:
            return (
                f"Unknown column: {self.column!r}. "
                f"Available columns: {', '.join(self.available)}"
            )
        return f"Unknown column: {self.column!r}"


class DataUnavailable(JobDataError):
    """The loader could not produce a table from its source."""

    def __init__(self, message: str, source: Optional[Union[str, Path]] = None) -> None:
        self.source = Path(source) if source is not None else None
        super().__init__(message)


__all__ = ["JobDataError", "UnknownColumn", "DataUnavailable"]
