"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class JobColumn(str, Enum):
    """Well-known columns of the job listings dataset.

    Values are the exact header labels used in the CSV source, so members can
    be passed anywhere a column name string is expected.
    """

    NAME = "name"
    EMPLOYER = "employer"
    LOCATION = "location"
    POSITION_TYPE = "position type"
    CORE_COMPETENCY = "core competency"


__all__ = ["JobColumn"]
