"""Configuration constants and YAML settings loading.

Constants:
    - DEFAULT_DATA_FILE: CSV read when no other source is configured
    - DEFAULT_DELIMITER / DEFAULT_ENCODING: CSV dialect passed to the loader
    - SEARCH_PRIORITY: ordered (column, is_highest_priority) pairs walked by
      the prioritized search

Settings file (config/settings.yaml):

    data_file: ../data/job_data.csv
    delimiter: ","
    encoding: utf-8-sig
    strict: false

Relative `data_file` paths resolve against the directory holding the YAML.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .enums import JobColumn

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_DATA_FILE = Path("data/job_data.csv")
DEFAULT_SETTINGS_FILE = Path("config/settings.yaml")
DEFAULT_DELIMITER = ","
DEFAULT_ENCODING = "utf-8-sig"


# ============================================================================
# SEARCH PRIORITY
# ============================================================================
# Format: (column, is_highest_priority)
# A record is attributed to the first column in this order whose value
# contains the needle; later columns are never consulted for that record.

SEARCH_PRIORITY: Tuple[Tuple[str, bool], ...] = (
    (JobColumn.POSITION_TYPE.value, True),
    (JobColumn.NAME.value, False),
    (JobColumn.EMPLOYER.value, False),
    (JobColumn.LOCATION.value, False),
    (JobColumn.CORE_COMPETENCY.value, False),
)


def search_columns() -> Tuple[str, ...]:
    """Return the prioritized search columns in priority order.

    Examples:
        >>> search_columns()[0]
        'position type'
    """
    return tuple(column for column, _ in SEARCH_PRIORITY)


# ============================================================================
# SETTINGS
# ============================================================================


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for the dataset loader."""

    data_file: Path = DEFAULT_DATA_FILE
    delimiter: str = DEFAULT_DELIMITER
    encoding: str = DEFAULT_ENCODING
    strict: bool = False

    def with_overrides(
        self,
        *,
        data_file: Optional[Union[str, Path]] = None,
        strict: Optional[bool] = None,
    ) -> "Settings":
        """Return a copy with non-None overrides applied."""
        changes: Dict[str, Any] = {}
        if data_file is not None:
            changes["data_file"] = Path(data_file)
        if strict is not None:
            changes["strict"] = bool(strict)
        return replace(self, **changes) if changes else self


def load_settings(settings_file: Optional[Path] = None) -> Settings:
    """Load settings from YAML, falling back to defaults.

    Args:
        settings_file: Path to a settings YAML. Defaults to config/settings.yaml.
            A missing file yields default settings.

    Returns:
        Settings with values from the file applied over the defaults.

    Raises:
        ValueError: If the file exists but is not a YAML mapping or a value
            has the wrong type.
    """
    path = Path(settings_file) if settings_file is not None else DEFAULT_SETTINGS_FILE
    if not path.exists():
        return Settings()

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")

    settings = Settings()
    changes: Dict[str, Any] = {}

    data_file = data.get("data_file")
    if data_file is not None:
        data_path = Path(str(data_file))
        if not data_path.is_absolute():
            data_path = path.parent / data_path
        changes["data_file"] = data_path

    delimiter = data.get("delimiter")
    if delimiter is not None:
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
        changes["delimiter"] = delimiter

    encoding = data.get("encoding")
    if encoding is not None:
        try:
            codecs.lookup(str(encoding))
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {encoding!r}") from e
        changes["encoding"] = str(encoding)

    strict = data.get("strict")
    if strict is not None:
        if not isinstance(strict, bool):
            raise ValueError(f"strict must be true or false, got {strict!r}")
        changes["strict"] = strict

    return replace(settings, **changes)


__all__ = [
    "DEFAULT_DATA_FILE",
    "DEFAULT_SETTINGS_FILE",
    "DEFAULT_DELIMITER",
    "DEFAULT_ENCODING",
    "SEARCH_PRIORITY",
    "Settings",
    "load_settings",
    "search_columns",
]
