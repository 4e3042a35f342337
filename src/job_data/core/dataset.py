"""Load-once dataset handle shared by the query layer.

A JobDataset wraps a loader callable and populates its table on first use.
The load step is serialized by a lock, so concurrent first callers trigger a
single load and never observe a partially populated table.

Load failure policy:
    - strict=False (default): the DataUnavailable is logged and the table
      stays empty; queries return empty results and the next call retries.
    - strict=True: the DataUnavailable propagates to the query caller.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional, Tuple

from job_data.ingestion.loader import load_job_table

from .config import Settings, load_settings
from .errors import DataUnavailable
from .table import JobTable

logger = logging.getLogger(__name__)

TableLoader = Callable[[], JobTable]


class JobDataset:
    """Lazily loaded, process-lifetime job table."""

    def __init__(self, loader: TableLoader, *, strict: bool = False, name: str = "job data") -> None:
        self._loader = loader
        self.strict = strict
        self.name = name
        self._table: JobTable = JobTable.empty()
        self._loaded = False
        self._lock = threading.Lock()

    @classmethod
    def from_csv(cls, path: Path, *, settings: Optional[Settings] = None) -> "JobDataset":
        """Dataset backed by a CSV file read with the given settings' dialect."""
        cfg = (settings or Settings()).with_overrides(data_file=path)

        def _load() -> JobTable:
            return load_job_table(cfg.data_file, delimiter=cfg.delimiter, encoding=cfg.encoding)

        return cls(_load, strict=cfg.strict, name=str(cfg.data_file))

    @classmethod
    def from_settings(cls, settings: Settings) -> "JobDataset":
        return cls.from_csv(settings.data_file, settings=settings)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Populate the table if it is not loaded yet.

        Raises:
            DataUnavailable: Only when strict; otherwise the failure is logged.
        """
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            try:
                table = self._loader()
            except DataUnavailable as e:
                if self.strict:
                    raise
                logger.error("Failed to load %s: %s", self.name, e)
                return
            self._table = table
            self._loaded = True

    @property
    def table(self) -> JobTable:
        self.ensure_loaded()
        return self._table

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.table.columns

    def has_column(self, column: str) -> bool:
        return self.table.has_column(column)

    def require_column(self, column: str) -> None:
        self.table.require_column(column)


_default_dataset: Optional[JobDataset] = None
_default_lock = threading.Lock()
_default_settings_file: Optional[Path] = None


def get_default_dataset(settings_file: Optional[Path] = None) -> JobDataset:
    """Return the process-wide dataset, creating it from settings on first use.

    `settings_file` is only read when the dataset is created; passing a
    different file later logs a warning and returns the existing dataset.
    Use set_default_dataset() to replace it.
    """
    global _default_dataset, _default_settings_file
    if _default_dataset is None:
        with _default_lock:
            if _default_dataset is None:
                _default_dataset = JobDataset.from_settings(load_settings(settings_file))
                _default_settings_file = settings_file
                return _default_dataset
    if settings_file is not None and settings_file != _default_settings_file:
        logger.warning(
            "Default dataset already created from %s; ignoring settings file %s",
            _default_settings_file or "default settings",
            settings_file,
        )
    return _default_dataset


def set_default_dataset(dataset: Optional[JobDataset]) -> None:
    """Install `dataset` as the process-wide dataset (None clears it)."""
    global _default_dataset, _default_settings_file
    with _default_lock:
        _default_dataset = dataset
        _default_settings_file = None


__all__ = ["JobDataset", "TableLoader", "get_default_dataset", "set_default_dataset"]
