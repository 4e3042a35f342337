"""Core query engine public API.

`JobQueryEngine` binds the query operations to one dataset. The module-level
functions below run against the process-wide default dataset built from
config/settings.yaml (see job_data.core.dataset.get_default_dataset).
"""

from __future__ import annotations

from typing import List, Optional, Union, overload

from job_data.core.dataset import get_default_dataset
from job_data.core.table import Record

from .engine import JobQueryEngine, SearchHit, first_matching_column
from .patterns import contains_ci, fold_case


def _default_engine() -> JobQueryEngine:
    return JobQueryEngine(get_default_dataset())


@overload
def find_all() -> List[Record]: ...


@overload
def find_all(column: str) -> List[str]: ...


def find_all(column: Optional[str] = None) -> Union[List[Record], List[str]]:
    """All records when called bare; sorted distinct values of `column` otherwise."""
    engine = _default_engine()
    if column is None:
        return engine.list_all()
    return engine.list_column_values(column)


def find_by_column_and_value(column: str, value: str) -> List[Record]:
    return _default_engine().filter_by_column(column, value)


def find_by_value(value: str) -> List[Record]:
    return _default_engine().search(value)


__all__ = [
    "JobQueryEngine",
    "SearchHit",
    "first_matching_column",
    "contains_ci",
    "fold_case",
    "find_all",
    "find_by_column_and_value",
    "find_by_value",
]
