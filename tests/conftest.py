"""Shared pytest fixtures for job data tests."""

from pathlib import Path
from typing import Callable, Dict, List

import pandas as pd
import pytest

from job_data.core.dataset import JobDataset
from job_data.core.query import JobQueryEngine
from job_data.core.table import JobTable

HEADER = ["name", "employer", "location", "position type", "core competency"]

TWO_JOBS: List[Dict[str, str]] = [
    {
        "name": "Data Scientist",
        "employer": "Enterprise Holdings, Inc",
        "location": "St. Louis",
        "position type": "Full-Time",
        "core competency": "Data Science",
    },
    {
        "name": "Web Developer",
        "employer": "Acme LLC",
        "location": "Remote",
        "position type": "Contract",
        "core competency": "Web Development",
    },
]


class CountingLoader:
    """Loader test double that returns a fixed table and counts calls."""

    def __init__(self, table: JobTable) -> None:
        self.table = table
        self.calls = 0

    def __call__(self) -> JobTable:
        self.calls += 1
        return self.table


def make_table(rows: List[Dict[str, str]], header: List[str] = HEADER) -> JobTable:
    return JobTable.from_rows(header, [[row[c] for c in header] for row in rows])


def write_csv(path: Path, rows: List[Dict[str, str]], header: List[str] = HEADER) -> Path:
    pd.DataFrame(rows, columns=header).to_csv(path, index=False)
    return path


@pytest.fixture
def two_jobs_table() -> JobTable:
    return make_table(TWO_JOBS)


@pytest.fixture
def two_jobs_loader(two_jobs_table) -> CountingLoader:  # pylint: disable=redefined-outer-name
    return CountingLoader(two_jobs_table)


@pytest.fixture
def two_jobs_engine(two_jobs_loader) -> JobQueryEngine:  # pylint: disable=redefined-outer-name
    return JobQueryEngine(JobDataset(two_jobs_loader))


@pytest.fixture
def two_jobs_csv(tmp_path) -> Path:
    return write_csv(tmp_path / "job_data.csv", TWO_JOBS)


@pytest.fixture
def engine_for() -> Callable[[List[Dict[str, str]]], JobQueryEngine]:
    """Factory building an engine over ad-hoc rows."""

    def _build(rows: List[Dict[str, str]], header: List[str] = HEADER) -> JobQueryEngine:
        return JobQueryEngine(JobDataset(CountingLoader(make_table(rows, header))))

    return _build
