"""Tests for the load-once JobDataset handle and its failure policy."""

import logging
import threading
import time

import pytest

from conftest import CountingLoader, TWO_JOBS
from job_data.core.config import Settings
from job_data.core.dataset import JobDataset
from job_data.core.errors import DataUnavailable, UnknownColumn
from job_data.core.query import JobQueryEngine


class FailingLoader:
    """Loader that fails a fixed number of times before succeeding."""

    def __init__(self, table, failures: int = 1) -> None:
        self.table = table
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise DataUnavailable("disk on fire", source="jobs.csv")
        return self.table


def test_not_loaded_until_first_use(two_jobs_loader):
    dataset = JobDataset(two_jobs_loader)

    assert dataset.is_loaded is False
    assert two_jobs_loader.calls == 0

    dataset.ensure_loaded()

    assert dataset.is_loaded is True
    assert two_jobs_loader.calls == 1


def test_ensure_loaded_is_idempotent(two_jobs_loader):
    dataset = JobDataset(two_jobs_loader)

    for _ in range(3):
        dataset.ensure_loaded()

    assert two_jobs_loader.calls == 1
    assert list(dataset.table) == TWO_JOBS


def test_concurrent_first_use_loads_once(two_jobs_table):
    calls = []

    def slow_loader():
        calls.append(1)
        time.sleep(0.05)
        return two_jobs_table

    dataset = JobDataset(slow_loader)
    seen = []
    threads = [threading.Thread(target=lambda: seen.append(len(dataset.table))) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert seen == [2] * 8


def test_load_failure_is_logged_and_queries_return_empty(two_jobs_table, caplog):
    loader = FailingLoader(two_jobs_table, failures=10)
    engine = JobQueryEngine(JobDataset(loader, name="jobs.csv"))

    with caplog.at_level(logging.ERROR, logger="job_data.core.dataset"):
        assert engine.list_all() == []
        assert engine.search("data") == []
        assert engine.list_column_values("anything") == []
        assert engine.filter_by_column("anything", "x") == []

    assert engine.dataset.is_loaded is False
    assert "Failed to load jobs.csv: disk on fire" in caplog.text


def test_load_failure_is_retried_on_next_query(two_jobs_table):
    loader = FailingLoader(two_jobs_table, failures=1)
    engine = JobQueryEngine(JobDataset(loader))

    assert engine.list_all() == []
    assert engine.list_all() == TWO_JOBS
    assert loader.calls == 2

    engine.list_all()
    assert loader.calls == 2


def test_strict_load_failure_propagates(two_jobs_table):
    engine = JobQueryEngine(JobDataset(FailingLoader(two_jobs_table), strict=True))

    with pytest.raises(DataUnavailable, match="disk on fire") as exc_info:
        engine.search("data")

    assert exc_info.value.source is not None
    assert exc_info.value.source.name == "jobs.csv"


def test_require_column(two_jobs_loader):
    dataset = JobDataset(two_jobs_loader)

    dataset.require_column("employer")
    with pytest.raises(UnknownColumn, match="Unknown column: 'salary'"):
        dataset.require_column("salary")
    assert dataset.has_column("location")
    assert not dataset.has_column("Location")


def test_from_csv_reads_file_lazily(two_jobs_csv):
    dataset = JobDataset.from_csv(two_jobs_csv)

    assert dataset.is_loaded is False
    assert dataset.columns == ("name", "employer", "location", "position type", "core competency")
    assert len(dataset.table) == 2


def test_from_csv_missing_file_non_strict(tmp_path, caplog):
    dataset = JobDataset.from_csv(tmp_path / "missing.csv")

    with caplog.at_level(logging.ERROR):
        assert len(dataset.table) == 0

    assert "Job data file not found" in caplog.text


def test_counting_loader_helper_shared_table(two_jobs_table):
    loader = CountingLoader(two_jobs_table)
    a = JobDataset(loader)
    b = JobDataset(loader)

    a.ensure_loaded()
    b.ensure_loaded()

    assert loader.calls == 2
    assert a.table.records[0] is b.table.records[0]


def test_unknown_encoding_non_strict_returns_empty(two_jobs_csv, caplog):
    dataset = JobDataset.from_csv(two_jobs_csv, settings=Settings(encoding="no-such-codec"))
    engine = JobQueryEngine(dataset)

    with caplog.at_level(logging.ERROR, logger="job_data.core.dataset"):
        assert engine.list_all() == []

    assert "no-such-codec" in caplog.text


def test_unknown_encoding_strict_raises_data_unavailable(two_jobs_csv):
    settings = Settings(encoding="no-such-codec", strict=True)
    engine = JobQueryEngine(JobDataset.from_csv(two_jobs_csv, settings=settings))

    with pytest.raises(DataUnavailable):
        engine.list_all()
