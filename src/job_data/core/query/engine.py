"""Query operations over a JobDataset.

Every operation loads the dataset on first use and scans records in their
original load order. Results reference the table's records directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from job_data.core.config import SEARCH_PRIORITY
from job_data.core.dataset import JobDataset
from job_data.core.table import Record

from .patterns import contains_ci, fold_case


@dataclass(frozen=True)
class SearchHit:
    """A record returned by the prioritized search and the column that admitted it."""

    record: Record
    column: str


def first_matching_column(
    record: Record,
    needle: str,
    priority: Sequence[Tuple[str, bool]] = SEARCH_PRIORITY,
) -> Optional[str]:
    """Return the highest-priority column whose value contains `needle`.

    Columns are walked in `priority` order and the walk stops at the first
    match; columns absent from the record never match.
    """
    folded = fold_case(needle)
    for column, _ in priority:
        value = record.get(column)
        if value is not None and folded in fold_case(value):
            return column
    return None


def _check_priority(priority: Sequence[Tuple[str, bool]]) -> Tuple[Tuple[str, bool], ...]:
    """Validate a priority table: non-empty, unique columns, only the first flagged.

    Raises:
        ValueError: If the table breaks any of those rules.
    """
    entries = tuple((str(column), bool(flag)) for column, flag in priority)
    if not entries:
        raise ValueError("Search priority must name at least one column")
    columns = [column for column, _ in entries]
    if len(set(columns)) != len(columns):
        raise ValueError(f"Search priority repeats a column: {columns}")
    flagged = [column for column, flag in entries if flag]
    if flagged != [entries[0][0]]:
        raise ValueError(
            f"Exactly the first search column must be flagged highest priority, got {flagged}"
        )
    return entries


class JobQueryEngine:
    """Distinct-values, filter and prioritized search over one dataset."""

    def __init__(
        self,
        dataset: JobDataset,
        *,
        priority: Sequence[Tuple[str, bool]] = SEARCH_PRIORITY,
    ) -> None:
        self.dataset = dataset
        self.priority = _check_priority(priority)

    def list_column_values(self, column: str) -> List[str]:
        """Distinct values of `column`, sorted ascending by code point.

        Raises:
            UnknownColumn: If `column` is not in the loaded header.
        """
        table = self.dataset.table
        table.require_column(column)
        values: List[str] = []
        seen = set()
        for record in table:
            value = record[column]
            if value not in seen:
                seen.add(value)
                values.append(value)
        values.sort()
        return values

    def list_all(self) -> List[Record]:
        """Every record in load order, as a new list."""
        return list(self.dataset.table.records)

    def filter_by_column(self, column: str, needle: str) -> List[Record]:
        """Records whose `column` value contains `needle`, ignoring case.

        Raises:
            UnknownColumn: If `column` is not in the loaded header.
        """
        table = self.dataset.table
        table.require_column(column)
        return [record for record in table if contains_ci(record[column], needle)]

    def search_hits(self, needle: str) -> List[SearchHit]:
        """Prioritized search returning the admitting column for each record."""
        hits: List[SearchHit] = []
        for record in self.dataset.table:
            column = first_matching_column(record, needle, self.priority)
            if column is not None:
                hits.append(SearchHit(record=record, column=column))
        return hits

    def search(self, needle: str) -> List[Record]:
        """Records where any priority column contains `needle`, each at most once."""
        return [hit.record for hit in self.search_hits(needle)]


__all__ = ["JobQueryEngine", "SearchHit", "first_matching_column"]
