"""In-memory table of job records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from .errors import UnknownColumn

Record = Dict[str, str]


@dataclass(frozen=True)
class JobTable:
    """Ordered job records sharing one header.

    Attributes:
        columns: Header column names in source order.
        records: One mapping per data row; every record carries every column
            with a string value (empty string allowed).

    Records are shared with query results and must not be mutated.
    """

    columns: Tuple[str, ...] = ()
    records: Tuple[Record, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "JobTable":
        """Table with no header and no rows (the no-data state)."""
        return cls()

    @classmethod
    def from_rows(cls, columns: List[str], rows: List[List[str]]) -> "JobTable":
        """Build a table from a header and positionally aligned rows.

        Short rows are padded with empty strings; extra trailing cells are
        rejected since they have no column to live in.
        """
        header = tuple(str(c) for c in columns)
        records: List[Record] = []
        for i, row in enumerate(rows):
            if len(row) > len(header):
                raise ValueError(
                    f"Row {i + 1} has {len(row)} cells but header has {len(header)} columns"
                )
            padded = list(row) + [""] * (len(header) - len(row))
            records.append({col: "" if val is None else str(val) for col, val in zip(header, padded)})
        return cls(columns=header, records=tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def has_column(self, column: str) -> bool:
        return column in self.columns

    def require_column(self, column: str) -> None:
        """Raise UnknownColumn unless the header contains `column`.

        The empty table knows no header, so nothing is rejected.
        """
        if self.columns and column not in self.columns:
            raise UnknownColumn(column, self.columns)


__all__ = ["JobTable", "Record"]
