"""CSV loader producing a JobTable.

The first row of the source is the header; each following row becomes one
record with values aligned to the header by position. Every cell is read as
a string, and missing trailing cells become empty strings. A row with more
cells than the header (including a trailing delimiter) fails the load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from job_data.core.config import DEFAULT_DELIMITER, DEFAULT_ENCODING
from job_data.core.errors import DataUnavailable
from job_data.core.table import JobTable


logger = logging.getLogger(__name__)


def load_job_table(
    source: Union[str, Path],
    *,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = DEFAULT_ENCODING,
) -> JobTable:
    """Parse a delimited text file with a header row into a JobTable.

    Args:
        source: Path to the CSV file.
        delimiter: Field separator.
        encoding: Text encoding; the default strips a UTF-8 BOM.

    Returns:
        JobTable with the header as columns and one record per data row.

    Raises:
        DataUnavailable: If the file is missing, unreadable, empty or malformed.
    """
    path = Path(source)
    if not path.exists():
        raise DataUnavailable(f"Job data file not found: {path}", source=path)

    # header=None keeps the header as row 0 so no cell can become the index
    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            encoding=encoding,
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError as e:
        raise DataUnavailable(f"Job data file is empty: {path}", source=path) from e
    except (OSError, LookupError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DataUnavailable(f"Failed to read job data file {path}: {e}", source=path) from e

    header = df.iloc[0]
    if header.isna().any():
        raise DataUnavailable(
            f"Job data file {path} has rows with more cells than its "
            f"{int(header.notna().sum())}-column header",
            source=path,
        )

    # Short rows come back as NaN even with keep_default_na=False
    body = df.iloc[1:].fillna("")
    columns = [str(c) for c in header.tolist()]
    rows = body.values.tolist()

    table = JobTable.from_rows(columns, rows)
    logger.info("Loaded %d job records (%d columns) from %s", len(table), len(columns), path)
    return table


__all__ = ["load_job_table"]
