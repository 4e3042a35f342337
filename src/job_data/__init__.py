"""Job Data Tools: in-memory query engine over job listing CSV files.

The package loads a job listings CSV once and answers ad-hoc queries
(distinct column values, single-column filters, prioritized multi-column
search). The `job-data` CLI is a thin presentation layer over
`job_data.core.query`.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
