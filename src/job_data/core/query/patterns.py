from __future__ import annotations

from typing import Optional


def fold_case(text: Optional[str]) -> str:
    """Lowercase folding used by every substring comparison.

    Plain str.lower(); no Unicode normalization or locale rules.
    """
    if text is None:
        return ""
    return str(text).lower()


def contains_ci(value: Optional[str], needle: str) -> bool:
    """True when `needle` occurs in `value`, ignoring case.

    An empty needle matches every value, including the empty string.
    """
    return fold_case(needle) in fold_case(value)
