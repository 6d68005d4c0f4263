"""
zipper.py -- Aligns positionally-correlated lists of unequal length into rows.

GLVD models one logical table as several parallel arrays that are not
guaranteed to be the same length. zip_ragged() is the only place that does
the index arithmetic; everything else works on the resulting rows.

Usage:
    rows = zip_ragged((lts_versions, TEXT_ABSENT), (is_fixed, FLAG_ABSENT))
"""

from collections.abc import Sequence
from typing import Any

# Stand-ins for positions a shorter list does not cover.
TEXT_ABSENT = ""
FLAG_ABSENT = False


def zip_ragged(*columns: tuple[Sequence[Any], Any]) -> list[tuple[Any, ...]]:
    """Zip (values, absent_marker) columns to the length of the longest one.

    Row i holds values[i] for every column long enough, and that column's
    absent marker otherwise. No columns, or only empty ones, yield no rows.
    """
    n_rows = max((len(values) for values, _ in columns), default=0)
    return [
        tuple(values[i] if i < len(values) else absent for values, absent in columns)
        for i in range(n_rows)
    ]
