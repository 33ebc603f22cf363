"""
DNA sequence helpers: reverse complement and validity checks.
"""

from __future__ import annotations

import re

from loguru import logger

from samplesheet_normalizer.models import SampleTable

#: Watson-Crick pairs. Characters outside this table pass through.
DNA_COMPLEMENT = {
    "A": "T",
    "T": "A",
    "C": "G",
    "G": "C",
}

_RX_DNA = re.compile(r"[ACGT]+")


def reverse_complement(sequence: str) -> str:
    """Reverse *sequence* and substitute each base for its pair.

    Non-ACGT characters (including lowercase bases and ``N``) are kept
    unchanged, only moved by the reversal.

    >>> reverse_complement("AACG")
    'CGTT'
    """
    return "".join(DNA_COMPLEMENT.get(base, base) for base in reversed(sequence))


def is_valid_dna_sequence(sequence: str) -> bool:
    """Return ``True`` if *sequence* is non-empty and only contains A, C, G, T."""
    return bool(_RX_DNA.fullmatch(sequence))


def reverse_complement_column(table: SampleTable, column: str) -> SampleTable:
    """Return a copy of *table* with *column* reverse-complemented.

    Cells that are not plain DNA are still transformed; a warning is
    logged for each so the caller can surface it.

    Raises
    ------
    KeyError
        If *column* is not in the table.
    """
    idx = table.column_index(column)
    values: list[str] = []
    for row_no, row in enumerate(table.rows, start=1):
        value = row[idx]
        if value and not is_valid_dna_sequence(value):
            logger.warning(
                f"Row {row_no}: {table.headers[idx]} value {value!r} is not a "
                f"valid DNA sequence"
            )
        values.append(reverse_complement(value))
    logger.debug(f"Reverse-complemented column {table.headers[idx]!r}")
    return table.with_column(column, values)
