"""
Duplicate composite-index detection.

Two samples collide when their index pair produces the same composite
key. The key layout is chosen per call site:

* ``INDEX2_INDEX``: ``"<index2>-<index>"`` (default).
* ``INDEX_INDEX2``: ``"<index>-<index2>"``, used by the BCLConvert
  sheet validator.
* ``INDEX_PLUS_INDEX2``: ``"<index>+<index2>"``, used by the legacy
  Nextera validator.

Only keys shared by two or more samples are reported.
"""

from __future__ import annotations

from loguru import logger

from samplesheet_normalizer.enums import IndexKeyFormat
from samplesheet_normalizer.models import SampleTable


def index_key(index: str, index2: str, key_format: IndexKeyFormat) -> str:
    """Build the composite index key for one sample."""
    if key_format == IndexKeyFormat.INDEX_PLUS_INDEX2:
        return f"{index}+{index2}"
    if key_format == IndexKeyFormat.INDEX_INDEX2:
        return f"{index}-{index2}"
    return f"{index2}-{index}"


def detect_duplicate_indexes(
    table: SampleTable,
    *,
    id_column: str = "Sample_ID",
    index_column: str = "index",
    index2_column: str = "index2",
    key_format: IndexKeyFormat = IndexKeyFormat.INDEX2_INDEX,
) -> dict[str, list[str]]:
    """Return composite index keys shared by more than one sample.

    Column lookups are case-insensitive, so ``Index`` and ``index`` both
    match. Rows with an empty identifier or an empty primary index are
    skipped. A table without an ``index2`` column uses an empty second
    index for every row.

    Parameters
    ----------
    table:
        Canonical sample table.
    id_column:
        Column holding the sample identifier.
    index_column / index2_column:
        Columns holding the i7 and i5 sequences.
    key_format:
        Composite key layout.

    Returns
    -------
    dict[str, list[str]]
        Key → sample ids in row order, only for keys seen at least twice.
    """
    id_idx  = table.column_index(id_column)
    idx1    = table.column_index(index_column)
    idx2    = table.column_index(index2_column) if table.has_column(index2_column) else None

    combinations: dict[str, list[str]] = {}
    duplicated: dict[str, list[str]] = {}

    for row in table.rows:
        sample_id = row[id_idx]
        index     = row[idx1]
        index2    = row[idx2] if idx2 is not None else ""
        if not sample_id or not index:
            continue

        key = index_key(index, index2, key_format)
        if key in combinations:
            combinations[key].append(sample_id)
            duplicated[key] = combinations[key]
        else:
            combinations[key] = [sample_id]

    if duplicated:
        logger.debug(f"Found {len(duplicated)} duplicated index combination(s)")
    return {key: list(samples) for key, samples in duplicated.items()}
