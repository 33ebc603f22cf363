"""
Column reconciliation: map an arbitrary input column order onto a
required canonical schema.

Two matching strategies are supported:

* ``STRICT``: case-insensitive exact match (``SAMPLE_ID`` == ``Sample_ID``).
* ``PUNCTUATION_INSENSITIVE``: case-insensitive match after removing
  underscores and whitespace (``Sample ID`` == ``Sample_ID``).

Examples
--------
>>> reconciler = ColumnReconciler(["Sample_ID", "Index"])
>>> table = reconciler.reconcile(["index,Extra,sample_id", "AAAA,x,S1"])
>>> table.headers
('sample_id', 'index')
>>> table.rows
(('S1', 'AAAA'),)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from loguru import logger

from samplesheet_normalizer.enums import ReconcileErrorKind, ReconcileStrategy
from samplesheet_normalizer.exceptions import ReconcileError
from samplesheet_normalizer.models import SampleTable

_RX_PUNCT_WS = re.compile(r"[_\s]+")


def _strict_key(name: str) -> str:
    return name.strip().lower()


def _loose_key(name: str) -> str:
    return _RX_PUNCT_WS.sub("", name).lower()


_KEY_FUNCS: dict[ReconcileStrategy, Callable[[str], str]] = {
    ReconcileStrategy.STRICT:                  _strict_key,
    ReconcileStrategy.PUNCTUATION_INSENSITIVE: _loose_key,
}


def split_cells(line: str) -> list[str]:
    """Split a data line on commas and trim every cell."""
    return [cell.strip() for cell in line.split(",")]


class ColumnReconciler:
    """
    Re-projects tabular rows onto a fixed, ordered set of required columns.

    Parameters
    ----------
    required_columns:
        Canonical column names, in output order.
    strategy:
        Column-name matching rule.
    preserve_casing:
        If ``True`` (default), output headers use the input file's text for
        each matched column; otherwise the canonical names are used.
    pad_short_rows:
        If ``True`` (default), rows with fewer cells than the highest
        referenced input column are padded with empty strings. If
        ``False``, such rows raise :class:`ReconcileError`
        (``InsufficientCells``).
    """

    def __init__(
        self,
        required_columns: Sequence[str],
        *,
        strategy: ReconcileStrategy = ReconcileStrategy.STRICT,
        preserve_casing: bool = True,
        pad_short_rows: bool = True,
    ) -> None:
        self.required_columns: tuple[str, ...] = tuple(required_columns)
        self.strategy = strategy
        self.preserve_casing = preserve_casing
        self.pad_short_rows = pad_short_rows
        self._key = _KEY_FUNCS[strategy]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def map_columns(self, input_headers: Sequence[str]) -> list[int]:
        """Return, for each required column, its index in *input_headers*.

        Raises
        ------
        ReconcileError
            ``MissingColumns`` listing every required column not found,
            in required-column order.
        """
        lookup: dict[str, int] = {}
        for i, header in enumerate(input_headers):
            key = self._key(header)
            if key and key not in lookup:
                lookup[key] = i

        sources: list[int] = []
        missing: list[str] = []
        for required in self.required_columns:
            idx = lookup.get(self._key(required))
            if idx is None:
                missing.append(required)
            else:
                sources.append(idx)

        if missing:
            raise ReconcileError(ReconcileErrorKind.MISSING_COLUMNS, missing=missing)
        return sources

    def reconcile(self, data_lines: Sequence[str]) -> SampleTable:
        """Build a :class:`SampleTable` from the data section lines.

        Parameters
        ----------
        data_lines:
            Column header row followed by data rows.

        Returns
        -------
        SampleTable
            Table with exactly ``len(required_columns)`` columns.

        Raises
        ------
        ReconcileError
            If required columns are missing, or if rows are short and
            ``pad_short_rows`` is ``False``.
        """
        if not data_lines:
            raise ReconcileError(
                ReconcileErrorKind.MISSING_COLUMNS,
                missing=list(self.required_columns),
            )

        input_headers = split_cells(data_lines[0])
        sources = self.map_columns(input_headers)

        if self.preserve_casing:
            headers = [input_headers[src] for src in sources]
        else:
            headers = list(self.required_columns)

        highest = max(sources) if sources else -1
        rows: list[list[str]] = []
        short_rows: list[int] = []

        for row_no, line in enumerate(data_lines[1:], start=1):
            cells = split_cells(line)
            if len(cells) <= highest:
                short_rows.append(row_no)
            rows.append([cells[src] if src < len(cells) else "" for src in sources])

        if short_rows:
            if not self.pad_short_rows:
                raise ReconcileError(
                    ReconcileErrorKind.INSUFFICIENT_CELLS, rows=short_rows
                )
            logger.debug(f"Padded {len(short_rows)} short row(s) with empty cells")

        dropped = len(input_headers) - len(set(sources))
        if dropped:
            logger.debug(f"Dropped {dropped} unmapped input column(s)")

        return SampleTable(headers=headers, rows=rows)


def reconcile_columns(
    data_lines: Sequence[str],
    required_columns: Sequence[str],
    *,
    strategy: ReconcileStrategy = ReconcileStrategy.STRICT,
    preserve_casing: bool = True,
    pad_short_rows: bool = True,
) -> SampleTable:
    """Functional shortcut for :meth:`ColumnReconciler.reconcile`."""
    return ColumnReconciler(
        required_columns,
        strategy=strategy,
        preserve_casing=preserve_casing,
        pad_short_rows=pad_short_rows,
    ).reconcile(data_lines)
