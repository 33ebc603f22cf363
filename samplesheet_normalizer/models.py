"""
Core data model: parsed documents, sample tables and validation results.

All model objects are immutable. Re-parsing a document always produces a
new :class:`ValidationResult`; nothing here is updated incrementally.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from samplesheet_normalizer.enums import ParseMode, SchemaVariant

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedDocument:
    """Raw document split into its header and data portions.

    Attributes
    ----------
    header_section:
        Lines preceding the tabular data, ending with the data marker line
        in ``FULL`` mode. Empty in ``BARE`` mode.
    data_lines:
        Non-empty lines of the data section; the first is the column
        header row.
    mode:
        Structural convention the document was parsed with.
    """
    header_section: tuple[str, ...]
    data_lines:     tuple[str, ...]
    mode:           ParseMode


# ---------------------------------------------------------------------------
# Sample table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SampleTable:
    """Canonical headers and rows.

    Every row has exactly ``len(headers)`` cells; missing values are empty
    strings.
    """
    headers: tuple[str, ...]
    rows:    tuple[tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "rows", tuple(tuple(r) for r in self.rows))
        width = len(self.headers)
        for i, row in enumerate(self.rows, start=1):
            if len(row) != width:
                raise ValueError(
                    f"Row {i} has {len(row)} cell(s); expected {width}."
                )

    def column_index(self, name: str) -> int:
        """Return the position of *name* (case-insensitive).

        Raises
        ------
        KeyError
            If no header matches.
        """
        target = name.lower()
        for i, header in enumerate(self.headers):
            if header.lower() == target:
                return i
        raise KeyError(f"Column '{name}' not found in {list(self.headers)}")

    def has_column(self, name: str) -> bool:
        target = name.lower()
        return any(h.lower() == target for h in self.headers)

    def column(self, name: str) -> list[str]:
        """Return every value of column *name*, in row order."""
        idx = self.column_index(name)
        return [row[idx] for row in self.rows]

    def with_column(self, name: str, values: Sequence[str]) -> SampleTable:
        """Return a copy with column *name* replaced by *values*."""
        if len(values) != len(self.rows):
            raise ValueError(
                f"Expected {len(self.rows)} value(s) for column '{name}', "
                f"got {len(values)}."
            )
        idx = self.column_index(name)
        rows = [
            row[:idx] + (value,) + row[idx + 1:]
            for row, value in zip(self.rows, values)
        ]
        return SampleTable(self.headers, rows)

    def to_records(self) -> list[dict[str, str]]:
        """Return rows as header → value dicts."""
        return [dict(zip(self.headers, row)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SanitizationChange:
    """One identifier cell rewritten during sanitisation.

    Attributes
    ----------
    row:
        1-based data row number.
    column:
        Header of the sanitised column.
    original:
        Value before sanitisation.
    sanitized:
        Value written to the table.
    """
    row:       int
    column:    str
    original:  str
    sanitized: str

    def __str__(self) -> str:
        return f"row {self.row} {self.column}: {self.original!r} -> {self.sanitized!r}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of normalising one sample sheet.

    Attributes
    ----------
    variant:
        Instrument family the sheet was normalised for.
    table:
        Canonical, sanitised sample table.
    header_section:
        Header lines to emit ahead of the table on export, ending with
        the data marker.
    changes:
        Every identifier rewritten during sanitisation or duplicate
        renaming.
    duplicated_indexes:
        Composite index key → colliding sample ids. Only keys shared by
        two or more samples appear. Stored as a read-only mapping of
        tuples.
    """
    variant:            SchemaVariant
    table:              SampleTable
    header_section:     tuple[str, ...] = ()
    changes:            tuple[SanitizationChange, ...] = ()
    duplicated_indexes: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "duplicated_indexes",
            MappingProxyType({k: tuple(v) for k, v in self.duplicated_indexes.items()}),
        )

    @property
    def is_valid(self) -> bool:
        return not self.duplicated_indexes

    @property
    def samples(self) -> tuple[tuple[str, ...], ...]:
        return self.table.rows

    def summary(self) -> str:
        return (
            f"{'PASS' if self.is_valid else 'FAIL'} | "
            f"{len(self.table)} sample(s), {len(self.changes)} change(s), "
            f"{len(self.duplicated_indexes)} duplicated index(es)"
        )

    def to_dict(self) -> dict:
        return {
            "variant":            self.variant.value,
            "is_valid":           self.is_valid,
            "headers":            list(self.table.headers),
            "samples":            [list(r) for r in self.table.rows],
            "changes":            [
                {"row": c.row, "column": c.column,
                 "original": c.original, "sanitized": c.sanitized}
                for c in self.changes
            ],
            "duplicated_indexes": {k: list(v) for k, v in self.duplicated_indexes.items()},
        }
