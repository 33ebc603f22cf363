"""
Legacy Nextera XT sample sheet validator.

Older MiSeq-era workflows upload a sheet whose column header row must
match :data:`LEGACY_COLUMNS` exactly (same order and casing). Each row is
cleaned and its index sequences are filled in from the adapter kit:

* ``Sample_ID``, ``Description`` and ``Sample_Project`` are sanitised;
  an empty ``Description`` defaults to the clean ``Sample_ID``.
* An ``A-`` prefix is stripped from ``I7_Index_ID`` / ``I5_Index_ID``.
* ``index`` / ``index2`` are looked up by index ID in the kit table,
  falling back to the value in the row. ``index2`` is always
  reverse-complemented.
* Rows whose ``index+index2`` pair was already seen are left out of the
  output and reported in ``duplicated_indexes``.

Lines before the column header row are passed through unchanged.

:func:`validate_bclconvert_sheet` runs the matching as-uploaded check on a
``[BCLConvert_Data]`` sheet, keyed ``index-index2``.

Examples
--------
>>> result = validate_legacy_sheet(text)
>>> result.samples[-1]
'S1,S1,N701,TAAGGCGA,S522,TCGCATAA,ProjA'
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from samplesheet_normalizer.config import BCLCONVERT_MARKER
from samplesheet_normalizer.duplicates import detect_duplicate_indexes, index_key
from samplesheet_normalizer.enums import IndexKeyFormat, ReconcileErrorKind
from samplesheet_normalizer.exceptions import ReconcileError, UnknownAdapterKitError
from samplesheet_normalizer.models import SampleTable
from samplesheet_normalizer.parser import SheetParser, split_lines
from samplesheet_normalizer.reconcile import split_cells
from samplesheet_normalizer.sanitize import sanitize_identifier
from samplesheet_normalizer.sequence import reverse_complement

#: Exact column header row expected by the legacy validator.
LEGACY_COLUMNS = (
    "Sample_ID",
    "Description",
    "I7_Index_ID",
    "index",
    "I5_Index_ID",
    "index2",
    "Sample_Project",
)

#: Index ID → sequence lookup per adapter kit.
ADAPTER_KITS: dict[str, dict[str, str]] = {
    "nextera_xt_v2": {
        "N701": "TAAGGCGA",
        "S522": "TTATGCGA",
    },
}

DEFAULT_ADAPTER_KIT = "nextera_xt_v2"


@dataclass
class LegacyValidationResult:
    """Output of :func:`validate_legacy_sheet`.

    Attributes
    ----------
    samples:
        Pass-through preamble lines, the column header row, then one
        comma-joined line per accepted sample.
    duplicated_indexes:
        ``index+index2`` key → comma-joined sample ids, only for keys
        shared by two or more samples.
    """
    samples:            list[str] = field(default_factory=list)
    duplicated_indexes: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.duplicated_indexes


def validate_legacy_sheet(
    content: str,
    adapter_kit: str = DEFAULT_ADAPTER_KIT,
) -> LegacyValidationResult:
    """Clean and validate a legacy Nextera XT sample sheet.

    Parameters
    ----------
    content:
        Raw sample sheet text.
    adapter_kit:
        Key into :data:`ADAPTER_KITS`.

    Returns
    -------
    LegacyValidationResult

    Raises
    ------
    UnknownAdapterKitError
        If *adapter_kit* has no lookup table.
    ReconcileError
        If the column header row does not match :data:`LEGACY_COLUMNS`.
    """
    adapters = ADAPTER_KITS.get(adapter_kit)
    if adapters is None:
        raise UnknownAdapterKitError(adapter_kit)

    samples: list[str] = []
    seen: dict[str, str] = {}
    found_header = False

    for line in split_lines(content):
        if not line.strip():
            continue

        row = split_cells(line)

        if not found_header:
            if "sample" in row[0].lower():
                _check_header(row)
                found_header = True
            samples.append(line)
            continue

        row += [""] * (len(LEGACY_COLUMNS) - len(row))
        sample_id, description, i7_id, index, i5_id, index2, project = row[:7]

        clean_id = sanitize_identifier(sample_id)
        clean_desc = sanitize_identifier(description) if description else clean_id
        clean_project = sanitize_identifier(project)

        key = index_key(index, index2, IndexKeyFormat.INDEX_PLUS_INDEX2)
        if key in seen:
            seen[key] = f"{seen[key]},{clean_id}"
            logger.warning(f"Duplicate index pair {key!r} for sample {clean_id!r}")
            continue
        seen[key] = clean_id

        clean_i7 = i7_id.replace("A-", "", 1)
        clean_i5 = i5_id.replace("A-", "", 1)

        samples.append(",".join([
            clean_id,
            clean_desc,
            clean_i7,
            adapters.get(clean_i7) or index,
            clean_i5,
            reverse_complement(adapters.get(clean_i5) or index2),
            clean_project,
        ]))

    duplicated = {k: v for k, v in seen.items() if "," in v}
    return LegacyValidationResult(samples=samples, duplicated_indexes=duplicated)


def _check_header(row: list[str]) -> None:
    mismatched = [
        col for i, col in enumerate(LEGACY_COLUMNS)
        if i >= len(row) or row[i] != col
    ]
    if mismatched:
        raise ReconcileError(ReconcileErrorKind.MISSING_COLUMNS, missing=mismatched)


@dataclass
class IndexCheckResult:
    """Output of :func:`validate_bclconvert_sheet`."""
    duplicated_indexes: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.duplicated_indexes


def validate_bclconvert_sheet(content: str) -> IndexCheckResult:
    """Check a BCLConvert sheet for colliding index pairs, as uploaded.

    Unlike :func:`~samplesheet_normalizer.pipeline.normalize`, no columns
    are reconciled or sanitised: ``Sample_ID``, ``index`` and ``index2``
    are looked up by exact (case-insensitive) name in the data header row
    and a missing column reads as empty. Pairs are keyed
    ``"<index>-<index2>"``.

    A sheet without any section line is read as bare CSV.

    Raises
    ------
    ParseError
        If a ``[Header]`` section is present but ``[BCLConvert_Data]``
        is missing or empty.
    """
    doc = SheetParser(BCLCONVERT_MARKER).parse(content)
    headers = split_cells(doc.data_lines[0])
    width = len(headers)

    rows = []
    for line in doc.data_lines[1:]:
        cells = split_cells(line)[:width]
        rows.append(cells + [""] * (width - len(cells)))
    table = SampleTable(headers=headers, rows=rows)

    if not (table.has_column("Sample_ID") and table.has_column("index")):
        logger.warning("Sample_ID or index column missing; no index pairs checked")
        return IndexCheckResult()

    duplicated = detect_duplicate_indexes(
        table,
        key_format=IndexKeyFormat.INDEX_INDEX2,
    )
    return IndexCheckResult(duplicated_indexes=duplicated)
