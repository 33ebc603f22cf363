"""
Run configuration and per-instrument schema definitions.

:class:`RunConfig` carries the run metadata interpolated into the header
section of an exported sheet. Values are treated as opaque strings and
are not validated here.

:data:`SCHEMAS` holds one :class:`SchemaDefinition` per
:class:`~samplesheet_normalizer.enums.SchemaVariant`. The mapping is
read-only; schemas are defined once at import time.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date
from types import MappingProxyType
from typing import Any

from loguru import logger

from samplesheet_normalizer.enums import (
    IndexKeyFormat,
    ReconcileStrategy,
    SanitizePolicy,
    SanitizeStrategy,
    SchemaVariant,
)

# ---------------------------------------------------------------------------
# Column and marker constants
# ---------------------------------------------------------------------------

#: Section marker that switches the parser into full-structure mode.
HEADER_MARKER = "[Header]"

#: Data section markers per layout.
DATA_MARKER         = "[Data]"
BCLCONVERT_MARKER   = "[BCLConvert_Data]"

#: Required columns, IEM V1 layout (NextSeq 500/550).
NEXTSEQ_500_COLUMNS = (
    "Sample_ID",
    "Description",
    "I7_Index_ID",
    "index",
    "I5_Index_ID",
    "index2",
    "Sample_Project",
)

#: Required columns, BCLConvert V2 layout (NextSeq 1000/2000).
NEXTSEQ_2000_COLUMNS = (
    "Sample_ID",
    "Index",
    "Index2",
    "Sample_Project",
)

#: Required columns, Oxford Nanopore facility layout.
NANOPORE_COLUMNS = (
    "Sample_ID",
    "Index2",
    "Index",
    "Sample_Project",
)


# ---------------------------------------------------------------------------
# Schema definitions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SchemaDefinition:
    """Everything that differs between instrument families.

    Attributes
    ----------
    variant:
        The instrument family this schema describes.
    required_columns:
        Canonical output columns, in output order.
    data_marker:
        Section line that precedes the tabular data.
    reconcile_strategy:
        Column-name matching rule.
    sanitize_strategy:
        Identifier sanitiser flavour.
    sanitize_policy:
        Rewrite identifiers in place, or reject the batch.
    identifier_column:
        Column holding the sample identifier.
    sanitized_columns:
        Columns passed through the sanitiser (identifier first).
    preserve_header_casing:
        Emit the input file's header text for matched columns instead of
        the canonical names.
    preserve_input_header:
        Keep the input's header section (with known keys rewritten) instead
        of rebuilding it from configuration.
    preserve_blank_header_lines:
        Keep blank lines inside a preserved header section.
    reverse_complement_column:
        Index column transformed on export when reverse complement is
        requested.
    duplicate_key_format:
        Composite index key layout used for collision detection.
    """
    variant:                     SchemaVariant
    required_columns:            tuple[str, ...]
    data_marker:                 str
    reconcile_strategy:          ReconcileStrategy
    sanitize_strategy:           SanitizeStrategy
    sanitize_policy:             SanitizePolicy
    identifier_column:           str = "Sample_ID"
    sanitized_columns:           tuple[str, ...] = ("Sample_ID",)
    preserve_header_casing:      bool = True
    preserve_input_header:       bool = True
    preserve_blank_header_lines: bool = True
    reverse_complement_column:   str = "index2"
    duplicate_key_format:        IndexKeyFormat = IndexKeyFormat.INDEX2_INDEX


SCHEMAS: MappingProxyType[SchemaVariant, SchemaDefinition] = MappingProxyType({
    SchemaVariant.NEXTSEQ_500: SchemaDefinition(
        variant=SchemaVariant.NEXTSEQ_500,
        required_columns=NEXTSEQ_500_COLUMNS,
        data_marker=DATA_MARKER,
        reconcile_strategy=ReconcileStrategy.STRICT,
        sanitize_strategy=SanitizeStrategy.SINGLE_COLLAPSE,
        sanitize_policy=SanitizePolicy.REJECT,
        preserve_header_casing=False,
        reverse_complement_column="index2",
    ),
    SchemaVariant.NEXTSEQ_2000: SchemaDefinition(
        variant=SchemaVariant.NEXTSEQ_2000,
        required_columns=NEXTSEQ_2000_COLUMNS,
        data_marker=BCLCONVERT_MARKER,
        reconcile_strategy=ReconcileStrategy.PUNCTUATION_INSENSITIVE,
        sanitize_strategy=SanitizeStrategy.DUAL_COLLAPSE,
        sanitize_policy=SanitizePolicy.REWRITE,
        sanitized_columns=("Sample_ID", "Sample_Project"),
        preserve_header_casing=True,
        preserve_input_header=False,
        preserve_blank_header_lines=False,
        reverse_complement_column="Index2",
    ),
    SchemaVariant.NANOPORE: SchemaDefinition(
        variant=SchemaVariant.NANOPORE,
        required_columns=NANOPORE_COLUMNS,
        data_marker=DATA_MARKER,
        reconcile_strategy=ReconcileStrategy.STRICT,
        sanitize_strategy=SanitizeStrategy.SINGLE_COLLAPSE,
        sanitize_policy=SanitizePolicy.REWRITE,
        preserve_header_casing=False,
        reverse_complement_column="Index2",
    ),
})


def get_schema(variant: SchemaVariant | str) -> SchemaDefinition:
    """Return the schema for *variant* (enum member or its string value).

    Raises
    ------
    ValueError
        If *variant* names no known instrument family.
    """
    try:
        return SCHEMAS[SchemaVariant(variant)]
    except ValueError:
        valid = ", ".join(v.value for v in SchemaVariant)
        raise ValueError(
            f"Unknown schema variant {variant!r}. Expected one of: {valid}"
        ) from None


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------

@dataclass
class RunConfig:
    """Run metadata interpolated into exported header sections.

    All values are strings so they render verbatim; an empty string
    renders as an empty value (``Key,``).
    """
    run_name:                  str = ""
    investigator:              str = ""
    date:                      str = ""
    description:               str = ""
    assay:                     str = ""
    index_adapters:            str = ""
    read1_cycles:              str = ""
    read2_cycles:              str = ""
    index1_cycles:             str = ""
    index2_cycles:             str = ""
    adapter_read1:             str = ""
    adapter_read2:             str = ""
    library_prep_kit:          str = ""
    software_version:          str = ""
    barcode_mismatches_index1: str = "1"
    barcode_mismatches_index2: str = "1"
    flow_cell_id:              str = ""
    kit:                       str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunConfig:
        """Build a config from a plain mapping.

        Unknown keys are ignored with a warning; ``None`` values are
        skipped and non-string values are converted with ``str()``.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, str] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown run configuration key: {key!r}")
                continue
            if value is None:
                continue
            kwargs[key] = str(value)
        return cls(**kwargs)

    def to_template_values(self) -> dict[str, str]:
        """Return values for header templates, defaulting ``date`` to today."""
        values = asdict(self)
        if not values["date"]:
            values["date"] = date.today().strftime("%Y-%m-%d")
        return values
