"""
End-to-end normalisation: raw text in, :class:`ValidationResult` out.

Pipeline
--------
1. :func:`~samplesheet_normalizer.parser.parse_document` splits the raw
   text into header and data sections.
2. :class:`~samplesheet_normalizer.reconcile.ColumnReconciler` maps the
   input columns onto the variant's required schema.
3. Identifier columns are sanitised. Depending on the variant's
   :class:`~samplesheet_normalizer.enums.SanitizePolicy` changes are either
   applied (and duplicate identifiers renamed) or reported as a
   :class:`~samplesheet_normalizer.exceptions.SanitizationConflict`.
4. :func:`~samplesheet_normalizer.duplicates.detect_duplicate_indexes`
   collects composite index collisions.
5. The header section for export is either the input's own (with known
   keys rewritten) or rendered from the variant's template.

Examples
--------
>>> from samplesheet_normalizer import (
...     RunConfig, ParseRequest, SchemaVariant, normalize, export,
... )
>>> request = ParseRequest(raw_text, SchemaVariant.NEXTSEQ_2000, RunConfig(run_name="Run1"))
>>> result = normalize(request)
>>> if result.is_valid:
...     text = export(result, reverse_complement=True)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from samplesheet_normalizer.config import RunConfig, SchemaDefinition, get_schema
from samplesheet_normalizer.duplicates import detect_duplicate_indexes
from samplesheet_normalizer.enums import ParseMode, SanitizePolicy, SchemaVariant
from samplesheet_normalizer.exceptions import DuplicateIndexConflict, SanitizationConflict
from samplesheet_normalizer.models import SampleTable, SanitizationChange, ValidationResult
from samplesheet_normalizer.parser import parse_document
from samplesheet_normalizer.reconcile import ColumnReconciler
from samplesheet_normalizer.sanitize import rename_duplicates, sanitize
from samplesheet_normalizer.sequence import reverse_complement_column
from samplesheet_normalizer.serializer import column_named, serialize_table
from samplesheet_normalizer.templates import render_header_section, rewrite_header_section


@dataclass(frozen=True)
class ParseRequest:
    """Everything needed to normalise one sample sheet.

    Attributes
    ----------
    raw_document:
        Decoded sample sheet text.
    variant:
        Target instrument family.
    config:
        Run metadata for the exported header section.
    """
    raw_document: str
    variant:      SchemaVariant
    config:       RunConfig = field(default_factory=RunConfig)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize(request: ParseRequest) -> ValidationResult:
    """Parse, reconcile, sanitise and validate a sample sheet.

    Parameters
    ----------
    request:
        Raw text, instrument family and run configuration.

    Returns
    -------
    ValidationResult
        A new result; ``is_valid`` is ``False`` when duplicate indexes
        were found.

    Raises
    ------
    ParseError
        If the document structure is invalid.
    ReconcileError
        If required columns are missing.
    SanitizationConflict
        ``REJECT`` policy only: one or more identifiers contain special
        characters.
    DuplicateIndexConflict
        ``REJECT`` policy only: one or more index combinations collide.
    """
    schema = get_schema(request.variant)
    logger.info(f"Normalising sample sheet for {schema.variant.value}")

    doc = parse_document(request.raw_document, schema)

    # Bare CSV input always uses the canonical column labels
    reconciler = ColumnReconciler(
        schema.required_columns,
        strategy=schema.reconcile_strategy,
        preserve_casing=schema.preserve_header_casing and doc.mode == ParseMode.FULL,
    )
    table = reconciler.reconcile(doc.data_lines)
    logger.info(f"Reconciled {len(table)} sample(s) into {len(table.headers)} column(s)")

    table, changes = _sanitize_table(table, schema)

    duplicates = detect_duplicate_indexes(
        table,
        id_column=_header_for(schema, table, schema.identifier_column),
        index_column=_header_for(schema, table, "index"),
        index2_column=_header_for(schema, table, "index2"),
        key_format=schema.duplicate_key_format,
    )
    if duplicates:
        if schema.sanitize_policy == SanitizePolicy.REJECT:
            raise DuplicateIndexConflict(duplicates)
        logger.warning(f"{len(duplicates)} duplicated index combination(s) found")

    if schema.preserve_input_header and doc.mode == ParseMode.FULL:
        header_section = rewrite_header_section(doc.header_section, request.config)
    else:
        header_section = render_header_section(schema.variant, request.config)

    return ValidationResult(
        variant=schema.variant,
        table=table,
        header_section=tuple(header_section),
        changes=tuple(changes),
        duplicated_indexes=duplicates,
    )


def normalize_text(
    raw: str,
    variant: SchemaVariant | str,
    config: RunConfig | None = None,
) -> ValidationResult:
    """Shortcut for ``normalize(ParseRequest(raw, variant, config))``."""
    return normalize(
        ParseRequest(raw, SchemaVariant(variant), config or RunConfig())
    )


def export(
    result: ValidationResult,
    *,
    reverse_complement: bool = False,
    remove_column: str | Callable[[str], bool] | None = None,
) -> str:
    """Serialise a normalised sheet for download.

    Parameters
    ----------
    result:
        Output of :func:`normalize`.
    reverse_complement:
        Reverse-complement the variant's designated index column.
    remove_column:
        Column name (case-insensitive) or header predicate to drop.

    Returns
    -------
    str
        Header section, column header line and one line per sample.
    """
    schema = get_schema(result.variant)
    table = result.table

    if reverse_complement:
        column = _header_for(schema, table, schema.reverse_complement_column)
        table = reverse_complement_column(table, column)

    predicate = column_named(remove_column) if isinstance(remove_column, str) else remove_column
    return serialize_table(table, result.header_section, remove_column=predicate)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _header_for(schema: SchemaDefinition, table: SampleTable, canonical: str) -> str:
    """Return the table header occupying *canonical*'s schema position.

    Reconciled tables keep required-column order, so this resolves columns
    whose header text was preserved from the input (e.g. ``Sample ID``).
    """
    target = canonical.lower()
    for i, name in enumerate(schema.required_columns):
        if name.lower() == target:
            return table.headers[i]
    raise KeyError(f"Column '{canonical}' is not part of the {schema.variant.value} schema")


def _sanitize_table(
    table: SampleTable,
    schema: SchemaDefinition,
) -> tuple[SampleTable, list[SanitizationChange]]:
    """Sanitise identifier columns according to the schema's policy."""
    id_header = _header_for(schema, table, schema.identifier_column)
    changes: list[SanitizationChange] = []

    if schema.sanitize_policy == SanitizePolicy.REJECT:
        conflicts = [
            value for value in table.column(id_header)
            if sanitize(value, schema.sanitize_strategy) != value
        ]
        if conflicts:
            raise SanitizationConflict(conflicts)

    for canonical in schema.sanitized_columns:
        header = _header_for(schema, table, canonical)
        original = table.column(header)
        cleaned = [sanitize(v, schema.sanitize_strategy) for v in original]
        if header == id_header and schema.sanitize_policy == SanitizePolicy.REWRITE:
            renamed = iter(rename_duplicates([v for v in cleaned if v]))
            cleaned = [next(renamed) if v else v for v in cleaned]

        for row_no, (before, after) in enumerate(zip(original, cleaned), start=1):
            if before != after:
                changes.append(SanitizationChange(row_no, header, before, after))
        table = table.with_column(header, cleaned)

    if changes:
        logger.info(f"Sanitised {len(changes)} identifier value(s)")
    return table, changes
