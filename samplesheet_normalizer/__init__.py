"""
samplesheet-normalizer
======================

Normalise, validate and re-emit sequencing sample sheets.

Supports:
  - Illumina NextSeq 500/550 (IEM V1 ``[Data]`` layout)
  - Illumina NextSeq 1000/2000 (BCLConvert V2 ``[BCLConvert_Data]`` layout)
  - Oxford Nanopore facility sheets (``[Data]`` layout or bare CSV)

Quickstart
----------
>>> from samplesheet_normalizer import SchemaVariant, normalize_text, export
>>> result = normalize_text(open("SampleSheet.csv").read(), SchemaVariant.NEXTSEQ_2000)
>>> if result.is_valid:
...     print(export(result, reverse_complement=True))
>>> else:
...     print(result.duplicated_indexes)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("samplesheet-normalizer")
except PackageNotFoundError:
    __version__ = "0.1.0-dev"

__license__ = "Apache 2.0"

from samplesheet_normalizer.config import SCHEMAS, RunConfig, SchemaDefinition, get_schema
from samplesheet_normalizer.duplicates import detect_duplicate_indexes
from samplesheet_normalizer.enums import (
    IndexKeyFormat,
    ParseMode,
    ReconcileStrategy,
    SanitizePolicy,
    SanitizeStrategy,
    SchemaVariant,
)
from samplesheet_normalizer.exceptions import (
    DuplicateIndexConflict,
    ParseError,
    ReconcileError,
    SampleSheetError,
    SanitizationConflict,
    UnknownAdapterKitError,
    UnsupportedFormatError,
)
from samplesheet_normalizer.legacy import validate_bclconvert_sheet, validate_legacy_sheet
from samplesheet_normalizer.models import SampleTable, SanitizationChange, ValidationResult
from samplesheet_normalizer.parser import SheetParser
from samplesheet_normalizer.pipeline import ParseRequest, export, normalize, normalize_text
from samplesheet_normalizer.reconcile import ColumnReconciler, reconcile_columns
from samplesheet_normalizer.sanitize import (
    rename_duplicates,
    replace_special_characters,
    sanitize_identifier,
)
from samplesheet_normalizer.sequence import is_valid_dna_sequence, reverse_complement
from samplesheet_normalizer.serializer import serialize

__all__ = [
    "ColumnReconciler",
    "DuplicateIndexConflict",
    "IndexKeyFormat",
    "ParseError",
    "ParseMode",
    "ParseRequest",
    "ReconcileError",
    "ReconcileStrategy",
    "RunConfig",
    "SCHEMAS",
    "SampleSheetError",
    "SampleTable",
    "SanitizationChange",
    "SanitizationConflict",
    "SanitizePolicy",
    "SanitizeStrategy",
    "SchemaDefinition",
    "SchemaVariant",
    "SheetParser",
    "UnknownAdapterKitError",
    "UnsupportedFormatError",
    "ValidationResult",
    "detect_duplicate_indexes",
    "export",
    "get_schema",
    "is_valid_dna_sequence",
    "normalize",
    "normalize_text",
    "reconcile_columns",
    "rename_duplicates",
    "replace_special_characters",
    "reverse_complement",
    "sanitize_identifier",
    "serialize",
    "validate_bclconvert_sheet",
    "validate_legacy_sheet",
    "__version__",
]
