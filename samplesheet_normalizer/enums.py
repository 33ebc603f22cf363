"""
Enumerations for samplesheet-normalizer.
"""

from enum import Enum


class SchemaVariant(str, Enum):
    """Instrument family a sample sheet is normalised for.

    NEXTSEQ_500 : Illumina IEM V1 layout, ``[Data]`` section.
                  Sanitisation and duplicate indexes abort the batch.
    NEXTSEQ_2000: Illumina BCLConvert V2 layout, ``[BCLConvert_Data]``
                  section. Header is always rebuilt from run configuration.
    NANOPORE    : Oxford Nanopore facility layout, ``[Data]`` section.
                  Bare CSV input is accepted and uses canonical labels.
    """
    NEXTSEQ_500  = "nextseq500"
    NEXTSEQ_2000 = "nextseq2000"
    NANOPORE     = "nanopore"


class ParseMode(str, Enum):
    """Structural convention detected in the raw document.

    FULL: ``[Header]`` or data marker line present; header and data
          sections are split at the data marker line.
    BARE: neither marker present; the first non-empty line is the column
          header row.
    """
    FULL = "full"
    BARE = "bare"


class ReconcileStrategy(str, Enum):
    """How input column names are matched against the required schema."""
    STRICT                  = "strict"
    PUNCTUATION_INSENSITIVE = "punctuation_insensitive"


class SanitizeStrategy(str, Enum):
    """Identifier sanitiser flavour.

    SINGLE_COLLAPSE: ``[^A-Za-z0-9\\-_]+`` → replacement, then collapse
                     repeated replacement characters.
    DUAL_COLLAPSE  : ``[\\W_]+`` → ``-``, then collapse ``-`` runs and
                     ``_`` runs in two independent passes.
    """
    SINGLE_COLLAPSE = "single_collapse"
    DUAL_COLLAPSE   = "dual_collapse"


class SanitizePolicy(str, Enum):
    """What happens when sanitising an identifier would change it."""
    REWRITE = "rewrite"
    REJECT  = "reject"


class IndexKeyFormat(str, Enum):
    """Composite index key layout used for barcode collision detection."""
    INDEX2_INDEX      = "index2-index"
    INDEX_INDEX2      = "index-index2"
    INDEX_PLUS_INDEX2 = "index+index2"


class ParseErrorKind(str, Enum):
    NO_DATA_SECTION    = "NoDataSection"
    EMPTY_DATA_SECTION = "EmptyDataSection"
    EMPTY_INPUT        = "EmptyInput"


class ReconcileErrorKind(str, Enum):
    MISSING_COLUMNS    = "MissingColumns"
    INSUFFICIENT_CELLS = "InsufficientCells"
