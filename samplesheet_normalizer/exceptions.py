"""
Exception hierarchy for samplesheet-normalizer.

Every error is recoverable by the caller and reports all problems of its
category at once, so a single message can be shown for the whole batch.
All errors derive from :class:`ValueError` so callers that already catch
``ValueError`` around parsing keep working.
"""

from __future__ import annotations

from samplesheet_normalizer.enums import ParseErrorKind, ReconcileErrorKind


class SampleSheetError(ValueError):
    """Base class for all sample sheet normalisation errors."""


class UnsupportedFormatError(SampleSheetError):
    """The sample sheet file type cannot be read.

    Attributes
    ----------
    suffix:
        The rejected file extension.
    """

    def __init__(self, suffix: str, supported: list[str]) -> None:
        self.suffix = suffix
        super().__init__(
            f"Unsupported sample sheet type '{suffix}'. "
            f"Expected one of: {', '.join(supported)}"
        )


class ParseError(SampleSheetError):
    """The raw document could not be split into header and data sections.

    Attributes
    ----------
    kind:
        Which structural failure occurred.
    marker:
        The data marker that was searched for, if relevant.
    """

    _MESSAGES = {
        ParseErrorKind.EMPTY_INPUT:        "Sample sheet is empty.",
        ParseErrorKind.NO_DATA_SECTION:    "No {marker} section found in sample sheet.",
        ParseErrorKind.EMPTY_DATA_SECTION: "{marker} section contains no rows.",
    }

    def __init__(self, kind: ParseErrorKind, marker: str | None = None) -> None:
        self.kind = kind
        self.marker = marker
        super().__init__(self._MESSAGES[kind].format(marker=marker or "data"))


class ReconcileError(SampleSheetError):
    """Input columns could not be mapped onto the required schema.

    Attributes
    ----------
    kind:
        ``MISSING_COLUMNS`` or ``INSUFFICIENT_CELLS``.
    missing:
        Required column names absent from the input, in schema order.
    rows:
        1-based data row numbers (header row excluded) that have fewer
        cells than the highest referenced column.
    """

    def __init__(
        self,
        kind: ReconcileErrorKind,
        *,
        missing: list[str] | None = None,
        rows: list[int] | None = None,
    ) -> None:
        self.kind = kind
        self.missing = list(missing or [])
        self.rows = list(rows or [])

        if kind == ReconcileErrorKind.MISSING_COLUMNS:
            message = f"Missing required column(s): {', '.join(self.missing)}"
        else:
            message = (
                "Row(s) have fewer cells than the header requires: "
                f"{', '.join(str(r) for r in self.rows)}"
            )
        super().__init__(message)


class SanitizationConflict(SampleSheetError):
    """Sanitising one or more identifiers would change their value.

    Attributes
    ----------
    identifiers:
        Every affected original identifier, in row order.
    """

    def __init__(self, identifiers: list[str]) -> None:
        self.identifiers = list(identifiers)
        super().__init__(
            "Sample_ID(s) contain special characters: "
            + ", ".join(self.identifiers)
        )


class DuplicateIndexConflict(SampleSheetError):
    """Two or more samples share the same composite index.

    Attributes
    ----------
    duplicates:
        Mapping of composite index key to the colliding sample ids.
    """

    def __init__(self, duplicates: dict[str, list[str]]) -> None:
        self.duplicates = {k: list(v) for k, v in duplicates.items()}
        detail = "; ".join(
            f"{key}: {', '.join(samples)}" for key, samples in self.duplicates.items()
        )
        super().__init__(f"Duplicate index combination(s) found: {detail}")


class UnknownAdapterKitError(KeyError):
    """Requested adapter kit has no index lookup table."""

    def __init__(self, kit: str) -> None:
        self.kit = kit
        super().__init__(f"Unknown adapter kit: {kit}")
