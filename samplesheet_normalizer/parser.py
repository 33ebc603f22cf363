"""
Sample sheet text parser.

Splits a raw sample sheet into a header section and a data section.
Two structural conventions are accepted:

Full structure
--------------
A ``[Header]`` line or the data marker line is present. Everything up to
and including the data marker (``[Data]`` or ``[BCLConvert_Data]``) is the
header section; every non-empty line after it belongs to the data
section::

    [Header]
    IEMFileVersion,4
    Experiment Name,MyRun

    [Data]
    Sample_ID,Description,I7_Index_ID,index,I5_Index_ID,index2,Sample_Project
    S1,,N701,TAAGGCGA,S522,TTATGCGA,ProjA

Bare CSV
--------
Neither a ``[Header]`` line nor the data marker. The first non-empty
line is the column header row and the header section is empty; callers
synthesise one from run configuration::

    Sample_ID,Index2,Index,Sample_Project
    S1,TTTT,AAAA,ProjA

The full-structure scan is an explicit state machine::

    SCANNING_HEADER --[marker]--> SCANNING_DATA --[EOF]--> DONE

EOF while ``SCANNING_HEADER`` fails with ``NoDataSection``; EOF while
``SCANNING_DATA`` with no rows collected fails with ``EmptyDataSection``.
"""

from __future__ import annotations

import re
from enum import Enum

from loguru import logger

from samplesheet_normalizer.config import HEADER_MARKER, SchemaDefinition
from samplesheet_normalizer.enums import ParseErrorKind, ParseMode
from samplesheet_normalizer.exceptions import ParseError
from samplesheet_normalizer.models import ParsedDocument

_RX_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class _State(Enum):
    SCANNING_HEADER = "scanning_header"
    SCANNING_DATA   = "scanning_data"
    DONE            = "done"


def split_lines(raw: str) -> list[str]:
    """Split *raw* on ``\\n``, ``\\r\\n`` or ``\\r``, dropping a leading BOM."""
    return _RX_LINE_BREAK.split(raw.lstrip("\ufeff"))


def clean_section_line(line: str) -> str:
    """Strip whitespace and trailing delimiter commas from a section line.

    Spreadsheet exports pad section lines to the table width, so
    ``[Data],,,,`` must compare equal to ``[Data]``.
    """
    return line.strip().rstrip(", \t").strip()


def _is_blank_row(line: str) -> bool:
    return not line.strip().strip(",").strip()


class SheetParser:
    """
    Splits raw sample sheet text into header and data sections.

    Parameters
    ----------
    data_marker:
        Section line that starts the tabular data, e.g. ``"[Data]"``.
    preserve_blank_header_lines:
        Keep blank lines in the header section (full-structure mode).

    Examples
    --------
    >>> doc = SheetParser("[Data]").parse("[Header]\\n[Data]\\nSample_ID\\nS1\\n")
    >>> doc.header_section
    ('[Header]', '[Data]')
    >>> doc.data_lines
    ('Sample_ID', 'S1')
    """

    def __init__(
        self,
        data_marker: str,
        *,
        preserve_blank_header_lines: bool = True,
    ) -> None:
        self.data_marker = data_marker
        self.preserve_blank_header_lines = preserve_blank_header_lines

    def parse(self, raw: str) -> ParsedDocument:
        """Parse *raw* into a :class:`ParsedDocument`.

        Raises
        ------
        ParseError
            ``EmptyInput`` for empty or whitespace-only text;
            ``NoDataSection`` if the data marker is missing in
            full-structure mode; ``EmptyDataSection`` if it has no rows.
        """
        if not raw or not raw.strip():
            raise ParseError(ParseErrorKind.EMPTY_INPUT)

        lines = split_lines(raw)
        mode = self.detect_mode(lines)
        logger.debug(f"Parsing sample sheet in {mode.value} mode")

        if mode == ParseMode.BARE:
            data = tuple(line.strip() for line in lines if not _is_blank_row(line))
            return ParsedDocument(header_section=(), data_lines=data, mode=mode)

        return self._scan_full(lines)

    def detect_mode(self, lines: list[str]) -> ParseMode:
        """Return ``FULL`` if a ``[Header]`` or data marker line is present."""
        targets = {HEADER_MARKER.lower(), self.data_marker.lower()}
        for line in lines:
            if clean_section_line(line).lower() in targets:
                return ParseMode.FULL
        return ParseMode.BARE

    # ------------------------------------------------------------------
    # Full-structure scan
    # ------------------------------------------------------------------

    def _scan_full(self, lines: list[str]) -> ParsedDocument:
        marker = self.data_marker.lower()
        state = _State.SCANNING_HEADER
        header: list[str] = []
        data: list[str] = []

        for line in lines:
            if state == _State.SCANNING_HEADER:
                cleaned = clean_section_line(line)
                if cleaned.lower() == marker:
                    header.append(cleaned)
                    state = _State.SCANNING_DATA
                    continue
                if cleaned or self.preserve_blank_header_lines:
                    header.append(line)
            elif not _is_blank_row(line):
                data.append(line.strip())

        # EOF transitions
        if state == _State.SCANNING_HEADER:
            raise ParseError(ParseErrorKind.NO_DATA_SECTION, self.data_marker)
        if not data:
            raise ParseError(ParseErrorKind.EMPTY_DATA_SECTION, self.data_marker)
        state = _State.DONE
        logger.debug(
            f"Parser {state.name}: {len(header)} header line(s), "
            f"{len(data)} data line(s)"
        )

        return ParsedDocument(
            header_section=tuple(header),
            data_lines=tuple(data),
            mode=ParseMode.FULL,
        )


def parse_document(raw: str, schema: SchemaDefinition) -> ParsedDocument:
    """Parse *raw* using the marker and blank-line rules of *schema*."""
    parser = SheetParser(
        schema.data_marker,
        preserve_blank_header_lines=schema.preserve_blank_header_lines,
    )
    return parser.parse(raw)
