"""
Sample sheet file acquisition.

Turns a file on disk into the single text string the normaliser works
on. CSV/text files are read as UTF-8 (a leading BOM is dropped);
spreadsheets are decoded with pandas and re-emitted as comma-joined
lines, one per worksheet row.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from loguru import logger

from samplesheet_normalizer.exceptions import UnsupportedFormatError

TEXT_SUFFIXES = frozenset({".csv", ".txt"})
SPREADSHEET_SUFFIXES = frozenset({".xlsx"})


def read_document(path: str | Path) -> str:
    """Return the sample sheet at *path* as text.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    UnsupportedFormatError
        If the file extension is not supported (a ``ValueError``).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sample sheet not found: {path}")

    suffix = path.suffix.lower()
    if suffix in TEXT_SUFFIXES:
        logger.info(f"Reading text sample sheet: {path}")
        return path.read_text(encoding="utf-8-sig")
    if suffix in SPREADSHEET_SUFFIXES:
        logger.info(f"Reading spreadsheet sample sheet: {path}")
        return spreadsheet_to_text(path)

    raise UnsupportedFormatError(suffix, sorted(TEXT_SUFFIXES | SPREADSHEET_SUFFIXES))


def spreadsheet_to_text(path: str | Path, sheet_name: str | int = 0) -> str:
    """Convert one worksheet to comma-delimited text.

    Every cell is read as a string; empty cells become empty strings and
    trailing empty cells on each row are trimmed, so a section line such
    as ``[Data]`` comes out without padding commas.

    Parameters
    ----------
    path:
        Spreadsheet file.
    sheet_name:
        Worksheet name or 0-based position (default: first sheet).
    """
    df = pd.read_excel(
        path,
        sheet_name=sheet_name,
        header=None,
        dtype=str,
        keep_default_na=False,
    )

    lines: list[str] = []
    for values in df.itertuples(index=False, name=None):
        cells = ["" if pd.isna(v) else str(v).strip() for v in values]
        while cells and not cells[-1]:
            cells.pop()
        lines.append(",".join(cells))

    logger.debug(f"Decoded {len(lines)} row(s) from {path}")
    return "\n".join(lines)
