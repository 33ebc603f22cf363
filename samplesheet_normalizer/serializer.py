"""
Serialise canonical headers and rows back into sample sheet text.

Cells are joined with commas and written as-is. No quoting or escaping is
applied, so a cell containing a comma or newline corrupts the output;
identifiers should be sanitised before export.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from samplesheet_normalizer.models import SampleTable


def serialize(
    header_section: Sequence[str],
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    remove_column: Callable[[str], bool] | None = None,
) -> str:
    """Render a sample sheet as newline-joined text.

    Parameters
    ----------
    header_section:
        Lines emitted first, verbatim.
    headers:
        Column header names.
    rows:
        Data rows. Rows shorter than the header are right-padded with
        empty cells; longer rows are never truncated.
    remove_column:
        Predicate on header names. If it matches exactly one header, that
        column is dropped from the header and from every row. Zero or
        several matches leave the table unchanged.

    Returns
    -------
    str
        ``header_section``, the header line and one line per row, joined
        with ``\\n`` and without a trailing newline.

    Examples
    --------
    >>> serialize([], ["Sample_ID", "Index"], [["S1", "AAAA"]])
    'Sample_ID,Index\\nS1,AAAA'
    """
    out_headers = list(headers)
    out_rows = [list(row) for row in rows]

    if remove_column is not None:
        matches = [i for i, h in enumerate(out_headers) if remove_column(h)]
        if len(matches) == 1:
            drop = matches[0]
            logger.debug(f"Removing column {out_headers[drop]!r} from output")
            del out_headers[drop]
            for row in out_rows:
                if drop < len(row):
                    del row[drop]
        elif matches:
            logger.warning(
                f"Column removal predicate matched {len(matches)} headers; "
                f"no column removed"
            )

    width = len(out_headers)
    lines = list(header_section)
    lines.append(",".join(out_headers))
    for row in out_rows:
        if len(row) < width:
            row.extend([""] * (width - len(row)))
        lines.append(",".join(row))

    return "\n".join(lines)


def serialize_table(
    table: SampleTable,
    header_section: Sequence[str] = (),
    *,
    remove_column: Callable[[str], bool] | None = None,
) -> str:
    """Serialise a :class:`SampleTable` with an optional header section."""
    return serialize(
        header_section,
        table.headers,
        table.rows,
        remove_column=remove_column,
    )


def column_named(name: str) -> Callable[[str], bool]:
    """Return a case-insensitive header-name predicate for *name*."""
    target = name.strip().lower()
    return lambda header: header.strip().lower() == target


def write_sheet(path: str | Path, content: str) -> Path:
    """Write serialised *content* to *path* (UTF-8, trailing newline).

    Returns
    -------
    Path
        Absolute path to the written file.
    """
    out = Path(path)
    text = content if content.endswith("\n") else content + "\n"
    out.write_text(text, encoding="utf-8")
    logger.info(f"Wrote sample sheet to {out}")
    return out.resolve()
