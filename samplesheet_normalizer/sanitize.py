"""
Identifier sanitisation and duplicate renaming.

Two sanitiser flavours coexist because instrument families disagree on
which characters survive:

* :func:`sanitize_identifier` keeps ``[A-Za-z0-9-_]`` and collapses runs
  of the replacement character.
* :func:`replace_special_characters` replaces every run of non-word
  characters *or underscores* with ``-``, then collapses ``-`` runs and
  ``_`` runs in two separate passes.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from samplesheet_normalizer.enums import SanitizeStrategy

_RX_UNSAFE   = re.compile(r"[^A-Za-z0-9\-_]+")
_RX_SPECIAL  = re.compile(r"[\W_]+", re.ASCII)
_RX_HYPHENS  = re.compile(r"-+")
_RX_UNDERSCORES = re.compile(r"_+")


def sanitize_identifier(
    text: str,
    replacement_char: str = "-",
    collapse_repeats: bool = True,
) -> str:
    """Replace characters outside ``[A-Za-z0-9-_]`` with *replacement_char*.

    Parameters
    ----------
    text:
        Identifier to clean.
    replacement_char:
        Character substituted for each run of unsafe characters.
    collapse_repeats:
        Also collapse consecutive *replacement_char* into one, including
        ones that were already present in *text*.

    Returns
    -------
    str
        Sanitised identifier.

    Examples
    --------
    >>> sanitize_identifier("Sample 1 (rep)")
    'Sample-1-rep-'
    """
    result = _RX_UNSAFE.sub(replacement_char, text)
    if collapse_repeats and replacement_char:
        result = re.sub(f"(?:{re.escape(replacement_char)})+", replacement_char, result)
    return result


def replace_special_characters(text: str) -> str:
    """Replace runs of special characters (underscore included) with ``-``.

    Only ASCII letters and digits count as word characters, so accented
    letters and non-ASCII digits are replaced too.

    >>> replace_special_characters("my__sample  #2")
    'my-sample-2'
    """
    if not text:
        return text

    result = _RX_SPECIAL.sub("-", text)
    result = _RX_HYPHENS.sub("-", result)
    result = _RX_UNDERSCORES.sub("_", result)
    return result


def sanitize(text: str, strategy: SanitizeStrategy) -> str:
    """Sanitise *text* with the given strategy."""
    if strategy == SanitizeStrategy.DUAL_COLLAPSE:
        return replace_special_characters(text)
    return sanitize_identifier(text)


def rename_duplicates(values: Iterable[str]) -> list[str]:
    """Suffix repeated values with the number of prior occurrences.

    The first occurrence is unchanged; the second becomes ``value-1``,
    the third ``value-2`` and so on.

    >>> rename_duplicates(["A", "B", "A", "A"])
    ['A', 'B', 'A-1', 'A-2']
    """
    counts: dict[str, int] = {}
    result: list[str] = []
    for value in values:
        count = counts.get(value, 0)
        counts[value] = count + 1
        result.append(value if count == 0 else f"{value}-{count}")
    return result


def columns_to_title_case(headers: Iterable[str]) -> list[str]:
    """Title-case each ``_``-separated word of every header.

    >>> columns_to_title_case(["sample_id", "INDEX2"])
    ['Sample_Id', 'Index2']
    """
    return [
        "_".join(word[:1].upper() + word[1:].lower() for word in header.split("_"))
        for header in headers
    ]
