"""
Text utilities for column-formatted document text.

pdftotext in layout mode renders table columns as runs of spaces, so a
label and its value share one line and the next column starts after a gap.
"""

import re
from typing import Optional


def extract_until_multiple_spaces(text: str, min_gap: int = 2) -> str:
    """
    Cut text at the first run of `min_gap` or more whitespace characters.

    - "AB 1234   Trailer" → "AB 1234"
    - "JOHN SMITH" → "JOHN SMITH"

    A value that really contains a double space is truncated; there is no
    column geometry left in the text to tell the two cases apart.

    Args:
        text: Value text, usually already stripped
        min_gap: Shortest whitespace run treated as a column separator

    Returns:
        Text before the first gap, stripped
    """
    match = re.search(r"\s{%d,}" % min_gap, text)
    if match:
        return text[:match.start()].strip()
    return text.strip()


def cut_label(line: str, label: str) -> Optional[str]:
    """
    Return the value after a label at the start of a line.

    Comparison is case-insensitive; the value keeps the line's casing.
    Surrounding whitespace and one ":" separator are removed.

    - cut_label("Load date: 03/11/2025", "load date") → "03/11/2025"
    - cut_label("Driver   John", "truck") → None

    Args:
        line: Raw document line
        label: Lower-case label keyword

    Returns:
        Value text, or None if the line does not start with the label
    """
    if not line.lower().startswith(label):
        return None
    value = line[len(label):].strip()
    return value.removeprefix(":").strip()


def match_label(line: str, labels: tuple[str, ...]) -> Optional[str]:
    """
    Value after the first label the line starts with.

    Labels are tried in the given order, so callers pass them longest
    first ("temperature" before "temp").
    """
    for label in labels:
        value = cut_label(line, label)
        if value is not None:
            return value
    return None
