"""
Heuristic field extraction for Huorong log entries.

Nothing here raises on malformed input: a missing anchor, an empty value or
an unparsable hour all come back as None and the caller skips that field.
"""

from typing import Optional, Sequence

from .patterns import UNKNOWN_PROCESS


def extract_field(text: str, prefix: str, terminators: Sequence[str]) -> Optional[str]:
    """
    Return the text between ``prefix`` and the nearest following terminator.

    The field starts right after the first occurrence of ``prefix`` and ends
    at the earliest occurrence of any terminator, or at the end of ``text``
    when none occurs. Since the minimum offset is taken, the order of
    ``terminators`` never changes the result.

    Args:
        text: Entry text to search.
        prefix: Field label that precedes the value.
        terminators: Candidate substrings that can end the value.

    Returns:
        The untrimmed value, or None if the prefix is missing or the value
        is empty.
    """
    start = text.find(prefix)
    if start < 0:
        return None

    value_start = start + len(prefix)
    if value_start >= len(text):
        return None

    offsets = [pos for pos in (text.find(term, value_start) for term in terminators) if pos >= 0]
    value_end = min(offsets) if offsets else len(text)

    if value_start >= value_end:
        return None
    return text[value_start:value_end]


def extract_hour(entry: str) -> Optional[int]:
    """
    Best-effort hour of day from an entry's first line.

    Expects the line to look like ``<date> <HH:MM:SS> ...``. Only the very
    first line is looked at, even when it is blank.
    """
    first_line = entry.split("\n", 1)[0]
    tokens = first_line.split()
    if len(tokens) < 2:
        return None

    hour_str = tokens[1].split(":", 1)[0]
    digits = hour_str[1:] if hour_str.startswith("+") else hour_str
    if not (digits.isascii() and digits.isdigit()):
        return None

    hour = int(digits)
    if hour >= 24:
        return None
    return hour


def process_name_from_path(process_path: str) -> str:
    """Last backslash-separated segment of a process path."""
    name = process_path.split("\\")[-1].strip()
    return name or UNKNOWN_PROCESS
