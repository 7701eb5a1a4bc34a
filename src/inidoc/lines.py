"""Classification of single ini lines."""

from dataclasses import dataclass
from enum import Enum
import re
from .globals import SECTION_REGEX, COMMENT_REGEX, KEY_VALUE_REGEX, TAIL_REGEX

INI_PATTERN = re.compile("|".join((SECTION_REGEX, COMMENT_REGEX, KEY_VALUE_REGEX, TAIL_REGEX)))
"""Composite line pattern. First matching alternative wins:
section > comment > key/value > tail."""
COMMENT_PATTERN = re.compile("|".join((COMMENT_REGEX, TAIL_REGEX)))
"""Pattern to validate comments with."""


class LineKind(Enum):
    """What a line of ini text is."""

    SECTION = "section"
    COMMENT = "comment"
    KEY = "key"
    BLANK = "blank"
    TAIL = "tail"


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """Result of classifying one line.

    Args:
        kind (LineKind): The kind of line.
        section (str | None): Captured section name (not stripped).
        comment (str | None): Captured comment including its marker.
        key (str | None): Captured key (not stripped).
        value (str | None): Captured value (not stripped).
        tail (str | None): Captured unrecognized text.
    """

    kind: LineKind
    section: str | None = None
    comment: str | None = None
    key: str | None = None
    value: str | None = None
    tail: str | None = None


def classify_line(line: str) -> ParsedLine:
    """Classify a line of ini text and extract its fields.

    Args:
        line (str): The line. A trailing line break is ignored.

    Returns:
        ParsedLine: The kind of the line and the captured groups of the matching
            alternative. Whitespace-only lines come back as TAIL, it's up to the
            caller to treat them as blank.
    """
    line = line.rstrip("\r\n")
    if not line:
        return ParsedLine(LineKind.BLANK)

    # the tail alternative matches anything, so there is always a match
    match = INI_PATTERN.match(line)
    assert match is not None
    groups = match.groupdict()

    if groups["section"] is not None:
        return ParsedLine(LineKind.SECTION, section=groups["section"])
    if groups["comment"] is not None:
        return ParsedLine(LineKind.COMMENT, comment=groups["comment"])
    if groups["key"] is not None:
        return ParsedLine(LineKind.KEY, key=groups["key"], value=groups["value"])
    return ParsedLine(LineKind.TAIL, tail=groups["tail"])


def is_comment(text: str) -> bool:
    """Check whether text is a single comment line (marker, whitespace, text)."""
    match = COMMENT_PATTERN.fullmatch(text)
    return match is not None and match["comment"] is not None
