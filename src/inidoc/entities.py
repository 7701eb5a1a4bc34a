"""Ini entities are either a section or an entry (key/value pair or standalone
comment) inside a section."""

from dataclasses import dataclass, field
from .globals import COMMENT_MARKERS, KEY_VALUE_DELIMITER, PADDED_DELIMITER


def join_key_value(key: str, value: str | None, padded_equals: bool = False) -> str:
    """Join key and value to an ini line.

    Args:
        key (str): The key.
        value (str | None): The value. None is written like an empty value.
        padded_equals (bool, optional): Whether to surround the delimiter with spaces.
            Defaults to False.

    Returns:
        str: The ini line. An empty value results in the trimmed "key=" so that it
            can be read again.
    """
    delimiter = PADDED_DELIMITER if padded_equals else KEY_VALUE_DELIMITER
    if not value:
        return f"{key}{delimiter}".strip()
    return f"{key}{delimiter}{value}"


@dataclass(slots=True)
class Entry:
    """One key/value pair of a section or a standalone comment.

    Standalone comments are stored under a synthetic key that starts with a comment
    marker. Such keys are reserved and never hold user data.

    Args:
        key (str): The key. Can't be changed once the entry exists.
        value (str | None): The value. None for comment-only entries.
        comment (str | None): The comment line above the entry.
    """

    key: str
    value: str | None = None
    comment: str | None = None

    def __setattr__(self, name: str, value: object) -> None:
        if name == "key" and hasattr(self, "key"):
            raise AttributeError("The key of an Entry can't be changed.")
        object.__setattr__(self, name, value)

    @property
    def is_comment(self) -> bool:
        """Whether this is a standalone comment entry."""
        return self.key.startswith(COMMENT_MARKERS)

    def to_lines(self, padded_equals: bool = False) -> list[str]:
        """Convert the Entry into ini lines.

        Args:
            padded_equals (bool, optional): Whether to write "key = value".
                Defaults to False.

        Returns:
            list[str]: The lines. A standalone comment is followed by an empty line
                so it doesn't get attached to the next entry when read again.
        """
        if self.is_comment:
            return [self.comment or "", ""]
        line = join_key_value(self.key, self.value, padded_equals)
        return [self.comment, line] if self.comment is not None else [line]


@dataclass(slots=True)
class Section:
    """A configuration section. The global section has no name (None)."""

    name: str | None
    comment: str | None = None
    entries: list[Entry] = field(default_factory=list)

    def index_of_key(self, key: str) -> int:
        """Position of key in the section or -1 if the key doesn't exist."""
        for index, entry in enumerate(self.entries):
            if entry.key == key:
                return index
        return -1

    def get_entry(self, key: str) -> Entry | None:
        index = self.index_of_key(key)
        return self.entries[index] if index > -1 else None

    def next_comment_key(self, marker: str, number: int) -> str:
        """Get an unused synthetic key for a standalone comment.

        Args:
            marker (str): The comment marker to start the key with.
            number (int): Number to identify the comment (usually its line number).

        Returns:
            str: "<marker><number>" or, if taken, "<marker><number>.<n>" with the
                lowest free n.
        """
        key = f"{marker}{number}"
        suffix = 0
        while self.index_of_key(key) > -1:
            suffix += 1
            key = f"{marker}{number}.{suffix}"
        return key

    def to_lines(self, padded_equals: bool = False) -> list[str]:
        """Convert the Section with all its entries into ini lines."""
        lines: list[str] = []
        if self.comment is not None:
            lines.append(self.comment)
        if self.name is not None:
            lines.append(f"[{self.name}]")
        if lines:
            lines.append("")
        for entry in self.entries:
            lines.extend(entry.to_lines(padded_equals))
        return lines
