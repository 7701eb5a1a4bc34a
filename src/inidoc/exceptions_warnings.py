"""inidoc-specific exceptions and warnings"""

from typing import Any

# ---------- #
# Exceptions
# ---------- #


class IniError(Exception):
    """Base class of all inidoc exceptions."""


class IniFormatError(IniError, ValueError):
    """Raised when a line matches none of the ini line types."""

    def __init__(
        self,
        source: str | None,
        line_number: int | None = None,
        line: str | None = None,
        message: str | None = None,
    ) -> None:
        """
        Args:
            source (str | None): Identifier of the parsed text (usually a path).
            line_number (int | None, optional): 1-based number of the offending line.
                Defaults to None.
            line (str | None, optional): The offending raw text. Defaults to None.
            message (str | None, optional): Message to use instead of the generated
                one. Defaults to None.
        """
        self.source = source
        self.line_number = line_number
        self.line = line
        if message is None:
            message = f"Unknown entry (line# {line_number}): {line}"
        super().__init__(f"{source}: {message}" if source else message)


class InvalidParameterError(IniError, ValueError):
    """Raised when a parameter (key, section name, value or comment) is not valid."""


class NumericFormatError(IniError, ValueError):
    """Raised when a stored value can't be converted to the requested type."""

    def __init__(self, value: Any, target_type: str) -> None:
        self.value = value
        self.target_type = target_type
        super().__init__(f"'{value}' could not be converted to {target_type}.")


class FileAlreadyLoadedError(IniError):
    """Raised when a file that was already loaded is loaded again."""


class FileNotLoadedError(IniError):
    """Raised when content is to be merged into a file that wasn't loaded."""


# ---------- #
# Warnings
# ---------- #


class IniStructureWarning(Warning):
    """Raised when the ini content is readable but not well structured."""


class DuplicateEntityWarning(IniStructureWarning):
    """Raised when an entity is defined more than once in the same text."""


class DuplicateSectionWarning(DuplicateEntityWarning):
    """Raised when a section header appears more than once in the same text."""


class DuplicateKeyWarning(DuplicateEntityWarning):
    """Raised when a key appears more than once in a section of the same text."""
