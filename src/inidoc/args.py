from typing import get_args
import codecs
from .globals import VALID_NEWLINES


class Parameters:
    """Parameters for reading and writing."""

    def __init__(
        self,
        padded_equals: bool = False,
        ignore_whitespace_lines: bool = True,
        warn_duplicates: bool = True,
        encoding: str | None = None,
        newline: VALID_NEWLINES = "\n",
    ) -> None:
        """
        Args:
            padded_equals (bool, optional): Whether to write options as "key = value"
                instead of "key=value". Reading accepts both. Defaults to False.
            ignore_whitespace_lines (bool, optional): Whether to interpret lines with
                only whitespace characters (space or tab) as empty lines. If False,
                such lines are format errors. Defaults to True.
            warn_duplicates (bool, optional): Whether to warn about sections and keys
                that are defined more than once in the same text. Defaults to True.
            encoding (str | None, optional): Encoding of files. If None, will detect
                the encoding when reading and use UTF-8 when writing.
                Defaults to None.
            newline ("\\n" | "\\r\\n", optional): Line separator for writing.
                Defaults to "\\n".
        """
        self.padded_equals = padded_equals
        self.ignore_whitespace_lines = ignore_whitespace_lines
        self.warn_duplicates = warn_duplicates
        self.encoding = encoding
        self.newline = newline

    @property
    def encoding(self) -> str | None:
        return self._encoding

    @encoding.setter
    def encoding(self, value: str | None) -> None:
        if value is not None:
            # raises LookupError for unknown encodings
            codecs.lookup(value)
        self._encoding = value

    @property
    def newline(self) -> VALID_NEWLINES:
        return self._newline

    @newline.setter
    def newline(self, value: VALID_NEWLINES) -> None:
        if value not in get_args(VALID_NEWLINES):
            raise ValueError(f"newline must be one of {get_args(VALID_NEWLINES)}.")
        self._newline = value

    def update(self, **kwargs) -> None:
        """Update parameters with kwargs

        Args:
            **kwargs: Keyword-arguments to update the parameters with.
        """
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise TypeError(f"'{k}' is not a parameter.")
            setattr(self, k, v)

    def copy(self, **kwargs) -> "Parameters":
        """Copy the parameters, optionally updated with kwargs."""
        new = Parameters(
            padded_equals=self.padded_equals,
            ignore_whitespace_lines=self.ignore_whitespace_lines,
            warn_duplicates=self.warn_duplicates,
            encoding=self.encoding,
            newline=self.newline,
        )
        new.update(**kwargs)
        return new

    def __repr__(self) -> str:
        return (
            f"Parameters(padded_equals={self.padded_equals!r},"
            f" ignore_whitespace_lines={self.ignore_whitespace_lines!r},"
            f" warn_duplicates={self.warn_duplicates!r},"
            f" encoding={self.encoding!r}, newline={self.newline!r})"
        )
