"""Interface classes exist for coder interaction: reading ini text into an
IniDocument and writing it back to files."""

from typing import Iterable, Self
from pathlib import Path
import logging
import warnings
from charset_normalizer import from_bytes as read_from_bytes
from .args import Parameters
from .document import IniDocument
from .exceptions_warnings import (
    IniFormatError,
    InvalidParameterError,
    FileAlreadyLoadedError,
    FileNotLoadedError,
    DuplicateKeyWarning,
    DuplicateSectionWarning,
)
from .globals import GLOBAL_SECTION
from .lines import LineKind, classify_line

logger = logging.getLogger(__name__)


class _ReadIni:

    def __init__(
        self,
        target: IniDocument,
        lines: Iterable[str],
        source: str | None = None,
        parameters: Parameters | None = None,
    ) -> None:
        """Read lines of ini text into target.

        A comment line directly above a section header or key becomes that entity's
        comment. A comment followed by an empty line, another comment or the end of
        the text is stored as standalone comment of the current section.

        Args:
            target (IniDocument): The document to read into. Existing content is
                kept and overwritten where the text defines the same keys.
            lines (Iterable[str]): The lines of ini text.
            source (str | None, optional): Identifier of the text for error messages.
                Defaults to None.
            parameters (Parameters | None, optional): Parameters for reading.
                Defaults to None (default Parameters).

        Raises:
            IniFormatError: On the first line that is no section header, comment,
                key/value pair or empty line.
        """
        self.target = target
        self.source = source
        self.parameters = parameters if parameters is not None else Parameters()

        # ----
        # define variables for read process
        # ----
        self.current_section: str | None = GLOBAL_SECTION
        self.pending_comment: str | None = None
        self.pending_comment_line: int = 0
        self.current_line_number: int = 0
        # entities seen in this text, to detect duplicates
        self.seen_sections: set[str | None] = {GLOBAL_SECTION}
        self.seen_keys: set[tuple[str | None, str]] = set()
        # ----

        for self.current_line_number, line in enumerate(lines, start=1):
            try:
                self._handle_line(line)
            except InvalidParameterError as e:
                # e.g. a key consisting of whitespace only
                raise IniFormatError(
                    source, self.current_line_number, line.rstrip("\r\n")
                ) from e

        self._store_pending_comment()

    def _handle_line(self, line: str) -> None:
        parsed = classify_line(line)

        match parsed.kind:
            case LineKind.SECTION:
                assert parsed.section is not None
                self._handle_section_name(parsed.section.strip())
            case LineKind.KEY:
                assert parsed.key is not None and parsed.value is not None
                self._handle_option(parsed.key.strip(), parsed.value.strip())
            case LineKind.COMMENT:
                assert parsed.comment is not None
                self._handle_comment(parsed.comment)
            case LineKind.TAIL if not (
                self.parameters.ignore_whitespace_lines
                and parsed.tail is not None
                and not parsed.tail.strip()
            ):
                raise IniFormatError(self.source, self.current_line_number, parsed.tail)
            case _:
                # empty line
                self._store_pending_comment()

    def _handle_section_name(self, name: str) -> None:
        """Switch to section name, creating it if necessary."""
        if name in self.seen_sections:
            self._warn_duplicate(f"Section '{name}'", DuplicateSectionWarning)
        self.seen_sections.add(name)

        # an existing section keeps its comment unless a new one is given
        if self.pending_comment is not None or not self.target.contains_section(name):
            self.target.ensure_section(name, self.pending_comment)
        self.pending_comment = None
        self.current_section = name

    def _handle_option(self, key: str, value: str) -> None:
        """Set key to value in the current section, with the pending comment."""
        if (self.current_section, key) in self.seen_keys:
            self._warn_duplicate(
                f"Key '{key}' of section '{self.current_section}'", DuplicateKeyWarning
            )
        self.seen_keys.add((self.current_section, key))

        self.target.set_string(self.current_section, key, value, self.pending_comment)
        self.pending_comment = None

    def _handle_comment(self, comment: str) -> None:
        """Make comment the pending comment. A previous pending comment doesn't
        belong to anything and is stored on its own."""
        self._store_pending_comment()
        self.pending_comment = comment
        self.pending_comment_line = self.current_line_number

    def _store_pending_comment(self) -> None:
        if self.pending_comment is None:
            return
        self.target.add_comment(
            self.current_section, self.pending_comment, self.pending_comment_line
        )
        self.pending_comment = None

    def _warn_duplicate(self, entity: str, category: type[Warning]) -> None:
        if self.parameters.warn_duplicates:
            warnings.warn(
                f"{entity} is defined more than once"
                f"{f' in {self.source}' if self.source else ''}"
                f" (line {self.current_line_number}). The last definition is used.",
                category,
            )


def read_text(path: str | Path, encoding: str | None = None) -> str:
    """Read a text file.

    Args:
        path (str | Path): The file to read.
        encoding (str | None, optional): The encoding of the file. If None, the
            encoding is detected. Defaults to None.

    Raises:
        IniFormatError: If the encoding could not be detected.

    Returns:
        str: The file's content.
    """
    if encoding is not None:
        return Path(path).read_text(encoding=encoding)

    raw = Path(path).read_bytes()
    if not raw:
        return ""
    best = read_from_bytes(raw).best()
    if best is None:
        raise IniFormatError(str(path), message="Could not detect the file encoding.")
    logger.debug("Detected encoding %s for %s", best.encoding, path)
    return str(best)


class IniFile:
    """An ini file on disk and its content as IniDocument.

    Use load() once to read the file, merge() to read further files on top of it and
    save() or save_as() to write the document.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        parameters: Parameters | None = None,
        **kwargs,
    ) -> None:
        """
        Args:
            path (str | Path | None, optional): Path of the ini file. May be None if the
                content is loaded from a string and saved with save_as().
                Defaults to None.
            parameters (Parameters | None, optional): Parameters for reading and
                writing. Parameters can also be passed as kwargs, which update the
                passed (or default) Parameters. Defaults to None.
            **kwargs (optional): Parameters as kwargs. See doc of Parameters for
                details.

        Raises:
            InvalidParameterError: If path is a blank string.
        """
        if isinstance(path, str) and not path.strip():
            raise InvalidParameterError("path is blank")
        self.path = Path(path) if path is not None else None
        self.parameters = parameters.copy() if parameters is not None else Parameters()
        if kwargs:
            self.parameters.update(**kwargs)
        self.document = IniDocument()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        """Whether the file content was loaded."""
        return self._loaded

    def _require_path(self) -> Path:
        if self.path is None:
            raise ValueError("No path set for this IniFile.")
        return self.path

    def load(self) -> Self:
        """Read the file into the document.

        Raises:
            FileAlreadyLoadedError: If the file was already loaded. Use merge() to read
                further content.
            IniFormatError: If the file contains an invalid line.
            ValueError: If no path is set.

        Returns:
            Self: This IniFile.
        """
        path = self._require_path()
        return self.load_string(read_text(path, self.parameters.encoding), source=str(path))

    def load_string(self, text: str, source: str | None = None) -> Self:
        """Read ini text into the document. Counts as loading the file.

        Args:
            text (str): The ini text.
            source (str | None, optional): Identifier of the text for error messages.
                Defaults to the path (if set).

        Raises:
            FileAlreadyLoadedError: If the file was already loaded.
            IniFormatError: If the text contains an invalid line.

        Returns:
            Self: This IniFile.
        """
        if self._loaded:
            raise FileAlreadyLoadedError(
                f"{self.path or 'IniFile'} is already loaded. Use merge to add content."
            )
        self._read(text, source)
        self._loaded = True
        return self

    def merge(self, path: str | Path) -> Self:
        """Read another file on top of the loaded content. Keys and section comments
        of the other file overwrite existing ones, new sections and keys are appended.

        Args:
            path (str | Path): The file to merge.

        Raises:
            FileNotLoadedError: If this file wasn't loaded yet.
            IniFormatError: If the other file contains an invalid line.

        Returns:
            Self: This IniFile.
        """
        self._require_loaded()
        return self._read(read_text(path, self.parameters.encoding), str(path))

    def merge_string(self, text: str, source: str | None = None) -> Self:
        """Read ini text on top of the loaded content (see merge())."""
        self._require_loaded()
        return self._read(text, source)

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise FileNotLoadedError(f"File not loaded: {self.path}")

    def _read(self, text: str, source: str | None) -> Self:
        if source is None and self.path is not None:
            source = str(self.path)
        _ReadIni(
            self.document, text.removeprefix("\ufeff").split("\n"), source, self.parameters
        )
        logger.debug(
            "Read %s: %d sections", source or "ini text", len(self.document)
        )
        return self

    def save(self) -> Self:
        """Write the document to the file's path.

        Raises:
            ValueError: If no path is set.
        """
        return self.save_as(self._require_path())

    def save_as(self, path: str | Path) -> Self:
        """Write the document to path. The path of this IniFile doesn't change."""
        Path(path).write_text(
            self.to_string(), encoding=self.parameters.encoding or "utf-8", newline=""
        )
        logger.debug("Saved %s", path)
        return self

    def to_string(self) -> str:
        """Render the document as ini text."""
        return self.document.to_string(self.parameters)

    def __str__(self) -> str:
        return f"IniFile(path={self.path}, loaded={self._loaded}, document={self.document!r})"


def loads(text: str, source: str | None = None, **kwargs) -> IniDocument:
    """Read ini text into a new IniDocument.

    Args:
        text (str): The ini text.
        source (str | None, optional): Identifier of the text for error messages.
            Defaults to None.
        **kwargs (optional): Parameters as kwargs.

    Returns:
        IniDocument: The document.
    """
    return IniFile(**kwargs).load_string(text, source).document


def dumps(document: IniDocument, **kwargs) -> str:
    """Render an IniDocument as ini text. kwargs are Parameters."""
    return document.to_string(Parameters(**kwargs))
