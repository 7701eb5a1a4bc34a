"""In-memory ini document: ordered sections holding ordered entries."""

from dataclasses import replace
from typing import Iterator
import re
from .entities import Entry, Section
from .exceptions_warnings import InvalidParameterError
from .globals import GLOBAL_SECTION
from .lines import is_comment
from .type_converters.converters import (
    TypeConverter,
    ScalarTypes,
    DEFAULT_STRING_CONVERTER,
    DEFAULT_BOOL_CONVERTER,
    DEFAULT_INT_CONVERTER,
    DEFAULT_FLOAT_CONVERTER,
    convert_optional,
    to_ini_string,
)
from .utils import global_variant
from .args import Parameters
from .formatter import format_document


NULL_KEY_MSG = "A null key is not valid."
_INVALID_KEY = re.compile(r"[#;=\r\n]")
_INVALID_SECTION_NAME = re.compile(r"[\]\r\n]")
_LINE_BREAK = re.compile(r"[\r\n]")


class IniDocument:
    """Ordered collection of sections. The global section (name None) always exists
    and always comes first.

    Every method taking a section name accepts None for the global section.
    Sections and keys are created on first write.
    """

    def __init__(self) -> None:
        self._sections: list[Section] = [Section(GLOBAL_SECTION)]

    # ----------
    # validation
    # ----------

    @staticmethod
    def validate_comment(comment: str | None) -> bool:
        """Check whether comment is a valid ini comment.

        Args:
            comment (str | None): The comment including its marker, e.g. "; text".

        Returns:
            bool: True for None (no comment) and for a single line starting with
                "#" or ";" followed by at least one space or tab. False otherwise,
                including the empty string.
        """
        if comment is None:
            return True
        return bool(comment) and is_comment(comment)

    def _check_comment(self, section: str | None, key: str | None, comment: str | None) -> None:
        if not self.validate_comment(comment):
            raise InvalidParameterError(
                f"section={section} key={key}\ncomment={comment}\n"
                "The comment text is not a valid 'ini' file format comment."
            )

    @staticmethod
    def _check_key(key: str | None) -> None:
        if key is None:
            raise InvalidParameterError(NULL_KEY_MSG)
        if not key or key != key.strip() or _INVALID_KEY.search(key):
            raise InvalidParameterError(
                f"'{key}' is not a valid key. Keys must not be empty, have surrounding"
                " whitespace or contain '#', ';', '=' or line breaks."
            )

    @staticmethod
    def _check_section_name(section: str | None) -> None:
        if section is None:
            return
        if section != section.strip() or _INVALID_SECTION_NAME.search(section):
            raise InvalidParameterError(
                f"'{section}' is not a valid section name. Section names must not have"
                " surrounding whitespace or contain ']' or line breaks."
            )

    @staticmethod
    def _check_value(value: str | None) -> None:
        if value is None:
            return
        if value != value.strip() or _LINE_BREAK.search(value):
            raise InvalidParameterError(
                f"Value {value!r} must not contain line breaks or have surrounding"
                " whitespace."
            )

    # ----------
    # lookup
    # ----------

    def index_of_section(self, section: str | None) -> int:
        """Position of a section or -1 if it doesn't exist. The global section is
        always at 0."""
        if section is GLOBAL_SECTION:
            return 0
        for index in range(1, len(self._sections)):
            if self._sections[index].name == section:
                return index
        return -1

    def _get_section(self, section: str | None) -> Section | None:
        index = self.index_of_section(section)
        return self._sections[index] if index > -1 else None

    def _get_entry(self, section: str | None, key: str) -> Entry | None:
        if (sec := self._get_section(section)) is None:
            return None
        return sec.get_entry(key)

    def _ensure_section(self, section: str | None) -> Section:
        if (sec := self._get_section(section)) is None:
            sec = Section(section)
            self._sections.append(sec)
        return sec

    def iter_sections(self) -> Iterator[Section]:
        """Iterate the Section entities in document order. The entities are not copies."""
        return iter(self._sections)

    def contains_section(self, section: str | None) -> bool:
        return self.index_of_section(section) > -1

    def contains_key(self, section: str | None, key: str) -> bool:
        return self._get_entry(section, key) is not None

    def get_sections(self) -> list[str | None]:
        """Get all section names in document order, None (global section) first."""
        return [sec.name for sec in self._sections]

    def get_section(self, section: str | None) -> list[Entry] | None:
        """Get the entries of a section.

        Args:
            section (str | None): The section name.

        Returns:
            list[Entry] | None: Copies of the section's entries in order (including
                standalone comment entries) or None if the section doesn't exist.
        """
        if (sec := self._get_section(section)) is None:
            return None
        return [replace(entry) for entry in sec.entries]

    def get_keys(self, section: str | None) -> list[str]:
        """Get the keys of a section in order, without standalone comments. Empty if
        the section doesn't exist."""
        if (sec := self._get_section(section)) is None:
            return []
        return [entry.key for entry in sec.entries if not entry.is_comment]

    def get_value(self, section: str | None, key: str) -> str | None:
        """Get the raw value of a key or None if it (or its section) doesn't exist."""
        entry = self._get_entry(section, key)
        return entry.value if entry is not None else None

    def get_comment(self, section: str | None, key: str) -> str | None:
        """Get the comment of a key or None if there is none."""
        entry = self._get_entry(section, key)
        return entry.comment if entry is not None else None

    def get_section_comment(self, section: str | None) -> str | None:
        """Get the comment of a section or None if there is none."""
        sec = self._get_section(section)
        return sec.comment if sec is not None else None

    def get_standalone_comments(self, section: str | None) -> list[str]:
        """Get the comments of a section that don't belong to a key, in order."""
        if (sec := self._get_section(section)) is None:
            return []
        return [entry.comment for entry in sec.entries if entry.is_comment and entry.comment]

    # ----------
    # mutation
    # ----------

    def ensure_section(self, section: str | None, comment: str | None = None) -> None:
        """Create a section if it doesn't exist and set its comment.

        Args:
            section (str | None): The section name.
            comment (str | None, optional): The comment for the section. Replaces the
                comment of an existing section. Defaults to None.

        Raises:
            InvalidParameterError: If the section name or comment are invalid.
        """
        self._check_section_name(section)
        self._check_comment(section, None, comment)
        self._ensure_section(section).comment = comment

    set_section = ensure_section

    def set_string(
        self,
        section: str | None,
        key: str,
        value: str | None,
        comment: str | None = None,
    ) -> str | None:
        """Set the value and comment of a key. Creates section and key if necessary.

        Args:
            section (str | None): The section name.
            key (str): The key.
            value (str | None): The new value.
            comment (str | None, optional): The new comment. Replaces the key's
                previous comment, thus None removes it. Defaults to None.

        Raises:
            InvalidParameterError: If any of the arguments is invalid. Nothing is
                changed in that case.

        Returns:
            str | None: The previous value or None if the key is new.
        """
        self._check_key(key)
        self._check_section_name(section)
        self._check_value(value)
        self._check_comment(section, key, comment)

        sec = self._ensure_section(section)
        if (entry := sec.get_entry(key)) is None:
            sec.entries.append(Entry(key, value, comment))
            return None

        previous = entry.value
        entry.value = value
        entry.comment = comment
        return previous

    def set_comment(self, section: str | None, key: str, comment: str | None) -> str | None:
        """Set the comment of a key without touching its value. Creates section and
        key (with value None) if necessary.

        A key without value is written as "key=" and reads back with the empty
        string as value, so get_string returns "" instead of the default after a
        save and reload.

        Args:
            section (str | None): The section name.
            key (str): The key.
            comment (str | None): The new comment.

        Raises:
            InvalidParameterError: If any of the arguments is invalid.

        Returns:
            str | None: The previous comment or None if the key is new.
        """
        self._check_key(key)
        self._check_section_name(section)
        self._check_comment(section, key, comment)

        sec = self._ensure_section(section)
        if (entry := sec.get_entry(key)) is None:
            sec.entries.append(Entry(key, None, comment))
            return None

        previous = entry.comment
        entry.comment = comment
        return previous

    def add_comment(
        self, section: str | None, comment: str, line_number: int | None = None
    ) -> str:
        """Add a standalone comment (one that doesn't belong to a key) to the end of a
        section. Creates the section if necessary.

        Args:
            section (str | None): The section name.
            comment (str): The comment including its marker.
            line_number (int | None, optional): Line the comment was read from, used
                for its synthetic key. If None, the entry's position is used.
                Defaults to None.

        Raises:
            InvalidParameterError: If section or comment are invalid (None included).

        Returns:
            str: The synthetic key the comment is stored under.
        """
        if comment is None:
            raise InvalidParameterError("A standalone comment can't be None.")
        self._check_section_name(section)
        self._check_comment(section, None, comment)

        sec = self._ensure_section(section)
        key = sec.next_comment_key(
            comment[0], len(sec.entries) + 1 if line_number is None else line_number
        )
        sec.entries.append(Entry(key, None, comment))
        return key

    def remove_key(self, section: str | None, key: str) -> None:
        """Remove a key (or standalone comment entry). Does nothing if it doesn't
        exist."""
        if (sec := self._get_section(section)) is None:
            return
        if (index := sec.index_of_key(key)) > -1:
            del sec.entries[index]

    def remove_section(self, section: str | None) -> None:
        """Remove a section with all its entries. Does nothing for the global section
        or a section that doesn't exist."""
        if (index := self.index_of_section(section)) > 0:
            del self._sections[index]

    # ----------
    # typed access
    # ----------

    def _get_typed[T](
        self,
        section: str | None,
        key: str,
        default: T,
        type_converter: TypeConverter[T],
    ) -> T:
        value = self.get_value(section, key)
        return default if value is None else type_converter(value)

    def _set_typed[T: ScalarTypes](
        self,
        section: str | None,
        key: str,
        value: T,
        comment: str | None,
        type_converter: TypeConverter[T],
    ) -> T | None:
        previous = self.set_string(section, key, to_ini_string(value), comment)
        return convert_optional(previous, type_converter)

    def get_string(self, section: str | None, key: str, default: str | None = None) -> str | None:
        """Get the value of a key or default if it doesn't exist."""
        return self._get_typed(section, key, default, DEFAULT_STRING_CONVERTER)

    def get_int(self, section: str | None, key: str, default: int) -> int:
        """Get the value of a key as int or default if it doesn't exist.

        Raises:
            NumericFormatError: If the stored value is not an integer.
        """
        return self._get_typed(section, key, default, DEFAULT_INT_CONVERTER)

    def get_float(self, section: str | None, key: str, default: float) -> float:
        """Get the value of a key as float or default if it doesn't exist.

        Raises:
            NumericFormatError: If the stored value is not a number.
        """
        return self._get_typed(section, key, default, DEFAULT_FLOAT_CONVERTER)

    def get_boolean(self, section: str | None, key: str, default: bool) -> bool:
        """Get the value of a key as bool or default if it doesn't exist.

        Raises:
            NumericFormatError: If the stored value is not one of the known boolean
                strings ("true", "false", "yes", "no", "1", "0", ...).
        """
        return self._get_typed(section, key, default, DEFAULT_BOOL_CONVERTER)

    # python has a single integer and a single float type
    get_long = get_int
    get_double = get_float

    def set_int(
        self, section: str | None, key: str, value: int, comment: str | None = None
    ) -> int | None:
        """Set a key to an int. Returns the previous value as int (or None).

        Raises:
            InvalidParameterError: If key, section or comment are invalid.
            NumericFormatError: If the previous value is not an integer (the new value
                is set nevertheless).
        """
        return self._set_typed(section, key, value, comment, DEFAULT_INT_CONVERTER)

    def set_float(
        self, section: str | None, key: str, value: float, comment: str | None = None
    ) -> float | None:
        """Set a key to a float. Returns the previous value as float (or None).

        Raises:
            InvalidParameterError: If key, section or comment are invalid.
            NumericFormatError: If the previous value is not a number (the new value
                is set nevertheless).
        """
        return self._set_typed(section, key, value, comment, DEFAULT_FLOAT_CONVERTER)

    def set_boolean(
        self, section: str | None, key: str, value: bool, comment: str | None = None
    ) -> bool | None:
        """Set a key to a bool ("true"/"false"). Returns the previous value as bool
        (or None).

        Raises:
            InvalidParameterError: If key, section or comment are invalid.
            NumericFormatError: If the previous value is not a boolean (the new value
                is set nevertheless).
        """
        return self._set_typed(section, key, value, comment, DEFAULT_BOOL_CONVERTER)

    set_long = set_int
    set_double = set_float

    # ----------
    # global section shortcuts
    # ----------

    get_string_g = global_variant(get_string)
    get_int_g = global_variant(get_int)
    get_long_g = global_variant(get_long)
    get_float_g = global_variant(get_float)
    get_double_g = global_variant(get_double)
    get_boolean_g = global_variant(get_boolean)
    get_comment_g = global_variant(get_comment)
    set_string_g = global_variant(set_string)
    set_int_g = global_variant(set_int)
    set_long_g = global_variant(set_long)
    set_float_g = global_variant(set_float)
    set_double_g = global_variant(set_double)
    set_boolean_g = global_variant(set_boolean)
    set_comment_g = global_variant(set_comment)

    # ----------
    # output
    # ----------

    def to_string(self, parameters: Parameters | None = None) -> str:
        """Render the document as ini text. See formatter.format_document."""
        return format_document(self, parameters)

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.get_sections())

    def __contains__(self, section: object) -> bool:
        return (section is None or isinstance(section, str)) and self.contains_section(
            section
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            + ", ".join(
                f"[{sec.name}]: {len(sec.entries)} entries" for sec in self._sections
            )
            + ")"
        )
