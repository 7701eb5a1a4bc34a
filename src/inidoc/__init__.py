from .interface import IniFile, loads, dumps
from .document import IniDocument
from .args import Parameters
from .entities import Entry, Section
from .lines import LineKind, ParsedLine, classify_line
from .exceptions_warnings import (
    IniError,
    IniFormatError,
    InvalidParameterError,
    NumericFormatError,
    FileAlreadyLoadedError,
    FileNotLoadedError,
    IniStructureWarning,
    DuplicateEntityWarning,
    DuplicateSectionWarning,
    DuplicateKeyWarning,
)
from .globals import GLOBAL_SECTION, COMMENT_MARKERS
