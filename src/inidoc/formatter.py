"""Rendering of an IniDocument as ini text."""

from typing import TYPE_CHECKING
from .args import Parameters

if TYPE_CHECKING:
    from .document import IniDocument


def format_document(document: "IniDocument", parameters: Parameters | None = None) -> str:
    """Render a document as ini text.

    Sections are written in document order, entries in section order. The global
    section has no header. Every other section is separated from the previous
    content by an empty line and written as (comment,) "[name]", empty line and its
    entries. Comments are written on their own line right above their section or key,
    standalone comments are followed by an empty line.

    Args:
        document (IniDocument): The document to render.
        parameters (Parameters | None, optional): Parameters for writing (padded_equals,
            newline). If None, will use default Parameters. Defaults to None.

    Returns:
        str: The ini text, ending with a line separator unless the document is empty.
    """
    if parameters is None:
        parameters = Parameters()

    lines: list[str] = []
    for section in document.iter_sections():
        section_lines = section.to_lines(parameters.padded_equals)
        if section.name is not None and lines and lines[-1] != "":
            lines.append("")
        lines.extend(section_lines)

    if not lines:
        return ""
    return parameters.newline.join(lines) + parameters.newline
