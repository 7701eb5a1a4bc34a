from typing import Literal

GLOBAL_SECTION = None
"""Name of the implicit section holding the entries before the first header."""
COMMENT_MARKERS = ("#", ";")
"""Characters that start a comment line."""
KEY_VALUE_DELIMITER = "="
PADDED_DELIMITER = f" {KEY_VALUE_DELIMITER} "
VALID_NEWLINES = Literal["\n", "\r\n"]
"""Line separators the formatter may write."""

# regex alternatives of the line grammar, tried in this order
SECTION_REGEX = r"^\s*\[(?P<section>[^\]]*)\]\s*$"
COMMENT_REGEX = r"^(?P<comment>[#;][ \t]+.*)$"
KEY_VALUE_REGEX = r"^(?P<key>[^#;=]+)=(?P<value>.*)$"
TAIL_REGEX = r"(?P<tail>.*)"
