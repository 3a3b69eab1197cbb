import re
from typing import Any


# Order matters: "&" must go first so later entities are not escaped twice.
_HTML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

_NEWLINE = re.compile(r"\r?\n")


def escape_html(unsafe: Any) -> str:
    """Neutralise markup-significant characters in a user supplied value.

    Args:
        unsafe: Value to escape, stringified first when it is not a string

    Returns:
        The value with &, <, >, " and ' replaced by HTML entities
    """
    text = str(unsafe)
    for char, entity in _HTML_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def nl2br(text: str) -> str:
    """Turn line breaks of already escaped text into <br/> tags."""
    return _NEWLINE.sub("<br/>", text)
