"""Line-based repair of playlist text before XML parsing.

Playlist exporters frequently write raw ``&`` or ``<`` characters into field
values (``<creator>Simon & Garfunkel</creator>``), which makes the whole
document unparseable. The sanitizer rewrites only single-line field elements
and leaves every other line untouched.
"""

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

# Track fields whose values are repaired
FIELD_NAMES = ("location", "creator", "title", "image", "album", "annotation")

# '&' that does not already start a predefined or numeric entity
_BARE_AMPERSAND = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#[xX][0-9A-Fa-f]+);)")


def _build_line_pattern(field_names: Iterable[str]) -> "re.Pattern":
    names = "|".join(re.escape(name) for name in field_names)
    # The closing tag may be missing its slash: <title>x<title>
    return re.compile(
        r"^(?P<indent>[ \t]+)<(?P<name>" + names + r")>(?P<value>.+?)</?(?P=name)>[ \t]*(?P<cr>\r?)$",
        re.MULTILINE,
    )


_LINE_TAG_PATTERN = _build_line_pattern(FIELD_NAMES)


def escape_field_value(value: str) -> str:
    """
    Escape a field value for use as XML character data.

    Existing entity references are preserved, so escaping an already escaped
    value returns it unchanged.

    Args:
        value: Raw field value

    Returns:
        Value safe to place between an opening and closing tag
    """
    value = _BARE_AMPERSAND.sub("&amp;", value)
    return (
        value.replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def sanitize_playlist_text(text: str, field_names: Iterable[str] = None) -> str:
    """
    Repair single-line track fields so the document can be parsed.

    Each line of the form ``<indent><field>value</field>`` (or with a closing
    tag lacking its slash) has its value escaped and its closing tag fixed.
    Trailing spaces after the closing tag are dropped. Lines that do not
    match are returned as they are.

    Args:
        text: Raw playlist text
        field_names: Field element names to repair (default: FIELD_NAMES)

    Returns:
        Text safe to hand to the XML parser
    """
    pattern = _LINE_TAG_PATTERN if field_names is None else _build_line_pattern(field_names)
    repaired = 0

    def _fix(match):
        nonlocal repaired
        value = match.group("value")
        escaped = escape_field_value(value)
        name = match.group("name")
        line = f"{match.group('indent')}<{name}>{escaped}</{name}>{match.group('cr')}"
        if line != match.group(0):
            repaired += 1
        return line

    result = pattern.sub(_fix, text)
    if repaired:
        logger.info(f"{repaired} Zeilen vor dem Parsen repariert")
    return result
