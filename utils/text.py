"""
Cell text normalisation.

Turns the raw markup between a cell's ``<text:p>`` and ``</text:p>`` into
the value written to the delimited output:

  1. strip any embedded markup (spans, links, soft line breaks ...)
  2. decode entity references
  3. escape / quote the value for the chosen separator and delimiter
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_MARKUP_RE = re.compile(r"<[^<>]+>")
_ENTITY_RE = re.compile(r"&(#x[0-9A-Fa-f]+|#[0-9]+|[A-Za-z]+);")

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
}


def strip_markup(value: str) -> str:
    """Remove ``<...>`` spans until none are left."""
    while True:
        value, removed = _MARKUP_RE.subn("", value)
        if not removed:
            return value


def _replace_entity(match: re.Match) -> str:
    name = match.group(1)
    if name.startswith("#"):
        code = int(name[2:], 16) if name.startswith("#x") else int(name[1:])
        try:
            return chr(code)
        except (ValueError, OverflowError):
            logger.warning("Invalid character reference &%s; kept as is", name)
            return match.group(0)

    replacement = _NAMED_ENTITIES.get(name)
    if replacement is None:
        replacement = name.upper()
        logger.warning(
            "No replacement for &%s; in %r, using %r",
            name,
            match.string,
            replacement,
        )
    return replacement


def decode_entities(value: str) -> str:
    """
    Decode ``&name;`` references in a single pass.

    Unknown names are replaced by the upper-cased name and reported.

    This is stricter XML than ExtractODS.pl, which the output otherwise
    follows.  That script only recognised lower-case names and decoded
    repeatedly, so ``&amp;lt;`` came out as ``<``; here it is ``&lt;``.
    Mixed-case names such as ``&Foo;`` count as unknown (``FOO``), and
    numeric references (``&#10;``, ``&#x41;``) are decoded.
    """
    if "&" not in value:
        return value
    return _ENTITY_RE.sub(_replace_entity, value)


def quote_value(value: str, separator: str, delimiter: str) -> str:
    """
    Double every *delimiter* in *value*, and wrap the result in delimiters
    when anything was doubled or the value contains *separator*.
    """
    escaped = value.replace(delimiter, delimiter * 2)
    if escaped != value or separator in value:
        return f"{delimiter}{escaped}{delimiter}"
    return escaped


def normalize_cell_text(raw: str, separator: str, delimiter: str) -> str:
    """Full pipeline from raw paragraph markup to an output field."""
    return quote_value(decode_entities(strip_markup(raw)), separator, delimiter)
