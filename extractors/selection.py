"""
Sheet selection.

With explicit patterns a sheet is taken when its name fully matches one of
them (``-`` and ``+`` are matched literally, other regex wildcards work),
or equals one of them.  Without patterns every sheet is taken except the
internal ranges the office suite stores next to real sheets.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from extractors.constants import EXCLUDED_SHEET_MARKERS

logger = logging.getLogger(__name__)

_LITERAL_CHARS_RE = re.compile(r"([-+])")


def _compile_pattern(pattern: str) -> Optional[re.Pattern]:
    escaped = _LITERAL_CHARS_RE.sub(r"\\\1", pattern)
    try:
        return re.compile(escaped)
    except re.error as exc:
        logger.warning(
            "Sheet pattern %r is not a valid regular expression (%s); "
            "matching it literally",
            pattern,
            exc,
        )
        return None


class SheetSelector:
    """Decides which sheets of a document are extracted."""

    def __init__(self, patterns: Sequence[str] = ()) -> None:
        self._patterns: List[Tuple[str, Optional[re.Pattern]]] = [
            (p, _compile_pattern(p)) for p in patterns if p != ""
        ]

    @property
    def is_default(self) -> bool:
        return not self._patterns

    def wants(self, sheet_name: str) -> bool:
        if self.is_default:
            excluded = any(m in sheet_name for m in EXCLUDED_SHEET_MARKERS)
            if excluded:
                logger.debug("Skipping internal sheet %r", sheet_name)
            return not excluded

        for pattern, compiled in self._patterns:
            if sheet_name == pattern or (
                compiled is not None and compiled.fullmatch(sheet_name)
            ):
                logger.debug("Sheet %r matches %r", sheet_name, pattern)
                return True
        return False
