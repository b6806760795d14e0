"""
OutputRouter: owns the stream the scanner writes rows to.

The output template decides where rows go:
  - ""                  → the default stream (stdout), never closed here
  - "data.csv"          → one file, opened for the first taken sheet
  - "out_<SHEET>.csv"   → one file per taken sheet
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from extractors.constants import SHEET_PLACEHOLDER
from extractors.errors import OutputError

logger = logging.getLogger(__name__)


class OutputRouter:
    def __init__(self, template: str = "", default_stream: Optional[IO[str]] = None) -> None:
        self.template = template
        self._default = default_stream if default_stream is not None else sys.stdout
        self._owned: Optional[IO[str]] = None
        self._owned_path: Optional[str] = None
        self.current: IO[str] = self._default

    @property
    def per_sheet(self) -> bool:
        return SHEET_PLACEHOLDER in self.template

    def open_sheet(self, sheet_name: str) -> Optional[str]:
        """
        Point ``current`` at the stream for *sheet_name* and return its
        path (``None`` for the default stream).
        """
        if not self.template:
            self.current = self._default
            return None

        path = self.template.replace(SHEET_PLACEHOLDER, sheet_name)
        if self._owned is not None and path == self._owned_path:
            return path

        self.close()
        try:
            self._owned = open(path, "w", encoding="utf-8", newline="")
        except OSError as exc:
            raise OutputError(f"Can't write to {path}: {exc}") from exc
        self._owned_path = path
        self.current = self._owned
        logger.debug("Opened %s for sheet %r", path, sheet_name)
        return path

    def write(self, text: str) -> None:
        self.current.write(text)

    def close(self) -> None:
        if self._owned is not None:
            self._owned.close()
            self._owned = None
            self._owned_path = None
        self.current = self._default

    def __enter__(self) -> "OutputRouter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
