"""
TagScanner: rebuilds rows and columns from OpenDocument ``content.xml``.

This is a lexer over the handful of tags that describe spreadsheet
structure, not an XML parser.  Tags are found by plain ``<`` / ``>``
search starting at ``<office:spreadsheet``:

  table:name="X"     → a new sheet called X
  ...:table-row      → row boundary
  ...:table-cell     → cell boundary
  text:p             → cell text, up to the matching </text:p>

Empty rows and cells are often written once with a repeat count
(``table:number-rows-repeated`` / ``table:number-columns-repeated``).
They are kept as pending counters and only written out once real content
follows them, so trailing blank rows and columns never reach the output.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from dto.options import ExtractOptions
from dto.output import ExtractionResult, SheetResult
from extractors.constants import SPREADSHEET_MARKER
from extractors.errors import NoSpreadsheetError
from extractors.router import OutputRouter
from extractors.selection import SheetSelector
from utils.text import normalize_cell_text

logger = logging.getLogger(__name__)

_SHEET_NAME_RE = re.compile(r'table:name="([^"]+)"')
_ROW_RE = re.compile(r":table-row(?![\w-])")
_CELL_RE = re.compile(r":table-cell(?![\w-])")
_REPEATED_RE = re.compile(r'repeated="(\d+)"')
_PARAGRAPH_RE = re.compile(r"text:p(?:\s.*)?", re.DOTALL)

_PARAGRAPH_CLOSE = "</text:p>"


def _repeat_count(tag: str) -> Optional[int]:
    m = _REPEATED_RE.search(tag)
    return int(m.group(1)) if m else None


def _is_closing(tag: str) -> bool:
    return tag.startswith("/") or tag.endswith("/")


def _is_paragraph_open(tag: str) -> bool:
    return not tag.endswith("/") and _PARAGRAPH_RE.fullmatch(tag) is not None


class TagScanner:
    """
    Single forward pass over the document, writing delimited lines to an
    ``OutputRouter``.

    Usage::

        with OutputRouter(options.output) as router:
            result = TagScanner(options, router).scan(content)
    """

    def __init__(self, options: ExtractOptions, router: OutputRouter) -> None:
        self.options = options
        self.router = router
        self.selector = SheetSelector(options.sheets)

        self._taking = False
        self._line = ""
        self._pending_rows = 0
        self._pending_cells = 0
        self._sheet: Optional[SheetResult] = None

    # ------------------------------------------------------------------
    # Tag iteration
    # ------------------------------------------------------------------

    @staticmethod
    def next_tag(content: str, pos: int) -> Optional[tuple[str, int, int]]:
        """
        Return ``(inner_text, start, end)`` for the first tag at or after
        *pos*, where ``content[start] == "<"`` and ``content[end] == ">"``.
        ``None`` when no complete tag is left.
        """
        start = content.find("<", pos)
        if start < 0:
            return None
        end = content.find(">", start)
        if end < 0:
            return None
        return content[start + 1 : end], start, end

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def scan(self, content: str) -> ExtractionResult:
        pos = content.find(SPREADSHEET_MARKER)
        if pos < 0:
            raise NoSpreadsheetError("No <office:spreadsheet> element in document")

        result = ExtractionResult()

        while True:
            found = self.next_tag(content, pos)
            if found is None:
                break
            tag, _, end = found
            pos = end + 1

            m = _SHEET_NAME_RE.search(tag)
            if m:
                if (
                    result.sheets
                    and not self.router.per_sheet
                    and self.selector.is_default
                ):
                    break
                self._start_sheet(m.group(1), result)
                continue

            if not self._taking:
                continue

            if _is_closing(tag):
                if _ROW_RE.search(tag):
                    self._end_row(tag)
                elif _CELL_RE.search(tag):
                    self._pending_cells += _repeat_count(tag) or 1
            elif _ROW_RE.search(tag):
                self._pending_rows += (_repeat_count(tag) or 1) - 1
            elif _is_paragraph_open(tag):
                pos = self._read_paragraph(content, end)
                if pos < 0:
                    break

        return result

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _start_sheet(self, sheet_name: str, result: ExtractionResult) -> None:
        self._taking = self.selector.wants(sheet_name)
        if not self._taking:
            logger.debug("Sheet %r not selected", sheet_name)
            return

        path = self.router.open_sheet(sheet_name)
        logger.info(
            "Extracting sheet %s%s", sheet_name, f" to {path}" if path else ""
        )
        self._line = ""
        self._pending_rows = 0
        self._pending_cells = 0
        self._sheet = SheetResult(sheet_name=sheet_name, output_path=path)
        result.sheets.append(self._sheet)

    def _end_row(self, tag: str) -> None:
        if self._line:
            self.router.write("\n" * self._pending_rows + self._line + "\n")
            self._sheet.lines_written += self._pending_rows + 1
            self._pending_rows = 0
            self._line = ""
        else:
            self._pending_rows += 1
        self._pending_cells = 0
        self._pending_rows += (_repeat_count(tag) or 1) - 1

    def _read_paragraph(self, content: str, open_end: int) -> int:
        """
        Append the cell text whose opening ``<text:p>`` ends at
        *open_end* and return the position after its closing tag, or -1
        when the paragraph is never closed.
        """
        self._line += self.options.separator * self._pending_cells
        self._pending_cells = 0

        # Consecutive paragraphs of one cell form one value: keep going
        # while the tag right after a </text:p> opens another paragraph.
        search_from = open_end
        while True:
            close_at = content.find(_PARAGRAPH_CLOSE, search_from)
            if close_at < 0:
                logger.warning(
                    "Unterminated <text:p> at offset %d, stopping", open_end
                )
                return -1
            after = self.next_tag(content, close_at + 1)
            if after is None or not _is_paragraph_open(after[0]):
                break
            search_from = after[2]

        raw = content[open_end + 1 : close_at]
        self._line += normalize_cell_text(
            raw, self.options.separator, self.options.delimiter
        )
        return close_at + len(_PARAGRAPH_CLOSE)
