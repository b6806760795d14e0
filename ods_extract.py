"""
ODS extractor: CLI entry point.

Usage:
    python ods_extract.py [-v] [-o OUTFILE] [-S SEP] [-D DEL] [--convert]
                          <spreadsheet> [SHEET ...]

Writes the cell values of a Libre/OpenOffice spreadsheet as delimited
text, one row per line.  If sheet names are given, only those sheets are
extracted (names may use regex wildcards, e.g. "Project.*").  Otherwise
only the first sheet is extracted or, when the output path contains
<SHEET>, every sheet goes to its own file.
"""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
from pathlib import Path
from typing import IO, List, Optional

from pydantic import ValidationError

from dto.options import ExtractOptions
from dto.output import ExtractionResult
from extractors.constants import DEFAULT_DELIMITER, DEFAULT_SEPARATOR, NATIVE_SUFFIXES
from extractors.content import read_content
from extractors.convert import convert_to_ods
from extractors.errors import ExtractionError
from extractors.router import OutputRouter
from extractors.scanner import TagScanner

__version__ = "1.0"

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


# -------------------------------------------------------------------
# Main pipeline
# -------------------------------------------------------------------


def _load_content(file_path: str, options: ExtractOptions) -> str:
    if not options.convert or Path(file_path).suffix.lower() in NATIVE_SUFFIXES:
        return read_content(file_path)

    with tempfile.TemporaryDirectory() as tmp_dir:
        ods_path = convert_to_ods(file_path, tmp_dir)
        return read_content(ods_path)


def extract_spreadsheet(
    file_path: str,
    options: ExtractOptions,
    stdout: Optional[IO[str]] = None,
) -> ExtractionResult:
    """
    Extract the selected sheets of *file_path* and return a summary.

    Rows go to *stdout* (default ``sys.stdout``) unless ``options.output``
    names a file.
    """
    logger.info("Loading spreadsheet: %s", file_path)
    content = _load_content(file_path, options)

    with OutputRouter(options.output, stdout) as router:
        result = TagScanner(options, router).scan(content)

    result.file_name = Path(file_path).name
    for sheet in result.sheets:
        logger.info("  -> %s: %d line(s)", sheet.sheet_name, sheet.lines_written)
    if not result.sheets:
        logger.warning("No sheet of %s matched the selection", file_path)
    return result


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract sheet(s) from a Libre/OpenOffice spreadsheet "
        "file to csv format.",
    )
    parser.add_argument(
        "spreadsheet",
        help="Path to the .ods file to extract",
    )
    parser.add_argument(
        "sheets",
        nargs="*",
        help="Sheet names to extract; regex wildcards allowed "
        "(default: first sheet, or all sheets with <SHEET> in --output)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="",
        help="Output file (default: stdout). May contain <SHEET> as "
        "placeholder for the sheet name",
    )
    parser.add_argument(
        "-S",
        "--separator",
        default=DEFAULT_SEPARATOR,
        help="Separator (default: horizontal tab)",
    )
    parser.add_argument(
        "-D",
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="Delimiter used when a value contains the separator "
        "(default: '\"')",
    )
    parser.add_argument(
        "--convert",
        action="store_true",
        help="Convert other formats (.xlsx, .xls ...) with LibreOffice first",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Verbose; repeat for debug output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT)

    try:
        options = ExtractOptions(
            output=args.output,
            separator=args.separator,
            delimiter=args.delimiter,
            sheets=args.sheets,
            verbose=args.verbose,
            convert=args.convert,
        )
    except ValidationError as exc:
        for error in exc.errors():
            logger.error("Invalid options: %s", error["msg"])
        return 1

    try:
        extract_spreadsheet(args.spreadsheet, options)
    except ExtractionError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
