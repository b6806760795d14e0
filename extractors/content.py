"""
Locate and read the markup payload of an OpenDocument spreadsheet.

``.ods`` files are zip containers holding the sheets in ``content.xml``;
flat ``.fods`` files are the XML document itself.
"""

from __future__ import annotations

import logging
import os
import zipfile

from extractors.constants import CONTENT_MEMBER
from extractors.errors import ContentNotFoundError, UnsupportedFormatError

logger = logging.getLogger(__name__)

_XML_DECLARATION = "<?xml version"


def _check_header(text: str, file_path: str) -> None:
    first_line = text.split("\n", 1)[0]
    if _XML_DECLARATION not in first_line:
        logger.warning("Header of %s content is not XML", file_path)


def _read_member(file_path: str) -> bytes:
    try:
        with zipfile.ZipFile(file_path) as archive:
            return archive.read(CONTENT_MEMBER)
    except KeyError as exc:
        raise UnsupportedFormatError(
            f"{file_path} has no {CONTENT_MEMBER}. Only Libre/OpenOffice "
            "spreadsheet files are supported; convert it to .ods first"
        ) from exc
    except (zipfile.BadZipFile, OSError) as exc:
        raise ContentNotFoundError(
            f"Can't extract {CONTENT_MEMBER} from {file_path}: {exc}"
        ) from exc


def read_content(file_path: str) -> str:
    """
    Return the spreadsheet markup of *file_path* as text.

    Raises ``ContentNotFoundError`` when the file cannot be read and
    ``UnsupportedFormatError`` when it is not an OpenDocument file.
    """
    if not os.path.isfile(file_path):
        raise ContentNotFoundError(f"File {file_path} not found")
    if not os.access(file_path, os.R_OK):
        raise ContentNotFoundError(f"No read access to {file_path}")

    if zipfile.is_zipfile(file_path):
        raw = _read_member(file_path)
    else:
        try:
            with open(file_path, "rb") as fh:
                raw = fh.read()
        except OSError as exc:
            raise ContentNotFoundError(f"Can't open {file_path}: {exc}") from exc
        if not raw.lstrip().startswith(b"<?xml"):
            raise UnsupportedFormatError(
                f"{file_path} probably has wrong format. Only Libre/OpenOffice "
                "spreadsheet files are supported; convert it to .ods first"
            )

    text = raw.decode("utf-8", errors="replace")
    _check_header(text, file_path)
    logger.debug("Read %d characters of markup from %s", len(text), file_path)
    return text
