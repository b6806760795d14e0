"""
Convert foreign spreadsheet formats (.xlsx, .xls, .csv ...) to .ods
with LibreOffice headless.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from extractors.constants import SOFFICE_PATH, SOFFICE_TIMEOUT
from extractors.errors import ConversionError

logger = logging.getLogger(__name__)

_SOFFICE_NAMES = ("soffice", "libreoffice")
_MAC_SOFFICE = "/Applications/LibreOffice.app/Contents/MacOS/soffice"


def find_soffice() -> Optional[str]:
    """Return the path to soffice / libreoffice, or None."""
    if SOFFICE_PATH and os.path.isfile(SOFFICE_PATH):
        return SOFFICE_PATH
    for name in _SOFFICE_NAMES:
        path = shutil.which(name)
        if path:
            return path
    if os.path.isfile(_MAC_SOFFICE):
        return _MAC_SOFFICE
    return None


def convert_to_ods(file_path: str, out_dir: str) -> str:
    """
    Convert *file_path* into *out_dir* and return the path of the new
    .ods file.
    """
    soffice = find_soffice()
    if soffice is None:
        raise ConversionError(
            "LibreOffice (soffice) not found; cannot convert " + file_path
        )

    cmd = [
        soffice,
        "--headless",
        "--convert-to",
        "ods",
        "--outdir",
        out_dir,
        file_path,
    ]
    logger.info("Converting %s to .ods", file_path)
    try:
        result = subprocess.run(cmd, capture_output=True, timeout=SOFFICE_TIMEOUT)
    except subprocess.TimeoutExpired as exc:
        raise ConversionError(
            f"LibreOffice conversion of {file_path} timed out"
        ) from exc
    except OSError as exc:
        raise ConversionError(f"Can't run {soffice}: {exc}") from exc

    if result.returncode != 0:
        raise ConversionError(
            "LibreOffice conversion failed: "
            + result.stderr.decode(errors="replace")[:500]
        )

    ods_path = os.path.join(out_dir, Path(file_path).stem + ".ods")
    if not os.path.isfile(ods_path):
        # Sometimes the output name differs
        for candidate in Path(out_dir).glob("*.ods"):
            ods_path = str(candidate)
            break
        else:
            raise ConversionError(f"No .ods output found for {file_path}")
    return ods_path
