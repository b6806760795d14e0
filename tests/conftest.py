"""
Pytest configuration for the ODS extractor.
"""
import io
import sys
from pathlib import Path

import pytest

# Project root (ods_extract.py, dto/, extractors/, utils/) on the path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from ods_builder import write_ods  # noqa: E402

from dto.options import ExtractOptions  # noqa: E402
from extractors.router import OutputRouter  # noqa: E402
from extractors.scanner import TagScanner  # noqa: E402


@pytest.fixture
def make_ods(tmp_path):
    """Write content.xml text into a fresh .ods archive and return its path."""
    def _make(content_xml, name="book.ods"):
        return write_ods(tmp_path / name, content_xml)
    return _make


@pytest.fixture
def run_scan():
    """Scan a document with the given options and return (stdout text, result)."""
    def _run(content_xml, **option_kwargs):
        options = ExtractOptions(**option_kwargs)
        out = io.StringIO()
        with OutputRouter(options.output, out) as router:
            result = TagScanner(options, router).scan(content_xml)
        return out.getvalue(), result
    return _run
