"""
Tests for the extraction pipeline and command-line entry point.
"""
import importlib
import io

import dotenv
import pytest
from pydantic import ValidationError

import ods_extract
from dto.options import ExtractOptions
from extractors import constants
from ods_builder import cell, document, row, table, write_ods


@pytest.fixture
def workbook(make_ods):
    return make_ods(document(
        table("Project1", row(cell("a"), cell(repeated=2), cell("b"))),
        table("Project2", row(cell("c, d"))),
        table("Summary", row(cell("total"))),
    ))


class TestExtractOptions:

    def test_defaults(self):
        options = ExtractOptions()
        assert options.separator == "\t"
        assert options.delimiter == '"'
        assert options.sheets == []

    def test_delimiter_must_differ_from_separator(self):
        with pytest.raises(ValidationError):
            ExtractOptions(separator=";", delimiter=";")

    def test_blank_sheet_patterns_dropped(self):
        assert ExtractOptions(sheets=["", "Data"]).sheets == ["Data"]

    def test_dotenv_loaded_before_defaults_are_read(self, monkeypatch):
        def fake_load_dotenv(*args, **kwargs):
            monkeypatch.setenv("ODS_EXTRACT_SEPARATOR", ";")
            return True

        monkeypatch.setattr(dotenv, "load_dotenv", fake_load_dotenv)
        try:
            importlib.reload(constants)
            assert constants.DEFAULT_SEPARATOR == ";"
        finally:
            monkeypatch.undo()
            importlib.reload(constants)
        assert constants.DEFAULT_SEPARATOR == "\t"


class TestExtractSpreadsheet:

    def test_first_sheet_by_default(self, workbook):
        out = io.StringIO()
        result = ods_extract.extract_spreadsheet(workbook, ExtractOptions(), out)
        assert out.getvalue() == "a\t\t\tb\n"
        assert result.file_name == "book.ods"
        assert [s.sheet_name for s in result.sheets] == ["Project1"]

    def test_selected_sheets(self, workbook):
        out = io.StringIO()
        options = ExtractOptions(sheets=["Project.*"], separator=",")
        ods_extract.extract_spreadsheet(workbook, options, out)
        assert out.getvalue() == 'a,,,b\n"c, d"\n'

    def test_convert_used_for_foreign_formats(self, tmp_path, monkeypatch):
        converted = write_ods(tmp_path / "converted.ods", document(table("S", row(cell("x")))))
        seen = []

        def fake_convert(path, out_dir):
            seen.append(path)
            return converted

        monkeypatch.setattr(ods_extract, "convert_to_ods", fake_convert)
        out = io.StringIO()
        options = ExtractOptions(convert=True)
        ods_extract.extract_spreadsheet(str(tmp_path / "book.xlsx"), options, out)
        assert seen == [str(tmp_path / "book.xlsx")]
        assert out.getvalue() == "x\n"


class TestMain:

    def test_writes_stdout(self, workbook, capsys):
        assert ods_extract.main([workbook]) == 0
        assert capsys.readouterr().out == "a\t\t\tb\n"

    def test_per_sheet_files(self, workbook, tmp_path):
        template = str(tmp_path / "sheet_<SHEET>.txt")
        assert ods_extract.main(["-o", template, workbook]) == 0
        assert (tmp_path / "sheet_Project2.txt").read_text() == "c, d\n"
        assert (tmp_path / "sheet_Summary.txt").read_text() == "total\n"

    def test_same_separator_and_delimiter_rejected(self, workbook):
        assert ods_extract.main(["-S", ",", "-D", ",", workbook]) == 1

    def test_missing_file(self, tmp_path):
        assert ods_extract.main([str(tmp_path / "missing.ods")]) == 1

    def test_no_spreadsheet(self, make_ods):
        path = make_ods('<?xml version="1.0"?>\n<office:document-content/>')
        assert ods_extract.main([path]) == 1
