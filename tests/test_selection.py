"""
Tests for sheet selection and output routing.
"""
import io

import pytest

from extractors.errors import OutputError
from extractors.router import OutputRouter
from extractors.selection import SheetSelector


class TestSheetSelector:

    def test_default_takes_normal_sheets(self):
        selector = SheetSelector([])
        assert selector.is_default
        assert selector.wants("Sheet1")

    @pytest.mark.parametrize(
        "name",
        ["__Anonymous_Sheet__", "__Anonymous_Sheet_DB__0", "Excel_BuiltIn__FilterDatabase", "_xlfn_ISFORMULA"],
    )
    def test_default_skips_internal_sheets(self, name):
        assert not SheetSelector().wants(name)

    def test_blank_patterns_mean_default(self):
        assert SheetSelector([""]).is_default

    def test_wildcard_pattern(self):
        selector = SheetSelector(["Project.*"])
        assert not selector.is_default
        assert selector.wants("Project1")
        assert selector.wants("Project2")
        assert not selector.wants("Summary")

    def test_pattern_is_anchored(self):
        selector = SheetSelector(["Data"])
        assert selector.wants("Data")
        assert not selector.wants("Data 2")
        assert not selector.wants("Raw Data")

    def test_minus_and_plus_are_literal(self):
        selector = SheetSelector(["Q1-Q2+"])
        assert selector.wants("Q1-Q2+")
        assert not selector.wants("Q1-Q22")

    def test_invalid_regex_matches_literally(self):
        selector = SheetSelector(["Costs (2019"])
        assert selector.wants("Costs (2019")
        assert not selector.wants("Costs 2019")

    def test_explicit_pattern_can_take_internal_sheet(self):
        assert SheetSelector(["__Anonymous.*"]).wants("__Anonymous_Sheet__")


class TestOutputRouter:

    def test_empty_template_uses_default_stream(self):
        out = io.StringIO()
        with OutputRouter("", out) as router:
            assert router.open_sheet("Sheet1") is None
            router.write("x\n")
        assert out.getvalue() == "x\n"
        assert not out.closed

    def test_placeholder_opens_one_file_per_sheet(self, tmp_path):
        template = str(tmp_path / "out_<SHEET>.csv")
        with OutputRouter(template) as router:
            assert router.per_sheet
            router.open_sheet("A")
            router.write("a\n")
            router.open_sheet("B")
            router.write("b\n")
        assert (tmp_path / "out_A.csv").read_text() == "a\n"
        assert (tmp_path / "out_B.csv").read_text() == "b\n"

    def test_single_file_collects_all_sheets(self, tmp_path):
        target = tmp_path / "all.csv"
        with OutputRouter(str(target)) as router:
            assert not router.per_sheet
            router.open_sheet("A")
            router.write("a\n")
            router.open_sheet("B")
            router.write("b\n")
        assert target.read_text() == "a\nb\n"

    def test_unwritable_destination(self, tmp_path):
        router = OutputRouter(str(tmp_path / "missing" / "<SHEET>.csv"))
        with pytest.raises(OutputError):
            router.open_sheet("A")
