"""Tests for TableRenderer — header/row lines and all four display modes."""

import io

import pytest

from tabfit.config import DisplayMode, RenderConfig
from tabfit.exceptions import TooManyColumnsError
from tabfit.renderer import TableRenderer, center, fit
from tabfit.results import ResultColumn, ResultSet


def _result(labels, rows, row_id_columns=0):
    return ResultSet([ResultColumn(label) for label in labels], rows, row_id_columns)


def _render(mode, width, labels, rows, row_id_columns=0, null_value="NULL"):
    sink = io.StringIO()
    cfg = RenderConfig(mode=mode, null_value=null_value, width=width)
    count = TableRenderer(cfg, sink).render(_result(labels, rows, row_id_columns))
    return sink.getvalue(), count


class _CountingSink(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


class TestFit:
    def test_pads(self):
        assert fit("ab", 5) == "ab   "

    def test_cuts(self):
        assert fit("abcdef", 3) == "abc"

    def test_zero_width(self):
        assert fit("abc", 0) == ""


class TestCenter:
    def test_even_slack(self):
        assert center("ab", 6, "-") == "--ab--"

    def test_odd_slack_extra_on_left(self):
        assert center("ab", 5, "-") == "--ab-"

    def test_too_long_unchanged(self):
        assert center("abcdef", 3, "-") == "abcdef"


# ---------------------------------------------------------------------------
# header / row lines
# ---------------------------------------------------------------------------


class TestLines:
    def setup_method(self):
        self.renderer = TableRenderer(RenderConfig(null_value="?"), io.StringIO())

    def test_header_and_rule(self):
        header, rule = self.renderer.render_header([4, 3], ["id", "name"])
        assert header == "id  |nam"
        assert rule == "----+---"

    def test_row_skips_row_id_values(self):
        line = self.renderer.render_row([3, 5], [99, "1", "Alice"], skip=1)
        assert line == "1  |Alice"

    def test_row_null_and_cut(self):
        line = self.renderer.render_row([2, 3], [None, "abcdef"])
        assert line == "? |abc"


# ---------------------------------------------------------------------------
# FIXED
# ---------------------------------------------------------------------------


class TestFixedMode:
    def test_layout(self):
        out, count = _render(DisplayMode.FIXED, 20, ["id", "name"], [[1, "Alice"], [2, None]])
        assert count == 2
        assert out.splitlines() == [
            "id       |name      ",
            "---------+----------",
            "1        |Alice     ",
            "2        |NULL      ",
        ]

    def test_every_line_is_surface_width(self):
        out, _ = _render(
            DisplayMode.FIXED, 23, ["a", "b", "c"], [["x" * 40, "y", "z" * 9]]
        )
        assert all(len(line) == 23 for line in out.splitlines())

    def test_too_many_columns_renders_nothing(self):
        sink = io.StringIO()
        cfg = RenderConfig(mode=DisplayMode.FIXED, width=3)
        with pytest.raises(TooManyColumnsError):
            TableRenderer(cfg, sink).render(_result(["a", "b", "c"], [[1, 2, 3]]))
        assert sink.getvalue() == ""


# ---------------------------------------------------------------------------
# COLUMNS
# ---------------------------------------------------------------------------


class TestColumnsMode:
    def test_id_name_email(self):
        out, count = _render(
            DisplayMode.COLUMNS, 20, ["id", "name", "email"], [["1", "Al", "a@x.com"]]
        )
        lines = out.splitlines()
        assert count == 1
        assert lines == [
            "id|name|email       ",
            "--+----+------------",
            "1 |Al  |a@x.com     ",
        ]

    def test_cells_match_assigned_widths(self):
        rows = [["1", "a" * 30, None], ["22", "b", "c" * 50]]
        out, _ = _render(DisplayMode.COLUMNS, 30, ["id", "description", "notes"], rows)
        lines = out.splitlines()
        widths = [len(cell) for cell in lines[1].split("+")]
        assert sum(widths) + len(widths) - 1 == 30
        for line in lines:
            assert len(line) == 30
        for line in (lines[0], lines[2], lines[3]):
            assert [len(cell) for cell in line.split("|")] == widths

    def test_null_placeholder_counts_toward_width(self):
        out, _ = _render(DisplayMode.COLUMNS, 12, ["a", "b"], [[None, "x"]], null_value="<null>")
        assert out.splitlines()[2].startswith("<null>|")

    def test_row_id_columns_hidden(self):
        out, _ = _render(DisplayMode.COLUMNS, 10, ["v"], [[7, "x"]], row_id_columns=1)
        assert out.splitlines()[2] == "x         "

    def test_too_many_columns(self):
        with pytest.raises(TooManyColumnsError) as exc:
            _render(DisplayMode.COLUMNS, 3, ["a", "b", "c"], [])
        assert exc.value.mode == "COLUMNS"

    def test_too_many_columns_checked_before_reading_rows(self):
        pulled = []

        def rows():
            pulled.append(1)
            yield ["1", "2", "3"]

        cfg = RenderConfig(mode=DisplayMode.COLUMNS, width=3)
        with pytest.raises(TooManyColumnsError):
            TableRenderer(cfg, io.StringIO()).render(_result(["a", "b", "c"], rows()))
        assert pulled == []

    def test_header_only_when_no_rows(self):
        out, count = _render(DisplayMode.COLUMNS, 10, ["a", "b"], [])
        assert count == 0
        assert out.splitlines() == ["a|b       ", "-+--------"]


# ---------------------------------------------------------------------------
# ROW
# ---------------------------------------------------------------------------


class TestRowMode:
    def test_banner_and_fields(self):
        out, count = _render(DisplayMode.ROW, 20, ["id", "name"], [["1", "Alice"]])
        assert count == 1
        assert out.splitlines() == [
            "------- Row 1 ------",
            "id  : 1",
            "name: Alice",
        ]

    def test_values_never_truncated(self):
        long = "x" * 100
        out, _ = _render(DisplayMode.ROW, 20, ["v"], [[long], [None]])
        lines = out.splitlines()
        assert lines[1] == f"v: {long}"
        assert "Row 2" in lines[2]
        assert lines[3] == "v: NULL"

    def test_row_id_columns_hidden(self):
        out, _ = _render(DisplayMode.ROW, 12, ["a"], [[5, "z"]], row_id_columns=1)
        assert out.splitlines()[1] == "a: z"


# ---------------------------------------------------------------------------
# CLASSIC
# ---------------------------------------------------------------------------


class TestClassicMode:
    def test_delimited(self):
        out, count = _render(
            DisplayMode.CLASSIC, 5, ["id", "name"], [[1, "Alice Anderson"], [2, None]]
        )
        assert count == 2
        assert out == "id|name\n1|Alice Anderson\n2|NULL\n"

    def test_ignores_width_limit(self):
        out, _ = _render(DisplayMode.CLASSIC, 3, ["a", "b", "c"], [["1", "2", "3"]])
        assert out.splitlines()[1] == "1|2|3"


# ---------------------------------------------------------------------------
# general
# ---------------------------------------------------------------------------


class TestRender:
    @pytest.mark.parametrize("mode", list(DisplayMode))
    def test_no_columns_is_noop(self, mode):
        out, count = _render(mode, 3, [], [[1, 2]])
        assert out == ""
        assert count == 0

    @pytest.mark.parametrize("mode", list(DisplayMode))
    def test_flushes_once(self, mode):
        sink = _CountingSink()
        cfg = RenderConfig(mode=mode, width=30)
        TableRenderer(cfg, sink).render(_result(["a", "b"], [[1, 2], [3, 4]]))
        assert sink.flushes == 1

    def test_surface_width_read_per_call(self, monkeypatch):
        import os
        import shutil

        cfg = RenderConfig(mode=DisplayMode.FIXED)
        sink = io.StringIO()
        renderer = TableRenderer(cfg, sink)

        monkeypatch.setattr(shutil, "get_terminal_size", lambda fallback=None: os.terminal_size((10, 24)))
        renderer.render(_result(["a"], []))
        monkeypatch.setattr(shutil, "get_terminal_size", lambda fallback=None: os.terminal_size((16, 24)))
        renderer.render(_result(["a"], []))

        lines = sink.getvalue().splitlines()
        assert len(lines[0]) == 10
        assert len(lines[2]) == 16
