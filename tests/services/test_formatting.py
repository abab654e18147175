from __future__ import annotations

import io

from rich.console import Console

from duru.models.files import FileList
from duru.models.scan import ScanSnapshot, ScanStats
from duru.services.formatting import aligned_labels, format_bytes, name_lines, path_lines
from duru.services.report import render_report, render_summary
from tests.factories import make_list, make_root


def test_format_bytes_outputs() -> None:
    assert format_bytes(0) == "0 B"
    assert format_bytes(1) == "1 B"
    assert format_bytes(1023) == "1023 B"
    assert format_bytes(1024) == "1.0 KB"
    assert format_bytes(1536) == "1.5 KB"
    assert format_bytes(1024 * 1024) == "1.0 MB"
    assert format_bytes(5 * 1024**3) == "5.0 GB"


class TestAlignedLabels:
    def test_padding_width(self) -> None:
        assert aligned_labels(["a", "bbb", "cc"]) == ["a   ", "bbb ", "cc  "]

    def test_empty(self) -> None:
        assert aligned_labels([]) == []

    def test_counts_characters_not_bytes(self) -> None:
        assert aligned_labels(["é", "ab"]) == ["é  ", "ab "]


class TestLines:
    def test_name_lines_align_size_column(self) -> None:
        files = make_list(("short", 1), ("a-much-longer-name.bin", 2048), ("mid.txt", 10))
        lines = name_lines(files)
        columns = {line.index(format_bytes(f.size)) for line, f in zip(lines, files)}
        assert len(columns) == 1
        assert lines[0] == "short" + " " * 18 + "1 B"

    def test_path_lines_use_full_path(self) -> None:
        files = make_list(("a", 10), ("b", 20), path="/r")
        assert path_lines(files) == ["/r/a 10 B", "/r/b 20 B"]

    def test_order_preserved(self) -> None:
        files = make_list(("z", 1), ("a", 2))
        assert [line.split()[0] for line in name_lines(files)] == ["z", "a"]

    def test_empty_list(self) -> None:
        assert name_lines(FileList()) == []


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=40, color_system=None), buf


class TestRenderReport:
    def test_one_line_per_record(self) -> None:
        console, buf = _console()
        render_report(console, make_list(("b", 20), ("a", 10)))
        assert buf.getvalue() == "b 20 B\na 10 B\n"

    def test_full_path(self) -> None:
        console, buf = _console()
        render_report(console, make_list(("b", 20)), full_path=True)
        assert buf.getvalue() == "/r/b 20 B\n"

    def test_markup_in_names_is_literal(self) -> None:
        console, buf = _console()
        render_report(console, make_list(("[bold]x[/bold]", 1)))
        assert buf.getvalue() == "[bold]x[/bold] 1 B\n"

    def test_long_lines_not_wrapped(self) -> None:
        console, buf = _console()
        name = "n" * 80
        render_report(console, make_list((name, 1)))
        assert buf.getvalue() == f"{name} 1 B\n"

    def test_tab_in_name_written_verbatim(self) -> None:
        console, buf = _console()
        files = make_list(("a\tb", 1), ("abcdefgh", 2))
        render_report(console, files)
        lines = buf.getvalue().splitlines()
        assert lines == ["a\tb      1 B", "abcdefgh 2 B"]
        assert lines[0].index("1 B") == lines[1].index("2 B")

    def test_control_characters_kept(self) -> None:
        console, buf = _console()
        render_report(console, make_list(("x\x1by", 3)))
        assert buf.getvalue() == "x\x1by 3 B\n"

    def test_empty_prints_nothing(self) -> None:
        console, buf = _console()
        render_report(console, FileList())
        assert buf.getvalue() == ""


class TestRenderSummary:
    def test_panel_contents(self) -> None:
        console, buf = _console()
        snapshot = ScanSnapshot(root=make_root("/r", []), stats=ScanStats(files=2, directories=1))
        render_summary(console, snapshot, make_list(("a", 1024), ("b", 1024)))
        out = buf.getvalue()
        assert "Scan Summary" in out
        assert "Files: 2" in out
        assert "2.0 KB" in out
