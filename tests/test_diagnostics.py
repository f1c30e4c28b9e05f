"""Test the gurutext.diagnostics module."""

import logging
import pathlib

import pytest

from gurutext import diagnostics
from gurutext.diagnostics import DiagnosticsReporter, SourceLineCache
from gurutext.errors import SourceUnavailableError
from gurutext.positions import Location


@pytest.mark.parametrize(
    "line,column,expected",
    (
        ("\tA()", 2, "\t^"),
        ("\tA(foo())", 4, "\t  ^"),
        ("A(x)", 1, "^"),
        ("\t\tx := T(y)", 10, "\t\t       ^"),
        ("é(x)", 3, " ^"),
    ),
)
def test_caret_line(line, column, expected):
    """Test the caret points at the column, keeping tabs."""
    assert diagnostics.caret_line(line, column) == expected


@pytest.mark.parametrize(
    "source,location,factory,expected",
    (
        (
            "package main\nfunc main() {\n\tA()\n}",
            Location(3, 2),
            diagnostics.no_argument,
            "no argument in function call\ntest.go:3:2:\n\tA()\n\t^",
        ),
        (
            "package main\nfunc main() {\n\tA(foo())\n}",
            Location(3, 4),
            lambda name, loc: diagnostics.not_a_literal(name, loc, "call_expression"),
            "argument not a string literal (call_expression)\n"
            "test.go:3:4:\n"
            "\tA(foo())\n"
            "\t  ^",
        ),
        (
            "package main\nfunc main() {\n\tA(42)\n}",
            Location(3, 4),
            lambda name, loc: diagnostics.unhandled_expression(
                name, loc, "int_literal"
            ),
            "unhandled argument expression (int_literal)\n"
            "test.go:3:4:\n"
            "\tA(42)\n"
            "\t  ^",
        ),
    ),
)
def test_render(source, location, factory, expected):
    """Test diagnostics render message, position, source line and caret."""
    cache = SourceLineCache()
    cache.seed("test.go", source)
    reporter = DiagnosticsReporter(cache)
    assert reporter.render(factory("test.go", location)) == expected


def test_report_logs_warning(caplog):
    """Test reported diagnostics are logged as warnings and remembered."""
    cache = SourceLineCache()
    cache.seed("test.go", "package main\nfunc main() {\n\tA()\n}")
    reporter = DiagnosticsReporter(cache)
    diagnostic = diagnostics.no_argument("test.go", Location(3, 2))
    with caplog.at_level(logging.WARNING):
        reporter.report(diagnostic)
    assert reporter.reported == [diagnostic]
    assert [record.levelname for record in caplog.records] == ["WARNING"]
    assert caplog.messages == [
        "no argument in function call\ntest.go:3:2:\n\tA()\n\t^"
    ]


def test_report_format_matches_warning_block(caplog):
    """Test the configured log format produces the WARNING block."""
    cache = SourceLineCache()
    cache.seed("test_0.go", "package main\nfunc main() {\n\tA(`hello`)\n\tA(foo)\n}")
    reporter = DiagnosticsReporter(cache)
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    with caplog.at_level(logging.WARNING):
        reporter.report(
            diagnostics.not_a_literal("test_0.go", Location(4, 4), "identifier")
        )
    assert formatter.format(caplog.records[0]) == (
        "WARNING: argument not a string literal (identifier)\n"
        "test_0.go:4:4:\n"
        "\tA(foo)\n"
        "\t  ^"
    )


def test_lenient_cache_skips_missing_files(tmp_path: pathlib.Path):
    """Test unreadable files only drop the source line in lenient mode."""
    missing = str(tmp_path / "missing.go")
    reporter = DiagnosticsReporter(SourceLineCache(strict=False))
    text = reporter.render(diagnostics.no_argument(missing, Location(3, 2)))
    assert text == f"no argument in function call\n{missing}:3:2:"


def test_strict_cache_raises_for_missing_files(tmp_path: pathlib.Path):
    """Test unreadable files are fatal in strict mode."""
    cache = SourceLineCache(strict=True)
    with pytest.raises(SourceUnavailableError):
        cache.line(str(tmp_path / "missing.go"), 1)


def test_cache_reads_file_once(tmp_path: pathlib.Path, mocker):
    """Test files are read lazily and only once."""
    path = tmp_path / "a.go"
    path.write_text("package main\n\tA()\n", encoding="utf-8")
    cache = SourceLineCache()
    read_bytes = mocker.spy(pathlib.Path, "read_bytes")

    assert str(path) not in cache
    assert cache.line(str(path), 2) == "\tA()"
    assert cache.line(str(path), 1) == "package main"
    assert cache.line(str(path), 40) is None
    assert cache.line(str(path), 0) is None
    assert read_bytes.call_count == 1
    assert str(path) in cache
