"""Shared fixtures for pytest tests."""

import pathlib

import pytest

from gurutext import parsing, settings
from gurutext.diagnostics import DiagnosticsReporter, SourceLineCache
from gurutext.extractor import Extractor
from gurutext.matcher import call_arguments

TEST_FILENAME = "test.go"


def go_source(*lines: str) -> str:
    """Join Go source lines into file content ending with a newline."""
    return "\n".join(lines) + "\n"


def function_body(*statements: str) -> str:
    """Wrap tab-indented statements in a main function.

    The first statement is on line 3, with its first character in column 2.
    """
    return go_source(
        "package main",
        "func main() {",
        *(f"\t{statement}" for statement in statements),
        "}",
    )


@pytest.fixture(name="go_source")
def go_source_fixture():
    """Provide go_source to tests."""
    return go_source


@pytest.fixture(name="function_body")
def function_body_fixture():
    """Provide function_body to tests."""
    return function_body


@pytest.fixture
def reporter() -> DiagnosticsReporter:
    """Return a reporter whose cache never touches the filesystem."""
    return DiagnosticsReporter(SourceLineCache(strict=False))


@pytest.fixture
def extract_entries(reporter):
    """Return a function extracting positions from in-memory Go source."""

    def _extract(source: str, locations, **options):
        extraction = settings.ExtractionSettings(strict_sources=False, **options)
        extractor = Extractor(extraction, reporter)
        for line, column in locations:
            extractor.add(TEST_FILENAME, line, column)
        reporter.cache.seed(TEST_FILENAME, source)
        return extractor.extract_source(TEST_FILENAME, source.encode("utf-8"))

    return _extract


@pytest.fixture
def first_argument():
    """Return a function parsing a Go expression and returning its node."""

    def _first_argument(expression: str):
        source = function_body(f"A({expression})").encode("utf-8")
        tree = parsing.parse_source(TEST_FILENAME, source)
        call = next(
            node
            for node in parsing.iter_nodes(tree.root_node)
            if node.type == "call_expression"
        )
        __, args = call_arguments(call)
        return args[0]

    return _first_argument


@pytest.fixture
def write_go(tmp_path: pathlib.Path):
    """Return a function writing a Go file into tmp_path."""

    def _write(name: str, source: str) -> str:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return str(path)

    return _write
