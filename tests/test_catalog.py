"""Test catalog entries and their message template text."""

import pytest

from gurutext.catalog import Catalog, Entry, as_gettext
from gurutext.positions import Location, MatchState


def found(filename, line, msgid, comment=None):
    """Build a found entry."""
    return Entry(
        filename, Location(line, 3), MatchState.FOUND, msgid=msgid, comment=comment
    )


def test_as_gettext():
    """Test the reference, msgid and msgstr lines."""
    entry = found("test_0.go", 3, '"hello"')
    assert as_gettext(entry) == '#: test_0.go:3:3\nmsgid "hello"\nmsgstr ""\n'
    assert entry.as_gettext() == as_gettext(entry)


def test_as_gettext_with_comment():
    """Test translator comments come first and blank lines are bare markers."""
    entry = found("a.go", 7, '"hi"', comment=("TRANSLATORS: greeting", "", "x", ""))
    assert entry.as_gettext() == (
        "#. TRANSLATORS: greeting\n"
        "#.\n"
        "#. x\n"
        "#: a.go:7:3\n"
        'msgid "hi"\n'
        'msgstr ""\n'
    )


@pytest.mark.parametrize(
    "state", (MatchState.NOT_FOUND, MatchState.IGNORED, MatchState.PENDING)
)
def test_unresolved_entries_have_no_text(state):
    """Test only found entries carry a msgid and can be rendered."""
    entry = Entry("a.go", Location(1, 1), state)
    assert not entry.is_found
    with pytest.raises(ValueError):
        entry.as_gettext()
    with pytest.raises(ValueError):
        Entry("a.go", Location(1, 1), state, msgid='"x"')


def test_found_entry_needs_msgid():
    """Test a found entry without text is rejected."""
    with pytest.raises(ValueError):
        Entry("a.go", Location(1, 1), MatchState.FOUND)


@pytest.fixture
def catalog():
    """Return a catalog spanning two files."""
    catalog = Catalog()
    catalog.add(
        "b.go",
        [
            found("b.go", 3, '"zebra"'),
            Entry("b.go", Location(4, 3), MatchState.NOT_FOUND),
            found("b.go", 5, '"apple"'),
        ],
    )
    catalog.add(
        "a.go",
        [
            found("a.go", 9, '"mango"'),
            Entry("a.go", Location(10, 3), MatchState.IGNORED),
            found("a.go", 11, '"Apple"'),
        ],
    )
    return catalog


def test_catalog_traversal(catalog):
    """Test traversal keeps discovery order and skips unresolved entries."""
    assert catalog.files() == ["b.go", "a.go"]
    assert [entry.msgid for entry in catalog] == [
        '"zebra"',
        '"apple"',
        '"mango"',
        '"Apple"',
    ]
    assert len(catalog) == 4
    assert len(catalog.entries()) == 6
    assert [entry.state for entry in catalog.entries("a.go")] == [
        MatchState.FOUND,
        MatchState.IGNORED,
        MatchState.FOUND,
    ]
    assert catalog.entries("missing.go") == []


def test_catalog_sorted(catalog):
    """Test the sorted view orders by msgid without changing file order."""
    assert [entry.msgid for entry in catalog.sorted()] == [
        '"Apple"',
        '"apple"',
        '"mango"',
        '"zebra"',
    ]
    assert catalog.entries("b.go")[0].msgid == '"zebra"'


def test_sort_is_stable():
    """Test entries with the same msgid keep their relative order."""
    catalog = Catalog()
    catalog.add("a.go", [found("a.go", 1, '"same"'), found("a.go", 2, '"same"')])
    catalog.add("b.go", [found("b.go", 1, '"same"')])
    assert [entry.position for entry in catalog.sorted()] == [
        "a.go:1:3",
        "a.go:2:3",
        "b.go:1:3",
    ]


def test_render(catalog):
    """Test every entry is followed by a blank line."""
    rendered = catalog.render()
    blocks = rendered.split("\n\n")
    assert blocks[-1] == ""
    assert blocks[0] == '#: b.go:3:3\nmsgid "zebra"\nmsgstr ""'
    assert len(blocks) == 5


def test_render_sorted(catalog):
    """Test sorted rendering emits msgids in non-decreasing order."""
    msgids = [
        line[len("msgid ") :]
        for line in catalog.render(sort=True).splitlines()
        if line.startswith("msgid ")
    ]
    assert msgids == sorted(msgids)
    assert len(msgids) == 4


def test_render_empty():
    """Test an empty catalog renders as nothing."""
    assert Catalog().render() == ""
