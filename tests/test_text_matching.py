import re

from quickadd.services.text_matching import (
    alternation,
    cleanup_whitespace,
    find_boundary_match,
    remove_span,
)


def test_alternation_escapes_and_deduplicates_phrases() -> None:
    pattern = re.compile(rf"^(?:{alternation(['every day', 'a.m.', 'every day', ''])})$")

    assert pattern.match("every   day")
    assert pattern.match("a.m.")
    assert not pattern.match("aXmX")


def test_remove_span_collapses_whitespace() -> None:
    assert remove_span("Call  mom today  please", 10, 15) == "Call mom please"
    assert cleanup_whitespace("  a \t b\n") == "a b"


def test_find_boundary_match_requires_whitespace_or_edges() -> None:
    assert find_boundary_match("Ship it Done", "done") == (8, 12)
    assert find_boundary_match("undone done", "done") == (7, 11)
    assert find_boundary_match("undone", "done") is None
    assert find_boundary_match("anything", "  ") is None
