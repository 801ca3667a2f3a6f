import pytest

from gather.core.scraping.selector import (
    SelectionPolicy,
    pick_which_strings,
    select,
    unique_strings,
)

NAMES = ["First", "Second", "Third", "Last"]


@pytest.mark.parametrize(
    "which, expected",
    [
        ("first", ["First"]),
        ("FIRST", ["First"]),
        ("last", ["Last"]),
        ("LAST", ["Last"]),
        ("all", NAMES),
        ("ALL", NAMES),
        ("some", [""]),
    ],
)
def test_pick_which_strings(which, expected):
    assert pick_which_strings(NAMES, which) == expected


def test_unique_strings():
    assert unique_strings(["one", "two", "three"]) == ["one", "two", "three"]
    assert unique_strings(["one", "one", "one"]) == ["one"]


def test_select_sorts_before_picking():
    matches = ["b.gz", "c.gz", "a.gz", "b.gz"]
    assert select(matches, "all") == ["a.gz", "b.gz", "c.gz"]
    assert select(matches, "first") == ["a.gz"]
    assert select(matches, "last") == ["c.gz"]


def test_select_orders_by_codepoint():
    assert select(["b", "B", "a", "A"], "all") == ["A", "B", "a", "b"]


def test_select_is_case_insensitive_on_policy():
    matches = ["z", "y", "x", "y"]
    assert select(matches, "ALL") == select(matches, "all")
    assert select(matches, "First") == select(matches, "first")


def test_select_all_is_idempotent():
    matches = ["updates.2", "updates.1", "updates.2", "updates.3"]
    once = select(matches, "all")
    assert select(once, "all") == once
    assert len(once) == len(set(once))


def test_unknown_policy_gives_placeholder():
    assert select(NAMES, "some") == [""]
    assert select(NAMES, "") == [""]
    assert select(NAMES, None) == [""]


@pytest.mark.parametrize("which", ["all", "first", "last", "some", ""])
def test_empty_matches_select_nothing(which):
    assert select([], which) == []


def test_select_does_not_mutate_input():
    matches = ["b", "a"]
    select(matches, "all")
    assert matches == ["b", "a"]


def test_policy_parse():
    assert SelectionPolicy.parse("Last") is SelectionPolicy.LAST
    assert SelectionPolicy.parse("latest") is None
    assert SelectionPolicy.parse(None) is None
