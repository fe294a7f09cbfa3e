"""Tests for merging submitted tags into a user's tag list."""

from hypothesis import given, settings
from hypothesis import strategies as st

from utils.tag_set import merge_tags

tag_lists = st.lists(st.text(max_size=5), max_size=10)


def test_merge_keeps_first_seen_order():
    assert merge_tags(["a", "b"], ["b", "c", "a", "d"]) == ["a", "b", "c", "d"]


def test_merge_drops_duplicates_within_submission():
    assert merge_tags([], ["work", "work", "home", "work"]) == ["work", "home"]


def test_merge_is_case_sensitive():
    assert merge_tags(["Work"], ["work"]) == ["Work", "work"]


def test_merge_does_not_mutate_inputs():
    existing = ["a"]
    new = ["b"]
    merge_tags(existing, new)
    assert existing == ["a"]
    assert new == ["b"]


def test_merge_with_empty_submission():
    assert merge_tags(["a", "b"], []) == ["a", "b"]


@given(tag_lists, tag_lists)
@settings(max_examples=200)
def test_merge_is_idempotent(existing, new):
    once = merge_tags(existing, new)
    assert merge_tags(once, new) == once


@given(st.lists(st.text(max_size=5), max_size=10, unique=True), tag_lists)
@settings(max_examples=200)
def test_merge_is_a_duplicate_free_superset(existing, new):
    merged = merge_tags(existing, new)
    assert merged[:len(existing)] == existing
    assert len(merged) == len(set(merged))
    assert set(merged) == set(existing) | set(new)
