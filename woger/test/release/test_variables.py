"""Tests for woger.release.variables module."""

from __future__ import annotations

import pytest

from woger.core.result import Err, Ok
from woger.release.variables import VARIABLES, VariableStore, help_for, parse_assignment


class TestParseAssignment:
    def test_splits_on_first_equals(self) -> None:
        assert parse_assignment("home=https://x.org/?a=b") == Ok(("home", "https://x.org/?a=b"))

    def test_empty_value(self) -> None:
        assert parse_assignment("notes=") == Ok(("notes", ""))

    def test_bare_name_rejected(self) -> None:
        result = parse_assignment("notes")
        assert isinstance(result, Err)
        assert result.error.kind == "usage"
        assert "name=value" in result.error.message

    @pytest.mark.parametrize("arg", ["=1.0", "my-var=1", "2x=y"])
    def test_bad_names_rejected(self, arg: str) -> None:
        result = parse_assignment(arg)
        assert isinstance(result, Err)
        assert result.error.kind == "usage"


class TestFromAssignments:
    def test_unknown_names_are_kept(self) -> None:
        result = VariableStore.from_assignments(["package=foo", "tagline=hi"])
        assert isinstance(result, Ok)
        assert result.value.get("tagline") == "hi"

    def test_last_write_wins(self) -> None:
        result = VariableStore.from_assignments(["version=1.0", "version=1.1"])
        assert isinstance(result, Ok)
        assert result.value.get("version") == "1.1"

    def test_order_independent_for_distinct_names(self) -> None:
        a = VariableStore.from_assignments(["package=foo", "version=1.0"])
        b = VariableStore.from_assignments(["version=1.0", "package=foo"])
        assert isinstance(a, Ok) and isinstance(b, Ok)
        assert a.value.as_dict() == b.value.as_dict()

    def test_first_bad_argument_fails(self) -> None:
        result = VariableStore.from_assignments(["package=foo", "oops"])
        assert isinstance(result, Err)
        assert "'oops'" in result.error.message


class TestVariableStore:
    def test_empty_means_absent(self) -> None:
        store = VariableStore({"notes": ""})
        assert not store.has("notes")
        assert store.get("notes") is None
        assert store.get("notes", "fallback") == "fallback"
        assert "notes" not in store
        assert store.names() == frozenset()

    def test_set_and_get(self) -> None:
        store = VariableStore()
        store.set("package", "foo")
        assert store.has("package")
        assert "package" in store
        assert list(store) == ["package"]

    def test_set_default_only_fills_absent(self) -> None:
        store = VariableStore({"version": "1.0", "notes": ""})
        assert not store.set_default("version", "2.0")
        assert store.set_default("notes", "release-notes")
        assert store.get("version") == "1.0"
        assert store.get("notes") == "release-notes"

    def test_vocabulary_defaults(self) -> None:
        store = VariableStore({"dist_type": "zip"})
        store.apply_vocabulary_defaults()
        assert store.get("dist_type") == "zip"
        assert store.get("release_type") == "stable"
        assert not store.has("notes")


def test_vocabulary_help() -> None:
    assert "notes" in VARIABLES
    assert VARIABLES["notes"].interactive
    assert help_for("package") == "package name"
    assert help_for("tagline") == "(undocumented)"
