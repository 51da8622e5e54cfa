"""Unit tests for autodefault.walker."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pytest

from autodefault.config import FillConfig
from autodefault.exceptions import (
    DefaultConversionError,
    InvalidInputError,
    UnsupportedFieldTypeError,
)
from autodefault.walker import FieldWalker


@dataclass
class Leaf:
    size: int = field(default=0, metadata={"default": "3"})
    broken: int = field(default=0, metadata={"default": ""})


@dataclass
class Branch:
    leaf: Leaf | None = field(default=None, metadata={"default": "dive"})


@dataclass
class Untyped:
    loose: Any = field(default=None, metadata={"default": "dive"})


@dataclass
class Tree:
    branch: Branch = field(default_factory=Branch, metadata={"default": "dive"})
    parent: Tree | None = field(default=None, metadata={"default": "dive"})


@dataclass
class BadLeaf:
    size: int = field(default=0, metadata={"default": "three"})


@dataclass
class HoldsBadLeaf:
    leaf: BadLeaf = field(default_factory=BadLeaf, metadata={"default": "dive"})


@dataclass
class Mismatched:
    leaf: Leaf | None = field(default=None, metadata={"default": "dive"})


def _walker() -> FieldWalker:
    return FieldWalker(FillConfig())


@pytest.mark.unit
class TestFieldWalker:
    def test_allocates_and_fills_nested(self) -> None:
        branch = Branch()
        _walker().walk(branch)
        assert branch.leaf == Leaf(size=3)

    def test_descends_by_value_shape(self) -> None:
        untyped = Untyped(loose=Leaf())
        _walker().walk(untyped)
        assert untyped.loose == Leaf(size=3)

    def test_empty_annotation_ignored(self) -> None:
        leaf = Leaf()
        _walker().walk(leaf)
        assert leaf.broken == 0

    def test_parent_path_prefixes_errors(self) -> None:
        with pytest.raises(DefaultConversionError) as exc_info:
            _walker().walk(BadLeaf(), "root.items")
        assert exc_info.value.path == "root.items.size"

    def test_nested_error_path(self) -> None:
        with pytest.raises(DefaultConversionError) as exc_info:
            _walker().walk(HoldsBadLeaf())
        assert exc_info.value.path == "leaf.size"
        assert exc_info.value.text == "three"

    def test_non_record_value_in_record_field(self) -> None:
        record = Mismatched()
        record.leaf = {}  # type: ignore[assignment]
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            _walker().walk(record)
        assert exc_info.value.path == "leaf"
        assert exc_info.value.context["reason"] == "not_a_record"

    def test_untyped_none_unsupported(self) -> None:
        with pytest.raises(UnsupportedFieldTypeError) as exc_info:
            _walker().walk(Untyped())
        assert exc_info.value.path == "loose"

    def test_walk_rejects_non_record(self) -> None:
        with pytest.raises(InvalidInputError):
            _walker().walk(["not", "a", "record"])

    def test_active_chain_empty_after_walk(self) -> None:
        walker = _walker()
        walker.walk(Tree())
        with pytest.raises(DefaultConversionError):
            walker.walk(BadLeaf())
        assert walker._active == []

    def test_recursive_type_not_allocated(self) -> None:
        tree = Tree()
        _walker().walk(tree)
        assert tree.parent is None
        assert tree.branch.leaf == Leaf(size=3)


@pytest.mark.unit
class TestWalkerLogging:
    def test_applied_events(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="autodefault")

        _walker().walk(Branch())
        _walker().walk(Untyped(loose=Leaf()))

        applied = [r for r in caplog.records if r.getMessage() == "default_applied"]
        paths = {(r.path, r.source) for r in applied}  # type: ignore[attr-defined]
        assert ("leaf", "allocated") in paths
        assert ("leaf.size", "scalar") in paths
        assert ("loose.size", "scalar") in paths

    def test_skipped_event(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="autodefault")

        _walker().walk(Tree())

        skipped = [r for r in caplog.records if r.getMessage() == "default_skipped"]
        assert [r.path for r in skipped] == ["parent"]  # type: ignore[attr-defined]
        assert skipped[0].reason == "recursive_record_type"  # type: ignore[attr-defined]
