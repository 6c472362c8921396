"""Shared deterministic documents for the explorer test-suite.

The two-class document mirrors a typical nested payload: each top-level
class holds three scalar fields, two nested classes (each with three fields
and an inner class of three fields) and a three-element array.

Per top-level class the flattened size is::

    1 (class) + 3 (fields) + 2 * (1 + 3 + 1 + 3) (nested classes) + 1 + 3 (array)
    = 24

so the fully expanded document displays 48 nodes.
"""

from __future__ import annotations

from typing import Any

import pytest


def _inner_class() -> dict[str, Any]:
    return {
        "innerClassField.firstField": "firstField",
        "innerClassField.secondField": "secondField",
        "innerClassField.thirdField": "thirdField",
    }


def _nested_class(prefix: str) -> dict[str, Any]:
    return {
        f"{prefix}.firstField": "firstField",
        f"{prefix}.secondField": "secondField",
        f"{prefix}.thirdField": "thirdField",
        f"{prefix}.innerClassField": _inner_class(),
    }


def _top_level_class(prefix: str) -> dict[str, Any]:
    return {
        f"{prefix}.firstField": "firstField",
        f"{prefix}.secondField": "secondField",
        f"{prefix}.thirdField": "thirdField",
        f"{prefix}.firstClassField": _nested_class("firstClassField"),
        f"{prefix}.secondClassField": _nested_class("secondClassField"),
        f"{prefix}.array": [0, 1, 2],
    }


def generate_two_class_document() -> dict[str, Any]:
    """Generate the 48-node two-class document."""
    return {
        "firstClass": _top_level_class("firstClass"),
        "secondClass": _top_level_class("secondClass"),
    }


@pytest.fixture
def two_class_document() -> dict[str, Any]:
    """A fresh copy of the 48-node two-class document."""
    return generate_two_class_document()


@pytest.fixture
def mixed_document() -> dict[str, Any]:
    """A small document exercising every value kind and nesting shape."""
    return {
        "name": "Alice",
        "age": 30,
        "active": True,
        "nickname": None,
        "address": {"city": "Paris", "zip": "75001"},
        "tags": ["admin", "ops"],
        "matrix": [[1, 2], [3]],
        "friends": [{"name": "Bob"}, {"name": "Carol"}],
    }
