"""Helpers for working with decoded JSON/TOML documents.

Use these at boundaries where untyped data enters (package manifests, the
project config file). They validate at runtime and narrow types statically.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of strings; None if missing or any item is not a str."""
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    if not all(isinstance(item, str) for item in items):
        return None
    return [cast(str, item) for item in items]


def map_leaves(tree: object, leaf: Callable[[str], str]) -> object:
    """Apply ``leaf`` to every string in a tree of mappings and lists.

    Mappings are rebuilt with the same keys in the same order, lists are
    rebuilt element-wise, and any other value (numbers, booleans, None) is
    returned untouched. The input is never mutated.
    """
    if isinstance(tree, str):
        return leaf(tree)
    if isinstance(tree, Mapping):
        mapping = cast(Mapping[object, object], tree)
        return {key: map_leaves(value, leaf) for key, value in mapping.items()}
    if isinstance(tree, list):
        return [map_leaves(item, leaf) for item in cast(list[object], tree)]
    return tree
