"""
Utility functions that can be used across modules. Meant for field names and plain values
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..errors import InvalidArgument
from ..types import FieldName, FieldSet
from .types import FrozenList


def is_field_name(value: Any) -> bool:
    return isinstance(value, str) and value.isidentifier()


def check_field_name(value: Any, argument: str) -> FieldName:
    """
    Returns `value` if it's usable as a field name, otherwise raises naming `argument`
    """
    if not is_field_name(value):
        raise InvalidArgument(argument, "a field name (identifier `str`)", value)
    return value


def coerce_field_set(value: Any, argument: str = "attributes") -> FieldSet:
    """
    Wraps a single field name into a list. Lists and tuples are copied as-is (order kept)

    E.g. Given:    "name"               Returns:  ["name"]
         Given:    ("first", "last")    Returns:  ["first", "last"]
    """
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise InvalidArgument(argument, "a field name or list of field names", value)
    if not items:
        raise InvalidArgument(argument, "at least one field name", value)
    for it in items:
        if not is_field_name(it):
            raise InvalidArgument(argument, "a field name or list of field names", it)
    return items


def freeze(value: Any) -> Any:
    """
    Recursively converts `list`s (and `tuple`s) to `FrozenList` and `dict`s to a read-only
      `MappingProxyType`, so stored parameters can't change
    """
    if isinstance(value, (FrozenList, MappingProxyType)):
        return value
    if isinstance(value, dict):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return FrozenList(freeze(v) for v in value)
    return value


def merge_options(opts: Mapping[str, Any], **overrides: Any) -> dict[str, Any]:
    """
    Merge `overrides` on top of `opts`. Overridden keys are moved to the end
    """
    res = {k: v for k, v in opts.items() if k not in overrides}
    res.update(overrides)
    return res
