from __future__ import (  # Used to recursively type annotate (e.g. `Rule` in `class Rule`)
    annotations,
)

import re
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import InvalidArgument
from .lib.util import freeze


class RK(Enum):
    """
    Rule Kind (RK): which evaluator rule a `Rule` describes

    The values are the names an evaluator sees in `Rule.to_dict()`
    """

    ONE_OF = "one_of"
    CHANGING = "changing"
    CONFIRM = "confirm"
    ATTRIBUTE_EQUALS = "attribute_equals"
    ATTRIBUTE_DOES_NOT_EQUAL = "attribute_does_not_equal"
    ATTRIBUTE_IN = "attribute_in"
    NEGATE = "negate"
    ACTION_IS = "action_is"
    STRING_LENGTH = "string_length"
    COMPARE = "compare"
    MATCH = "match"
    PRESENT = "present"
    ATTRIBUTES_PRESENT = "attributes_present"
    ARGUMENT_EQUALS = "argument_equals"
    ARGUMENT_DOES_NOT_EQUAL = "argument_does_not_equal"
    ARGUMENT_IN = "argument_in"


class Rule(Mapping):
    """
    A `Rule` is a rule descriptor: a kind (`RK`) plus an ordered set of named parameters.

    It doesn't evaluate anything. It's the value an evaluator receives, so it is:
    - Immutable (assignment raises, stored `list`s and `dict`s are frozen)
    - Compared structurally (same kind + same parameters)

    Parameters are read like a `dict`: `rule["attributes"]`, `rule.get("at_most")`

    `Rule`s can be combined into a `Where` clause using: `&`
    """

    _kind: RK
    _params: Mapping[str, Any]

    def __init__(self, kind: RK, params: Mapping[str, Any] | None = None, **kwargs: Any):
        if not isinstance(kind, RK):
            raise InvalidArgument("kind", "an `RK` rule kind", kind)
        merged = dict(params or {})
        merged.update(kwargs)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(
            self, "_params", MappingProxyType({k: freeze(v) for k, v in merged.items()})
        )

    @property
    def kind(self) -> RK:
        return self._kind

    @property
    def params(self) -> Mapping[str, Any]:
        return self._params

    def __getitem__(self, key: str) -> Any:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError("Rule doesn't allow updates.")

    def __delattr__(self, name: str):
        raise AttributeError("Rule doesn't allow deletion of attributes.")

    def __eq__(self, other: Rule | Any):
        if isinstance(other, Rule):
            return self._kind == other._kind and dict(self._params) == dict(other._params)
        return NotImplemented

    def __hash__(self):
        return hash((self._kind, _hashable(self._params)))

    def __repr__(self) -> str:
        params = " ".join(f"{k}={v!r}" for k, v in self._params.items())
        return f"<Rule {self._kind.value} {params}>"

    def to_dict(self) -> dict[str, Any]:
        """
        Plain `dict` version for an evaluator (or `json.dumps`). Nested `Rule`s are dumped too
        """
        return {"kind": self._kind.value, **{k: _dump(v) for k, v in self._params.items()}}

    def __and__(self, other: Rule | Where | Any):
        if isinstance(other, Where):
            return Where([self, *other])
        if isinstance(other, Rule):
            return Where([self, other])
        return NotImplemented


class Where(list):
    """
    A `Where` is a list of `Rule`s that all need to pass for a validation to apply (AND gate).

    Evaluating it is the evaluator's job, this only keeps the shape: only `Rule`s go in.
    """

    def __init__(self, items: Iterable[Rule] | Rule | None = None):
        super().__init__()
        if items is None:
            return
        if isinstance(items, Rule):
            items = [items]
        elif not isinstance(items, Iterable):
            raise InvalidArgument("where", "a `Rule` or list of `Rule`s", items)
        for it in items:
            self.append(it)

    def append(self, item: Rule):
        super().append(_check_rule(item))

    def insert(self, index, item: Rule):  # type: ignore
        super().insert(index, _check_rule(item))

    def extend(self, items: Iterable[Rule]):
        for it in items:
            self.append(it)

    def __iadd__(self, items: Iterable[Rule]):  # type: ignore
        self.extend(items)
        return self

    def __setitem__(self, index, item):
        if isinstance(index, slice):
            item = [_check_rule(it) for it in item]
        else:
            item = _check_rule(item)
        super().__setitem__(index, item)

    def __repr__(self) -> str:
        return f"<Where len={len(self)} {[r.kind.value for r in self]}>"

    def __and__(self, other: Rule | Where | Any):
        res = Where(self)
        match other:
            case Where():
                res.extend(other)
            case Rule():
                res.append(other)
            case _:
                return NotImplemented
        return res

    def to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self]


def where(*rules: Rule | Iterable[Rule]) -> Where:
    """
    Build a `Where` clause. Lists (or other `Where`s) given as arguments are flattened one level

    E.g. where(present("a"), [action_is("create"), changing("a")])  # 3 rules
    """
    res = Where()
    for r in rules:
        if isinstance(r, Rule):
            res.append(r)
        elif isinstance(r, Iterable) and not isinstance(r, (str, bytes)):
            res.extend(r)
        else:
            raise InvalidArgument("where", "a `Rule` or list of `Rule`s", r)
    return res


""" Helper Functions """


def _check_rule(item: Any) -> Rule:
    if not isinstance(item, Rule):
        raise InvalidArgument("where", "a `Rule`", item)
    return item


def _dump(v: Any) -> Any:
    """
    Converts a stored parameter into plain Python values (`list`, `dict`, `str`, ...)
    """
    match v:
        case Rule():
            return v.to_dict()
        case Mapping():
            return {k: _dump(it) for k, it in v.items()}
        case list() | tuple():
            return [_dump(it) for it in v]
        case re.Pattern():
            return v.pattern
        case _:
            return v


def _hashable(v: Any) -> Any:
    """
    Hashable stand-in for a stored parameter. Mappings hash by their items, regardless of order
    """
    match v:
        case Rule():
            return v
        case Mapping():
            return frozenset((k, _hashable(it)) for k, it in v.items())
        case list() | tuple():
            return tuple(_hashable(it) for it in v)
        case _:
            return v
