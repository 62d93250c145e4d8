import re
from pathlib import Path
from typing import Any, List, NamedTuple, Tuple

from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from ..builtins import BUILDERS
from ..errors import InvalidArgument, RuleBuildError
from ..rules import Rule

# Load the grammar from the .peg file
GRAMMAR_PATH = Path(__file__).parent / "rule.peg"
with open(GRAMMAR_PATH) as f:
    RULE_GRAMMAR = Grammar(f.read())


class _Keyword(NamedTuple):
    key: str
    value: Any


class RuleTransformer(NodeVisitor):
    """Transform the parse tree into `Rule`s by calling the named builders."""

    # Let builder errors through as-is (instead of wrapped in a `VisitationError`)
    unwrapped_exceptions = (RuleBuildError, TypeError)

    def visit_rule(self, node: Node, visited_children: List) -> Rule:
        [_, call, _] = visited_children
        return call

    def visit_call(self, node: Node, visited_children: List) -> Rule:
        """Process a builder call, e.g. `present([:a, :b], at_most: 1)`."""
        [name, _, _, _, arguments, _, _] = visited_children
        positional, keywords = arguments[0] if isinstance(arguments, list) else ([], {})
        builder = BUILDERS.get(name)
        if builder is None:
            raise InvalidArgument("name", f"one of {sorted(BUILDERS)}", name)
        return builder(*positional, **keywords)

    def visit_arguments(self, node: Node, visited_children: List) -> Tuple[List, dict]:
        """Split arguments into positional values and keyword options."""
        first, rest = visited_children
        args = [first]
        if isinstance(rest, list):
            for comma_arg in rest:
                args.append(comma_arg[-1])
        positional, keywords = [], {}
        for arg in args:
            if isinstance(arg, _Keyword):
                if arg.key in keywords:
                    raise InvalidArgument(arg.key, "an option given only once", arg.value)
                keywords[arg.key] = arg.value
            else:
                positional.append(arg)
        return positional, keywords

    def visit_argument(self, node: Node, visited_children: List) -> Any:
        [arg] = visited_children
        return arg

    def visit_keyword(self, node: Node, visited_children: List) -> _Keyword:
        [key, _, _, _, value] = visited_children
        return _Keyword(key, value)

    def visit_value(self, node: Node, visited_children: List) -> Any:
        [value] = visited_children
        return value

    def visit_list(self, node: Node, visited_children: List) -> List:
        [_, _, items, _, _] = visited_children
        return items[0] if isinstance(items, list) else []

    def visit_items(self, node: Node, visited_children: List) -> List:
        first, rest = visited_children
        res = [first]
        if isinstance(rest, list):
            for comma_value in rest:
                res.append(comma_value[-1])
        return res

    def visit_atom(self, node: Node, visited_children: List) -> str:
        return node.text[1:]

    def visit_string(self, node: Node, visited_children: List) -> str:
        """Strip the quotes and unescape `\\"` and `\\\\`. Other escapes (e.g. `\\d`) stay."""
        return re.sub(r'\\(["\\])', r"\1", node.text[1:-1])

    def visit_number(self, node: Node, visited_children: List) -> int | float:
        return float(node.text) if "." in node.text else int(node.text)

    def visit_boolean(self, node: Node, visited_children: List) -> bool:
        return node.text == "true"

    def visit_nil(self, node: Node, visited_children: List) -> None:
        return None

    def visit_key(self, node: Node, visited_children: List) -> str:
        """Option keys may end in `?` (e.g. `touching?`), which is dropped."""
        return node.text.rstrip("?")

    def visit_name(self, node: Node, visited_children: List) -> str:
        return node.text

    def generic_visit(self, node: Node, visited_children: List) -> Any:
        """Default visitor for nodes we don't need to transform."""
        return visited_children or node


def parse_rule(expr: str) -> Rule:
    """Parse a builder call into a `Rule`.

    Field names are written as atoms (`:name`), e.g.:
        absent([:first_name, :last_name], at_least: 1)
        negate(one_of(:status, [:closed, :finished]))
        changing(:comments, touching?: true)

    Strings are double-quoted. Inside one, only `\\"` and `\\\\` are escapes.

    Args:
        expr: The builder call to parse

    Returns:
        The `Rule` the named builder returns
    """
    tree = RULE_GRAMMAR.parse(expr)
    return RuleTransformer().visit(tree)
