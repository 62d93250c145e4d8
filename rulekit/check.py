from collections.abc import Iterable

from result import Err, Ok

from .rules import RK, Rule

# Parameters each rule kind needs before an evaluator can run it
REQUIRED_PARAMS: dict[RK, tuple[str, ...]] = {
    RK.ONE_OF: ("field", "values"),
    RK.CHANGING: ("field",),
    RK.CONFIRM: ("field", "confirmation"),
    RK.ATTRIBUTE_EQUALS: ("attribute", "value"),
    RK.ATTRIBUTE_DOES_NOT_EQUAL: ("attribute", "value"),
    RK.ATTRIBUTE_IN: ("attribute", "list"),
    RK.NEGATE: ("validation",),
    RK.ACTION_IS: ("action",),
    RK.STRING_LENGTH: ("attribute",),
    RK.COMPARE: ("attribute",),
    RK.MATCH: ("attribute", "match", "message"),
    RK.PRESENT: ("attributes",),
    RK.ATTRIBUTES_PRESENT: ("attributes",),
    RK.ARGUMENT_EQUALS: ("argument", "value"),
    RK.ARGUMENT_DOES_NOT_EQUAL: ("argument", "value"),
    RK.ARGUMENT_IN: ("argument", "list"),
}

QUANTIFIERS = ("exactly", "at_least", "at_most")


def check(rule: Rule) -> Ok[Rule] | Err[list[str]]:
    """
    Checks that `rule` has every parameter its kind needs.

    This is only structural: quantifier values aren't compared against the number of fields.

    Returns one of:
     1. Ok(rule)
     2. Err([ "<kind>: missing <param>", ... ])
    """
    problems = _missing(rule)
    if problems:
        return Err(problems)
    return Ok(rule)


def check_all(rules: Iterable[Rule]) -> Ok[list[Rule]] | Err[list[str]]:
    """
    Runs `check` on each rule (e.g. a `Where`) and collects all problems
    """
    rules = list(rules)
    problems: list[str] = []
    for r in rules:
        res = check(r)
        if isinstance(res, Err):
            problems.extend(res.err_value)
    if problems:
        return Err(problems)
    return Ok(rules)


def _missing(rule: Rule) -> list[str]:
    if not isinstance(rule, Rule):
        return [f"expected a `Rule`, got: {type(rule).__name__}"]
    kind = rule.kind
    res = [f"{kind.value}: missing {p}" for p in REQUIRED_PARAMS[kind] if p not in rule]

    match kind:
        case RK.PRESENT | RK.ATTRIBUTES_PRESENT:
            if not any(q in rule for q in QUANTIFIERS):
                res.append(f"{kind.value}: missing one of {', '.join(QUANTIFIERS)}")
        case RK.NEGATE:
            if "validation" in rule:
                res.extend(f"validation.{p}" for p in _missing(rule["validation"]))
        case _:
            pass
    return res
