"""
Built-in rule builders. Each one returns a single `Rule` and never evaluates anything

E.g.
    present(["first_name", "last_name"])
    absent(["is_admin", "is_normal_user"], at_least=1)
    negate(one_of("status", ["closed", "finished"]))
"""

import logging
import re
from collections.abc import Collection
from typing import Any

from .errors import InvalidArgument
from .lib.util import check_field_name, coerce_field_set, merge_options
from .options import ChangingOpts, CompareOpts, PresentOpts, StringLengthOpts
from .rules import RK, Rule
from .types import FieldName, Options

logger = logging.getLogger(__name__)


def one_of(field: FieldName, values: Collection[Any]) -> Rule:
    """
    Validates that a field's value is in a given list

    E.g. one_of("status", ["closed_won", "closed_lost"])
    """
    check_field_name(field, "field")
    return Rule(RK.ONE_OF, field=field, values=_as_list(values, "values"))


def changing(field: FieldName, **opts: Any) -> Rule:
    """
    Validates that an attribute or relationship is being changed

    E.g. changing("first_name")
         changing("comments", touching=True)
    """
    check_field_name(field, "field")
    return Rule(RK.CHANGING, merge_options(ChangingOpts.normalize(opts), field=field))


def confirm(field: FieldName, confirmation: FieldName) -> Rule:
    """
    Validates that a field or argument matches another field or argument

    E.g. confirm("password", "password_confirmation")
    """
    check_field_name(field, "field")
    check_field_name(confirmation, "confirmation")
    return Rule(RK.CONFIRM, field=field, confirmation=confirmation)


def attribute_equals(attribute: FieldName, value: Any) -> Rule:
    """
    Validates that an attribute is being changed to `value`, or equals it if not being changed.
    Pair with `where=changing(...)` to only check changes.
    """
    check_field_name(attribute, "attribute")
    return Rule(RK.ATTRIBUTE_EQUALS, attribute=attribute, value=value)


def attribute_does_not_equal(attribute: FieldName, value: Any) -> Rule:
    check_field_name(attribute, "attribute")
    return Rule(RK.ATTRIBUTE_DOES_NOT_EQUAL, attribute=attribute, value=value)


def attribute_in(attribute: FieldName, list: Collection[Any]) -> Rule:
    check_field_name(attribute, "attribute")
    return Rule(RK.ATTRIBUTE_IN, attribute=attribute, list=_as_list(list, "list"))


def argument_equals(argument: FieldName, value: Any) -> Rule:
    """
    Same as `attribute_equals`, but for an action argument
    """
    check_field_name(argument, "argument")
    return Rule(RK.ARGUMENT_EQUALS, argument=argument, value=value)


def argument_does_not_equal(argument: FieldName, value: Any) -> Rule:
    check_field_name(argument, "argument")
    return Rule(RK.ARGUMENT_DOES_NOT_EQUAL, argument=argument, value=value)


def argument_in(argument: FieldName, list: Collection[Any]) -> Rule:
    check_field_name(argument, "argument")
    return Rule(RK.ARGUMENT_IN, argument=argument, list=_as_list(list, "list"))


def negate(validation: Rule) -> Rule:
    """
    Validates that another rule does not pass. The wrapped rule is kept as-is (not copied)

    E.g. negate(one_of("status", ["closed", "finished"]))
    """
    if not isinstance(validation, Rule):
        raise InvalidArgument("validation", "a `Rule`", validation)
    return Rule(RK.NEGATE, validation=validation)


def action_is(action: FieldName | list[FieldName]) -> Rule:
    """
    Validates that the action name is `action` (or one of them, for a list).
    Mainly meant for use in `where`.
    """
    if isinstance(action, (list, tuple)):
        action = coerce_field_set(action, "action")
    else:
        check_field_name(action, "action")
    return Rule(RK.ACTION_IS, action=action)


def string_length(attribute: FieldName, **opts: Any) -> Rule:
    """
    Validates that an attribute meets the given length criteria (`min`, `max`, `exact`)

    E.g. string_length("slug", exact=8)
         string_length("secret", min=4, max=12)
    """
    check_field_name(attribute, "attribute")
    return Rule(
        RK.STRING_LENGTH, merge_options(StringLengthOpts.normalize(opts), attribute=attribute)
    )


def compare(attribute: FieldName, **opts: Any) -> Rule:
    """
    Validates that an attribute or argument meets the given comparison criteria.

    Option values can be a literal, an attribute/argument name, or a zero-argument function.

    E.g. compare("points", greater_than=0, less_than_or_equal_to=100)
    """
    check_field_name(attribute, "attribute")
    return Rule(RK.COMPARE, merge_options(CompareOpts.normalize(opts), attribute=attribute))


def numericality(attribute: FieldName, **opts: Any) -> Rule:
    """
    Same as `compare`

    E.g. numericality("age", greater_than_or_equal_to=18)
    """
    return compare(attribute, **opts)


def match(attribute: FieldName, pattern: str | re.Pattern) -> Rule:
    """
    Validates that an attribute's value matches a regex (a `str` is compiled first)

    E.g. match("slug", r"^[0-9a-z-_]+$")
    """
    check_field_name(attribute, "attribute")
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as e:
            raise InvalidArgument("match", f"a valid regex ({e})", pattern) from e
    elif not isinstance(pattern, re.Pattern):
        raise InvalidArgument("match", "a regex `str` or `re.Pattern`", pattern)
    return Rule(RK.MATCH, attribute=attribute, match=pattern, message=match_message(pattern))


def match_message(pattern: str | re.Pattern) -> str:
    """
    Default failure message for `match`, built from the pattern source (not its `repr`)
    """
    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    return f"must match {source}"


""" Present / Absent """


def present(attributes: FieldName | list[FieldName], **opts: Any) -> Rule:
    """
    Validates that the given attribute(s) or argument(s) are not `None`.

    Use `at_least`, `at_most` or `exactly` to say how many must be present.
      With no options, all of them must be present (i.e. `exactly=len(attributes)`).

    E.g. present("name")
         present(["is_admin", "is_normal_user"], at_most=1)
    """
    return _present(RK.PRESENT, attributes, opts)


def attributes_present(attributes: FieldName | list[FieldName], **opts: Any) -> Rule:
    """
    Same as `present`, but only for attributes
    """
    return _present(RK.ATTRIBUTES_PRESENT, attributes, opts)


def absent(attributes: FieldName | list[FieldName], **opts: Any) -> Rule:
    """
    Validates that the given attribute(s) or argument(s) are `None`. The inverse of `present`.

    Use `at_least` / `at_most` to say how many must be absent.
      With no options, all of them must be absent.

    This returns a `present` rule with the counts flipped, e.g. for 3 fields:
      absent(fs)              -> present(fs, exactly=0)
      absent(fs, at_least=1)  -> present(fs, at_most=2, at_least=0)
      absent(fs, at_most=1)   -> present(fs, at_most=0, at_least=2)
    """
    return _absent(RK.PRESENT, attributes, opts)


def attributes_absent(attributes: FieldName | list[FieldName], **opts: Any) -> Rule:
    """
    Same as `absent`, but only for attributes
    """
    return _absent(RK.ATTRIBUTES_PRESENT, attributes, opts)


""" Helper Functions """


def _present(kind: RK, attributes: Any, opts: Options) -> Rule:
    fields = coerce_field_set(attributes)
    if not opts:
        return Rule(kind, attributes=fields, exactly=len(fields))
    opts = PresentOpts.normalize(opts)
    return Rule(kind, merge_options(opts, attributes=fields))


def _absent(kind: RK, attributes: Any, opts: Options) -> Rule:
    """
    Rewrites "how many must be absent" into "how many must be present" over the same fields.

    `at_least` absent -> `at_most` present, and `at_most` absent -> `at_least` present.
      Both are read from the caller's `opts`, so neither conversion sees the other's output.
    """
    fields = coerce_field_set(attributes)
    if not opts:
        return Rule(kind, attributes=fields, exactly=0)

    opts = PresentOpts.normalize(opts)
    count = len(fields)
    new_opts = dict(opts)

    if opts.get("at_least") is not None:
        new_opts["at_most"] = count - opts["at_least"]
    else:
        new_opts["at_most"] = 0

    if opts.get("at_most") is not None:
        new_opts["at_least"] = count - opts["at_most"]
    else:
        new_opts["at_least"] = 0

    logger.debug(
        "absent %s (%s) -> present at_least=%s at_most=%s",
        fields,
        opts,
        new_opts["at_least"],
        new_opts["at_most"],
    )
    return _present(kind, fields, new_opts)


def _as_list(values: Any, argument: str) -> list[Any]:
    """
    Copies a collection of literals into a `list`. A bare `str` isn't treated as a collection
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Collection):
        raise InvalidArgument(argument, "a list of values", values)
    return list(values)


# Builder catalog, by name (used by `rulekit.dsl`)
BUILDERS = {
    fn.__name__: fn
    for fn in (
        one_of,
        changing,
        confirm,
        attribute_equals,
        attribute_does_not_equal,
        attribute_in,
        argument_equals,
        argument_does_not_equal,
        argument_in,
        negate,
        action_is,
        string_length,
        compare,
        numericality,
        match,
        present,
        attributes_present,
        absent,
        attributes_absent,
    )
}
