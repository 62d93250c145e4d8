import pytest
from parsimonious.exceptions import ParseError

from rulekit import (
    BUILDERS,
    InvalidArgument,
    absent,
    attribute_equals,
    changing,
    match,
    negate,
    numericality,
    one_of,
    parse_rule,
    present,
    string_length,
)


def test_parse_present_absent() -> None:
    assert parse_rule("present(:name)") == present("name")
    assert parse_rule("present([:first_name, :last_name])") == present(["first_name", "last_name"])
    assert parse_rule("present([:is_admin, :is_normal_user], at_most: 1)") == present(
        ["is_admin", "is_normal_user"], at_most=1
    )
    assert parse_rule("absent([:a, :b, :c], at_least: 1)") == absent(["a", "b", "c"], at_least=1)
    assert parse_rule("  absent( [ :a ,:b ] )  ") == absent(["a", "b"])


def test_parse_values() -> None:
    assert parse_rule('one_of(:status, [:closed, "open", 1, 2.5, true, false, nil])') == one_of(
        "status", ["closed", "open", 1, 2.5, True, False, None]
    )
    assert parse_rule("one_of(:status, [])") == one_of("status", [])
    assert parse_rule("numericality(:points, greater_than: 0, less_than_or_equal_to: 100)") == (
        numericality("points", greater_than=0, less_than_or_equal_to=100)
    )
    assert parse_rule("string_length(:slug, exact: 8)") == string_length("slug", exact=8)
    assert parse_rule('match(:slug, "^[a-z]+$")') == match("slug", "^[a-z]+$")
    assert parse_rule("compare(:balance, greater_than: -5)")["greater_than"] == -5


def test_parse_nested_and_keys() -> None:
    assert parse_rule("negate(one_of(:status, [:closed, :finished]))") == negate(
        one_of("status", ["closed", "finished"])
    )
    assert parse_rule("changing(:comments, touching?: true)") == changing(
        "comments", touching=True
    )
    assert parse_rule("changing(:comments)") == changing("comments")
    # `?` is dropped from any key, not only `touching?`
    assert parse_rule("present(:a, allow_nil?: true)") == present("a", allow_nil=True)
    assert "allow_nil?" not in parse_rule("present(:a, allow_nil?: true)")


def test_parse_string_escapes() -> None:
    res = parse_rule(r'attribute_equals(:greeting, "say \"hi\"")')
    assert res["value"] == 'say "hi"'
    assert parse_rule(r'attribute_equals(:path, "a\\b")')["value"] == "a\\b"
    # Other escapes are kept for the pattern
    assert parse_rule(r'match(:code, "\d+")') == match("code", r"\d+")
    with pytest.raises(ParseError):
        parse_rule(r'attribute_equals(:a, "open\")')


def test_parse_errors() -> None:
    with pytest.raises(InvalidArgument) as exc:
        parse_rule("unknown_builder(:a)")
    assert exc.value.argument == "name"

    with pytest.raises(InvalidArgument) as exc:
        parse_rule("present(:a, at_most: 1, at_most: 2)")
    assert exc.value.argument == "at_most"

    # Builder errors come through as-is
    with pytest.raises(InvalidArgument) as exc:
        parse_rule("present(1)")
    assert exc.value.argument == "attributes"

    with pytest.raises(TypeError):
        parse_rule("confirm(:password)")

    with pytest.raises(ParseError):
        parse_rule("present(:a")
    with pytest.raises(ParseError):
        parse_rule("present(a)")


def test_every_builder_is_parseable() -> None:
    assert set(BUILDERS) >= {"present", "absent", "negate", "numericality", "compare"}
    for name in BUILDERS:
        with pytest.raises((InvalidArgument, TypeError)):
            parse_rule(f"{name}()")
