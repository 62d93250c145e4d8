import pytest

from rulekit import (
    RK,
    InvalidArgument,
    Rule,
    absent,
    attributes_absent,
    attributes_present,
    present,
)


def test_present_defaults_to_exactly_all(three_fields) -> None:
    assert present(three_fields) == Rule(RK.PRESENT, attributes=["a", "b", "c"], exactly=3)
    assert present(["a", "b"])["exactly"] == 2
    # A single field is wrapped
    assert present("name") == Rule(RK.PRESENT, attributes=["name"], exactly=1)
    assert present(("a", "b"))["attributes"] == ["a", "b"]


def test_present_passes_quantifiers_through() -> None:
    res = present(["a", "b"], at_most=1)
    assert res == Rule(RK.PRESENT, attributes=["a", "b"], at_most=1)
    assert "at_least" not in res
    assert "exactly" not in res

    assert present(["a", "b"], at_least=1, at_most=2) == Rule(
        RK.PRESENT, attributes=["a", "b"], at_least=1, at_most=2
    )
    assert present("a", exactly=0) == Rule(RK.PRESENT, attributes=["a"], exactly=0)


def test_absent_without_options(three_fields) -> None:
    assert absent(three_fields) == Rule(RK.PRESENT, attributes=["a", "b", "c"], exactly=0)
    assert absent("a") == Rule(RK.PRESENT, attributes=["a"], exactly=0)


def test_absent_flips_bounds(three_fields) -> None:
    assert absent(three_fields, at_least=1) == Rule(
        RK.PRESENT, attributes=["a", "b", "c"], at_least=0, at_most=2
    )
    assert absent(three_fields, at_most=1) == Rule(
        RK.PRESENT, attributes=["a", "b", "c"], at_least=2, at_most=0
    )
    # Both bounds: each one is converted from the caller's value
    assert absent(three_fields, at_least=1, at_most=2) == Rule(
        RK.PRESENT, attributes=["a", "b", "c"], at_least=1, at_most=2
    )


@pytest.mark.parametrize("k", [0, 1, 2, 3])
def test_absent_duality(three_fields, k: int) -> None:
    n = len(three_fields)
    assert absent(three_fields, at_least=k)["at_most"] == n - k
    assert absent(three_fields, at_most=k)["at_least"] == n - k

    # Converting back recovers the original bound
    presence_at_most = absent(three_fields, at_least=k)["at_most"]
    assert absent(three_fields, at_most=presence_at_most)["at_least"] == k


def test_absent_with_only_other_options() -> None:
    # Options given, but neither bound: both default branches fire
    res = absent(["a", "b"], exactly=0)
    assert res == Rule(RK.PRESENT, attributes=["a", "b"], exactly=0, at_most=0, at_least=0)


def test_absent_does_not_check_bounds() -> None:
    # Inconsistent quantifiers are left for the evaluator
    assert absent(["a"], at_least=3)["at_most"] == -2
    assert present(["a"], at_least=5)["at_least"] == 5


def test_attributes_namespace(three_fields) -> None:
    assert attributes_present(three_fields) == Rule(
        RK.ATTRIBUTES_PRESENT, attributes=["a", "b", "c"], exactly=3
    )
    assert attributes_absent(three_fields) == Rule(
        RK.ATTRIBUTES_PRESENT, attributes=["a", "b", "c"], exactly=0
    )
    assert attributes_absent(three_fields, at_least=1) == Rule(
        RK.ATTRIBUTES_PRESENT, attributes=["a", "b", "c"], at_least=0, at_most=2
    )
    assert attributes_present(["a", "b"], at_most=1) == Rule(
        RK.ATTRIBUTES_PRESENT, attributes=["a", "b"], at_most=1
    )

    for opts in ({}, {"at_least": 1}, {"at_most": 1}):
        assert attributes_present(three_fields, **opts).kind == RK.ATTRIBUTES_PRESENT
        assert attributes_absent(three_fields, **opts).kind == RK.ATTRIBUTES_PRESENT
        assert present(three_fields, **opts).kind == RK.PRESENT
        assert absent(three_fields, **opts).kind == RK.PRESENT


def test_field_set_is_copied() -> None:
    fields = ["a", "b"]
    res = present(fields)
    fields.append("c")
    assert res["attributes"] == ["a", "b"]
    assert res["exactly"] == 2


def test_malformed_fields() -> None:
    with pytest.raises(InvalidArgument) as exc:
        present(3)
    assert exc.value.argument == "attributes"
    assert "attributes" in str(exc.value)

    with pytest.raises(InvalidArgument):
        absent([])
    with pytest.raises(InvalidArgument):
        present(["a", None])
    with pytest.raises(InvalidArgument):
        attributes_absent(["a", "not a field"])


def test_malformed_quantifier() -> None:
    with pytest.raises(InvalidArgument) as exc:
        present(["a", "b"], at_least="one")
    assert exc.value.argument == "at_least"

    with pytest.raises(InvalidArgument) as exc:
        absent(["a", "b"], at_most=1.5)
    assert exc.value.argument == "at_most"
