from typing import Any


class RuleBuildError(ValueError):
    """
    Raised when a builder is called with input it can't turn into a `Rule`
    """


class InvalidArgument(RuleBuildError):
    """
    A specific argument to a builder was malformed. `argument` holds the parameter name
    """

    def __init__(self, argument: str, expected: str, got: Any = None):
        self.argument = argument
        self.expected = expected
        self.got = got
        super().__init__(
            f"Invalid `{argument}`: expected {expected}, got: {type(got).__name__} {got!r}"
        )
