"""
Option models for the builders that take `**opts`.

Each model lists the options its builder recognizes. All of them are optional.
Keys a model doesn't list are allowed and passed through to the evaluator untouched.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, ValidationError

from .errors import InvalidArgument
from .types import CompareValue, Options


class BuilderOpts(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    # Alternate spellings for option names (e.g. `touching?`)
    option_aliases: ClassVar[dict[str, str]] = {}

    @classmethod
    def normalize(cls, opts: Mapping[str, Any]) -> Options:
        """
        Type-checks the recognized options and returns the options the caller actually gave.

        No defaults are added here: a key missing from `opts` is missing from the result.
        """
        opts = {cls.option_aliases.get(k, k): v for k, v in opts.items()}
        try:
            cls.model_validate(opts)
        except ValidationError as e:
            err = e.errors()[0]
            argument = str(err["loc"][0]) if err["loc"] else "opts"
            raise InvalidArgument(
                argument, f"a valid `{cls.__name__}` option ({err['msg']})", err.get("input")
            ) from e
        # Values are returned as given, the model only checks them
        return dict(opts)


class ChangingOpts(BuilderOpts):
    # Also pass when a relationship is only "touched" (changed without changing the value)
    touching: StrictBool | None = None

    option_aliases: ClassVar[dict[str, str]] = {"touching?": "touching"}


class StringLengthOpts(BuilderOpts):
    min: StrictInt | None = None
    max: StrictInt | None = None
    exact: StrictInt | None = None


class CompareOpts(BuilderOpts):
    greater_than: CompareValue | None = None
    greater_than_or_equal_to: CompareValue | None = None
    less_than: CompareValue | None = None
    less_than_or_equal_to: CompareValue | None = None


class PresentOpts(BuilderOpts):
    """
    Quantifiers for the present/absent family. Bounds against the number of fields are NOT
    checked here (that's the evaluator's job), only that they're integers.
    """

    at_least: StrictInt | None = None
    at_most: StrictInt | None = None
    exactly: StrictInt | None = None
