from typing import Any

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, ValidationError, field_validator

from .config import ActionType, RulekitConfig
from .errors import InvalidArgument
from .rules import Rule, Where


class Validation(BaseModel):
    """
    A `Rule` plus when it applies: the `where` clause, the actions it runs `on`, and flags.

    `message` is a template for the evaluator to fill in (e.g. "must be over %{greater_than}").
    """

    validation: InstanceOf[Rule]
    where: InstanceOf[Where] = Field(default_factory=Where)
    message: str | None = None
    description: str | None = None
    on: list[ActionType] = Field(default_factory=lambda: ["create", "update"])
    only_when_valid: bool = False
    before_action: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid", frozen=True)

    @field_validator("where", mode="before")
    @classmethod
    def coerce_where(cls, v: Any) -> Where:
        if isinstance(v, Where):
            return v
        return Where(v)

    @field_validator("on", mode="before")
    @classmethod
    def wrap_on(cls, v: Any) -> Any:
        return [v] if isinstance(v, str) else v

    def to_dict(self) -> dict[str, Any]:
        return {
            "validation": self.validation.to_dict(),
            "where": self.where.to_list(),
            "message": self.message,
            "description": self.description,
            "on": list(self.on),
            "only_when_valid": self.only_when_valid,
            "before_action": self.before_action,
        }


def validate(
    rule: Rule,
    where: Rule | list[Rule] | Where | None = None,
    config: RulekitConfig | None = None,
    **opts: Any,
) -> Validation:
    """
    Build a `Validation` entry. Unset `on` / `only_when_valid` / `before_action` come from `config`

    E.g. validate(present("foo"), where=[action_is("bar")])
         validate(
            numericality("age", greater_than_or_equal_to=18),
            where=attribute_equals("show_adult_content", True),
            message="must be over %{greater_than_or_equal_to} to enable adult content.",
         )
    """
    if not isinstance(rule, Rule):
        raise InvalidArgument("validation", "a `Rule`", rule)
    defaults = (config or RulekitConfig()).validation
    values = {
        "on": list(defaults.on),
        "only_when_valid": defaults.only_when_valid,
        "before_action": defaults.before_action,
        **opts,
    }
    if where is not None:
        values["where"] = where
    try:
        return Validation(validation=rule, **values)
    except ValidationError as e:
        err = e.errors()[0]
        argument = str(err["loc"][0]) if err["loc"] else "opts"
        raise InvalidArgument(
            argument, f"a valid `Validation` option ({err['msg']})", err.get("input")
        ) from e
