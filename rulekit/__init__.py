import logging

from .builtins import (
    BUILDERS,
    absent,
    action_is,
    argument_does_not_equal,
    argument_equals,
    argument_in,
    attribute_does_not_equal,
    attribute_equals,
    attribute_in,
    attributes_absent,
    attributes_present,
    changing,
    compare,
    confirm,
    match,
    match_message,
    negate,
    numericality,
    one_of,
    present,
    string_length,
)
from .check import check, check_all
from .config import RulekitConfig, configure_logging, load_config
from .dsl import parse_rule
from .errors import InvalidArgument, RuleBuildError
from .rules import RK, Rule, Where, where
from .validation import Validation, validate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BUILDERS",
    "RK",
    "Rule",
    "Where",
    "where",
    "Validation",
    "validate",
    "check",
    "check_all",
    "parse_rule",
    "RulekitConfig",
    "load_config",
    "configure_logging",
    "InvalidArgument",
    "RuleBuildError",
    "one_of",
    "changing",
    "confirm",
    "attribute_equals",
    "attribute_does_not_equal",
    "attribute_in",
    "argument_equals",
    "argument_does_not_equal",
    "argument_in",
    "negate",
    "action_is",
    "string_length",
    "compare",
    "numericality",
    "match",
    "match_message",
    "present",
    "attributes_present",
    "absent",
    "attributes_absent",
]
