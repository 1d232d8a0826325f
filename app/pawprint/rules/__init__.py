"""Rule parsing: type characters, age expressions and configuration lines."""

from pawprint.rules.age import AGE_INVALID, parse_age
from pawprint.rules.attributes import ATTRIBUTE_TABLE, MODIFIERS, Flag, resolve_type
from pawprint.rules.parser import UNSET, OperationRecord, Rule, parse_line, parse_rules

__all__ = [
    "AGE_INVALID",
    "ATTRIBUTE_TABLE",
    "MODIFIERS",
    "UNSET",
    "Flag",
    "OperationRecord",
    "Rule",
    "parse_age",
    "parse_line",
    "parse_rules",
    "resolve_type",
]
