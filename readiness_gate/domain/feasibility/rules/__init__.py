from .checklist import evaluate_checklist, evaluate_rule
from .field_rules import (
    CollectionNonEmpty,
    ConditionalGroup,
    Confirmation,
    FieldRule,
    JointPresence,
    Presence,
    is_present,
    rule_set,
)

__all__ = [
    "CollectionNonEmpty",
    "ConditionalGroup",
    "Confirmation",
    "FieldRule",
    "JointPresence",
    "Presence",
    "evaluate_checklist",
    "evaluate_rule",
    "is_present",
    "rule_set",
]
