"""
Checklist Evaluator

Single generic reducer over an ordered rule set. Pure: the same entity and
rules always give the same counts and gap labels in rule order.
"""

from collections.abc import Iterable
from typing import Any

from ...shared.exceptions import RuleContractError
from ..value_objects.enums import TriState
from ..value_objects.results import ChecklistResult
from .field_rules import (
    CollectionNonEmpty,
    ConditionalGroup,
    Confirmation,
    FieldRule,
    JointPresence,
    Presence,
    governing_state,
    is_present,
)


def evaluate_rule(rule: FieldRule, entity: Any) -> ChecklistResult:
    """Evaluate one rule against one entity."""
    if isinstance(rule, Presence):
        if is_present(rule.accessor(entity), rule.truthy):
            return ChecklistResult(passed=1, total=1)
        return ChecklistResult(passed=0, total=1, gaps=(rule.label,))

    if isinstance(rule, JointPresence):
        missing = tuple(
            label
            for label, accessor in rule.fields
            if not is_present(accessor(entity), rule.truthy)
        )
        return ChecklistResult(passed=0 if missing else 1, total=1, gaps=missing)

    if isinstance(rule, CollectionNonEmpty):
        if len(rule.accessor(entity) or ()) > 0:
            return ChecklistResult(passed=1, total=1)
        return ChecklistResult(passed=0, total=1, gaps=(rule.label,))

    if isinstance(rule, Confirmation):
        if rule.accessor(entity) is True:
            return ChecklistResult(passed=1, total=1)
        return ChecklistResult(passed=0, total=1, gaps=(rule.label,))

    if isinstance(rule, ConditionalGroup):
        state = governing_state(rule, entity)
        if state == TriState.UNSET:
            return ChecklistResult(passed=0, total=1, gaps=(rule.label,))
        result = ChecklistResult(passed=1, total=1)
        if state == TriState.YES:
            result = result.merge(evaluate_checklist(entity, rule.dependents))
        return result

    raise RuleContractError(f"Unknown field rule type: {type(rule).__name__}")


def evaluate_checklist(entity: Any, rules: Iterable[FieldRule]) -> ChecklistResult:
    """
    Run an ordered rule set against one entity instance.

    Args:
        entity: Entity snapshot to check
        rules: Ordered field rules

    Returns:
        Accumulated pass/fail counts and gap labels

    Raises:
        RuleContractError: If the entity is None
    """
    if entity is None:
        raise RuleContractError("Cannot evaluate a checklist against a missing entity")

    result = ChecklistResult()
    for rule in rules:
        result = result.merge(evaluate_rule(rule, entity))
    return result
