"""
Field Rules

Declarative descriptors for single testable facts about one entity. Each rule
is one check (it adds exactly one to ``total``) except a ConditionalGroup,
which adds one for its governing flag plus one per dependent rule once the
flag resolves to YES.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from ..value_objects.enums import TriState

Accessor = Callable[[Any], Any]


def is_present(value: Any, truthy: bool = False) -> bool:
    """
    Check a scalar value for presence.

    The default policy only rejects ``None`` and the empty string. The truthy
    policy also rejects ``0``, ``False`` and other falsy values.
    """
    if truthy:
        return bool(value)
    return value is not None and value != ""


@dataclass(frozen=True)
class Presence:
    """Passes iff the accessed value is present."""

    label: str
    accessor: Accessor
    truthy: bool = False


@dataclass(frozen=True)
class JointPresence:
    """One check over several fields; each missing field is its own gap label."""

    fields: tuple[tuple[str, Accessor], ...]
    truthy: bool = True


@dataclass(frozen=True)
class CollectionNonEmpty:
    """Passes iff the accessed sequence has at least one element."""

    label: str
    accessor: Accessor


@dataclass(frozen=True)
class Confirmation:
    """Passes iff the accessed value is exactly ``True``."""

    label: str
    accessor: Accessor


@dataclass(frozen=True)
class ConditionalGroup:
    """
    Tri-state governing flag with dependent rules.

    The governing check fails while the flag is UNSET and passes once it is
    NO or YES. Dependents are only counted when the flag is YES.
    """

    label: str
    accessor: Accessor
    dependents: tuple[FieldRule, ...] = ()


FieldRule = Union[Presence, JointPresence, CollectionNonEmpty, Confirmation, ConditionalGroup]


def rule_set(*rules: FieldRule) -> tuple[FieldRule, ...]:
    """Freeze an ordered rule set."""
    return tuple(rules)


def governing_state(group: ConditionalGroup, entity: Any) -> TriState:
    return TriState.from_value(group.accessor(entity))

