"""Leveling-rule emitter.

Given one resolved working order (largest neighbour below the pivot first)
the emitter produces the sequence of sharing steps that walks the pivot down
towards each tie group in turn::

    to_share    = value - representative(G_k)
    share_count = 1 + |G_k| + |G_k+1| + ...
    share       = to_share / share_count        (truncating)
    if share != 0:
        value = value - to_share + to_share % share_count + share
        every element of G_k, G_k+1, ... receives share

Steps are symbolic: whether ``share`` is zero is only known once concrete
values are supplied, which is what :func:`apply_rule` does for verification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from ..common.types import (
    Element,
    Predicate,
    UnknownElementError,
    WorkingOrder,
    members_from,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelingStep:
    reference: Element
    share_count: int
    recipients: Tuple[Element, ...]


@dataclass(frozen=True)
class GeneratedRule:
    order: WorkingOrder
    path: Tuple[Predicate, ...]
    steps: Tuple[LevelingStep, ...]

    @property
    def is_empty(self) -> bool:
        return not self.steps


@dataclass(frozen=True)
class StepResult:
    to_share: int
    share_count: int
    share: int
    remainder: int
    pivot_before: int
    pivot_after: int


@dataclass
class LevelingOutcome:
    pivot: int
    received: Dict[Element, int]
    changed: bool = False
    trace: List[StepResult] = field(default_factory=list)


def trunc_divmod(a: int, b: int) -> Tuple[int, int]:
    """Integer division truncating toward zero, remainder signed like ``a``.

    Python's ``//`` floors; the generated code runs on a target whose integer
    division truncates, so the two disagree for negative dividends.
    """
    if b == 0:
        raise ZeroDivisionError("share count must be positive")
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


def describe_order(order: WorkingOrder, pivot: str = "value") -> str:
    """Human readable chain such as ``value > right = left > up``."""
    parts = [pivot]
    parts.extend(" = ".join(group.members) for group in order)
    return " > ".join(parts)


def emit(resolved_order: WorkingOrder, path: Tuple[Predicate, ...] = ()) -> GeneratedRule:
    steps = []
    for k, group in enumerate(resolved_order):
        recipients = members_from(resolved_order, k)
        steps.append(LevelingStep(group.representative, len(recipients) + 1, recipients))
    rule = GeneratedRule(tuple(resolved_order), tuple(path), tuple(steps))
    logger.debug("emit %s: %d steps", describe_order(rule.order), len(steps))
    return rule


def apply_rule(rule: GeneratedRule, pivot_value: int, values: Mapping[Element, int]) -> LevelingOutcome:
    """Run ``rule`` on concrete integers.

    Neighbour values are read, never written: every step compares against the
    value the neighbour held before leveling, mirroring the generated code
    which accumulates shares into a separate grid.
    """
    outcome = LevelingOutcome(pivot=pivot_value, received={})
    for step in rule.steps:
        try:
            reference = values[step.reference]
        except KeyError:
            raise UnknownElementError(step.reference) from None
        before = outcome.pivot
        to_share = before - reference
        share, remainder = trunc_divmod(to_share, step.share_count)
        if share != 0:
            outcome.changed = True
            outcome.pivot = before - to_share + remainder + share
            for element in step.recipients:
                outcome.received[element] = outcome.received.get(element, 0) + share
        outcome.trace.append(
            StepResult(to_share, step.share_count, share, remainder, before, outcome.pivot)
        )
    return outcome
