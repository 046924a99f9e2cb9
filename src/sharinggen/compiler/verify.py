"""Checks that a decision tree behaves like the leveling rule it encodes.

Two kinds of checks live here:

* structural: the leaves of a tree cover every outcome (which neighbours sit
  below the pivot and how they tie) exactly once;
* behavioural: for every integer assignment in a small range, the leaf the
  tree selects agrees with the values, and applying its rule conserves the
  total quantity without lowering the minimum or raising the pivot.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Mapping, Sequence, Tuple

import numpy as np

from ..common.types import Element, UnknownElementError, iter_members
from .emitter import GeneratedRule, LevelingOutcome, apply_rule
from .synthesizer import DecisionTree, ElementBranch, Leaf, PivotBranch

logger = logging.getLogger(__name__)

OutcomeKey = Tuple[FrozenSet[Element], ...]


@dataclass
class VerificationReport:
    elements: Tuple[Element, ...]
    low: int
    high: int
    assignments: int = 0
    leaves_hit: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _value_of(values: Mapping[Element, int], label: Element) -> int:
    try:
        return values[label]
    except KeyError:
        raise UnknownElementError(label) from None


def select_leaf(tree: DecisionTree, pivot_value: int, values: Mapping[Element, int]) -> Leaf:
    """Follow the comparisons of ``tree`` for concrete values."""
    node = tree.root
    while not isinstance(node, Leaf):
        subject = _value_of(values, node.subject)
        if isinstance(node, PivotBranch):
            node = node.less if subject < pivot_value else node.at_least
        elif isinstance(node, ElementBranch):
            reference = _value_of(values, node.reference)
            if subject < reference:
                node = node.less
            elif subject > reference:
                node = node.greater
            else:
                node = node.equal
        else:
            raise TypeError(f"unexpected node {node!r}")
    return node


def leaf_key(rule: GeneratedRule) -> OutcomeKey:
    return tuple(frozenset(group.members) for group in rule.order)


def _ordered_partitions(items: Tuple[Element, ...]) -> Iterator[OutcomeKey]:
    """Every ordered set partition (weak ordering) of ``items``."""
    if not items:
        yield ()
        return
    rest = items[1:]
    for size in range(len(rest) + 1):
        for companions in itertools.combinations(rest, size):
            first = frozenset((items[0],) + companions)
            remaining = tuple(e for e in rest if e not in first)
            for tail in _ordered_partitions(remaining):
                for slot in range(len(tail) + 1):
                    yield tail[:slot] + (first,) + tail[slot:]


def expected_outcomes(elements: Sequence[Element]) -> set:
    """All (subset below pivot, weak ordering of that subset) outcomes."""
    elements = tuple(elements)
    outcomes = set()
    for size in range(len(elements) + 1):
        for below in itertools.combinations(elements, size):
            outcomes.update(_ordered_partitions(below))
    return outcomes


def check_coverage(tree: DecisionTree) -> List[str]:
    keys = Counter(leaf_key(leaf.rule) for leaf in tree.leaves())
    failures = [f"outcome reached {n} times: {k}" for k, n in keys.items() if n > 1]
    expected = expected_outcomes(tree.elements)
    failures += [f"outcome never reached: {k}" for k in expected - set(keys)]
    failures += [f"impossible outcome: {k}" for k in set(keys) - expected]
    return failures


def check_order(rule: GeneratedRule, pivot_value: int, values: Mapping[Element, int]) -> List[str]:
    """The resolved order must match the concrete values it was selected for."""
    failures = []
    in_play = set(iter_members(rule.order))
    previous = pivot_value
    for group in rule.order:
        level = _value_of(values, group.representative)
        if any(_value_of(values, e) != level for e in group.members):
            failures.append(f"group {group.members} is not a tie")
        if not level < previous:
            failures.append(f"{group.representative}={level} not below {previous}")
        previous = level
    for label, v in values.items():
        if label not in in_play and v < pivot_value:
            failures.append(f"{label}={v} below pivot {pivot_value} but left out")
    return failures


def check_conservation(outcome: LevelingOutcome) -> List[str]:
    failures = []
    for step in outcome.trace:
        if step.share * step.share_count + step.remainder != step.to_share:
            failures.append(f"step {step} does not add up")
    given = sum(outcome.received.values())
    if outcome.trace and outcome.trace[0].pivot_before - outcome.pivot != given:
        failures.append(f"pivot lost {outcome.trace[0].pivot_before - outcome.pivot}, neighbours got {given}")
    return failures


def check_monotonic(outcome: LevelingOutcome, pivot_value: int, values: Mapping[Element, int]) -> List[str]:
    failures = []
    before_min = min([pivot_value, *values.values()])
    after = [outcome.pivot] + [v + outcome.received.get(k, 0) for k, v in values.items()]
    if min(after) < before_min:
        failures.append(f"minimum dropped from {before_min} to {min(after)}")
    for step in outcome.trace:
        if step.to_share > 0 and step.pivot_after > step.pivot_before:
            failures.append(f"pivot grew from {step.pivot_before} to {step.pivot_after}")
    return failures


def assignment_grid(n: int, low: int, high: int) -> np.ndarray:
    """Every integer vector of length ``n`` with entries in ``[low, high]``."""
    span = high - low + 1
    if span <= 0:
        raise ValueError(f"empty value range [{low}, {high}]")
    return np.indices((span,) * n).reshape(n, -1).T + low


def verify_tree(tree: DecisionTree, low: int = 0, high: int = 6) -> VerificationReport:
    report = VerificationReport(tree.elements, low, high)
    report.failures.extend(check_coverage(tree))
    hit: Dict[OutcomeKey, int] = {}
    for row in assignment_grid(len(tree.elements) + 1, low, high):
        pivot_value = int(row[0])
        values = {e: int(v) for e, v in zip(tree.elements, row[1:])}
        leaf = select_leaf(tree, pivot_value, values)
        outcome = apply_rule(leaf.rule, pivot_value, values)
        problems = (
            check_order(leaf.rule, pivot_value, values)
            + check_conservation(outcome)
            + check_monotonic(outcome, pivot_value, values)
        )
        if problems:
            report.failures.append(f"pivot={pivot_value} {values}: {'; '.join(problems)}")
        key = leaf_key(leaf.rule)
        hit[key] = hit.get(key, 0) + 1
        report.assignments += 1
    report.leaves_hit = len(hit)
    logger.info("verified %d assignments over [%d, %d]: %d leaves hit, %d failures",
                report.assignments, low, high, report.leaves_hit, len(report.failures))
    return report
