"""Decision-tree synthesizer.

Places the neighbour labels one at a time, in their original order, into a
working order of tie groups.  Each placement is a small insertion-sort pass:

* an element sitting at index 0 is compared against the pivot; if it is not
  below the pivot it can never receive a share and is dropped;
* otherwise it is compared against the representative of the group right
  before it and either stays (``<``), swaps one slot towards the front and is
  compared again (``>``), or joins that group (``==``).

Every comparison becomes a branch node and every fully placed order becomes a
leaf carrying the rule produced by :func:`~.emitter.emit`.  Working orders are
tuples, so each branch owns the order it was handed and no sibling can see
another's swap or merge.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from ..common.types import (
    Element,
    InvalidElementsError,
    Predicate,
    Relation,
    WorkingOrder,
    drop,
    locate,
    merge_into_previous,
    singletons,
    swap_with_previous,
)
from .emitter import GeneratedRule, emit

logger = logging.getLogger(__name__)

DEFAULT_PIVOT = "value"


class NodeCounter:
    """Hands out branch ids; renderers turn them into unique method names."""

    def __init__(self, start: int = 1):
        self._next = itertools.count(start).__next__

    def __call__(self) -> int:
        return self._next()


@dataclass(frozen=True)
class Leaf:
    rule: GeneratedRule


@dataclass(frozen=True)
class PivotBranch:
    node_id: int
    subject: Element
    pivot: str
    less: "Node"
    at_least: "Node"


@dataclass(frozen=True)
class ElementBranch:
    node_id: int
    subject: Element
    reference: Element
    less: "Node"
    greater: "Node"
    equal: "Node"


Node = Union[Leaf, PivotBranch, ElementBranch]
Branch = Union[PivotBranch, ElementBranch]


def children(node: Node) -> Tuple[Tuple[Relation, Node], ...]:
    """Outgoing edges of ``node`` in rendering order."""
    if isinstance(node, PivotBranch):
        return ((Relation.LT, node.less), (Relation.GE, node.at_least))
    if isinstance(node, ElementBranch):
        return ((Relation.LT, node.less), (Relation.GT, node.greater), (Relation.EQ, node.equal))
    return ()


@dataclass(frozen=True)
class DecisionTree:
    elements: Tuple[Element, ...]
    pivot: str
    root: Node

    def walk(self) -> Iterator[Node]:
        """Pre-order traversal, children visited in rendering order."""
        stack: List[Node] = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(child for _, child in reversed(children(node)))

    def leaves(self) -> List[Leaf]:
        return [n for n in self.walk() if isinstance(n, Leaf)]

    def branches(self) -> List[Branch]:
        return [n for n in self.walk() if not isinstance(n, Leaf)]


def validate_elements(original_order: Sequence[Element], pivot: str = DEFAULT_PIVOT) -> Tuple[Element, ...]:
    if isinstance(original_order, str):
        raise InvalidElementsError("expected a sequence of labels, got a single string")
    elements = tuple(original_order)
    if not elements:
        raise InvalidElementsError("at least one element is required")
    if not isinstance(pivot, str) or not pivot:
        raise InvalidElementsError(f"pivot label must be a non-empty string, got {pivot!r}")
    for e in elements:
        if not isinstance(e, str) or not e:
            raise InvalidElementsError(f"element labels must be non-empty strings, got {e!r}")
    dupes = sorted({e for e in elements if elements.count(e) > 1})
    if dupes:
        raise InvalidElementsError(f"duplicate element labels: {', '.join(dupes)}")
    if pivot in elements:
        raise InvalidElementsError(f"element label {pivot!r} collides with the pivot label")
    return elements


class Synthesizer:
    def __init__(self, original_order: Sequence[Element], pivot: str = DEFAULT_PIVOT,
                 counter: Optional[NodeCounter] = None):
        self.original = validate_elements(original_order, pivot)
        self.pivot = pivot
        self.counter = counter if counter is not None else NodeCounter()

    def run(self) -> DecisionTree:
        root = self._place(0, singletons(self.original), ())
        return DecisionTree(self.original, self.pivot, root)

    def _advance(self, depth: int, order: WorkingOrder, path: Tuple[Predicate, ...]) -> Node:
        if depth == len(self.original) - 1:
            return Leaf(emit(order, path))
        return self._place(depth + 1, order, path)

    def _place(self, depth: int, order: WorkingOrder, path: Tuple[Predicate, ...]) -> Node:
        element = self.original[depth]
        index = locate(order, element)
        node_id = self.counter()

        if index == 0:
            less = self._advance(depth, order, path + (Predicate(element, Relation.LT, self.pivot),))
            remaining = drop(order, 0)
            at_least_path = path + (Predicate(element, Relation.GE, self.pivot),)
            if remaining:
                at_least = self._advance(depth, remaining, at_least_path)
            else:
                # Nothing is left below the pivot; only reachable at the last depth.
                assert depth == len(self.original) - 1
                at_least = Leaf(emit((), at_least_path))
            return PivotBranch(node_id, element, self.pivot, less, at_least)

        reference = order[index - 1].representative
        less = self._advance(depth, order, path + (Predicate(element, Relation.LT, reference),))
        greater = self._place(
            depth,
            swap_with_previous(order, index),
            path + (Predicate(element, Relation.GT, reference),),
        )
        equal = self._advance(
            depth,
            merge_into_previous(order, index),
            path + (Predicate(element, Relation.EQ, reference),),
        )
        return ElementBranch(node_id, element, reference, less, greater, equal)


def synthesize(original_order: Sequence[Element], pivot: str = DEFAULT_PIVOT,
               counter: Optional[NodeCounter] = None) -> DecisionTree:
    """Build the full comparison tree for ``original_order``.

    Raises :class:`InvalidElementsError` before any recursion when the labels
    are empty, duplicated or collide with ``pivot``.
    """
    tree = Synthesizer(original_order, pivot, counter).run()
    if logger.isEnabledFor(logging.INFO):
        logger.info("synthesized %d elements: %d branches, %d leaves",
                    len(tree.elements), len(tree.branches()), len(tree.leaves()))
    return tree
