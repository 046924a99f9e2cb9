"""Core value types shared by the synthesizer, the emitter and the renderers.

Elements are plain strings naming a neighbour slot.  Tie groups use a small
tagged variant so equality merges never depend on ``isinstance`` checks on
bare strings::

    Single("right")              # one element, its own representative
    Group(("right", "left"))     # right == left, "right" is compared

A working order is a ``tuple`` of tie groups.  Index 0 holds the largest
value known to sit below the pivot and values decrease with the index.  All
helpers below return new tuples; nothing in this module mutates its input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple, Union

Element = str


class InvalidElementsError(ValueError):
    """Raised when an element list cannot drive synthesis (empty, duplicated, ...)."""


class UnknownElementError(KeyError):
    """Raised when concrete values are missing a label the tree compares."""


@dataclass(frozen=True)
class Single:
    element: Element

    @property
    def representative(self) -> Element:
        return self.element

    @property
    def members(self) -> Tuple[Element, ...]:
        return (self.element,)

    def __len__(self) -> int:
        return 1

    def merge(self, element: Element) -> "Group":
        return Group((self.element, element))


@dataclass(frozen=True)
class Group:
    members: Tuple[Element, ...]

    def __post_init__(self):
        if len(self.members) < 2:
            raise ValueError(f"Group needs at least two members, got {self.members!r}")

    @property
    def representative(self) -> Element:
        return self.members[0]

    def __len__(self) -> int:
        return len(self.members)

    def merge(self, element: Element) -> "Group":
        return Group(self.members + (element,))


TieGroup = Union[Single, Group]
WorkingOrder = Tuple[TieGroup, ...]


class Relation(Enum):
    LT = "<"
    GT = ">"
    EQ = "=="
    GE = ">="


@dataclass(frozen=True)
class Predicate:
    """One comparison on the path from the root to a leaf."""

    subject: Element
    relation: Relation
    reference: str

    def __str__(self) -> str:
        return f"{self.subject} {self.relation.value} {self.reference}"


# ----------------------------------------------------------------------
# Working order helpers
# ----------------------------------------------------------------------

def singletons(elements: Iterable[Element]) -> WorkingOrder:
    return tuple(Single(e) for e in elements)


def locate(order: WorkingOrder, element: Element) -> int:
    """Index of the group holding ``element`` as a singleton."""
    for idx, group in enumerate(order):
        if group == Single(element):
            return idx
    raise UnknownElementError(element)


def swap_with_previous(order: WorkingOrder, index: int) -> WorkingOrder:
    if index <= 0:
        raise ValueError(f"no group before index {index}")
    swapped = list(order)
    swapped[index - 1], swapped[index] = swapped[index], swapped[index - 1]
    return tuple(swapped)


def merge_into_previous(order: WorkingOrder, index: int) -> WorkingOrder:
    """Fold the singleton at ``index`` into the group right before it."""
    if index <= 0:
        raise ValueError(f"no group before index {index}")
    moving = order[index]
    if not isinstance(moving, Single):
        raise ValueError(f"only a single element can be merged, got {moving!r}")
    merged = order[index - 1].merge(moving.element)
    return order[:index - 1] + (merged,) + order[index + 1:]


def drop(order: WorkingOrder, index: int) -> WorkingOrder:
    return order[:index] + order[index + 1:]


def members_from(order: WorkingOrder, index: int) -> Tuple[Element, ...]:
    """Every element of ``order[index:]`` flattened, in order."""
    return tuple(e for group in order[index:] for e in group.members)


def iter_members(order: WorkingOrder) -> Iterator[Element]:
    for group in order:
        yield from group.members
