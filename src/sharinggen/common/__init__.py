"""Shared value types and logging setup."""

from .types import (
    Element,
    Group,
    InvalidElementsError,
    Predicate,
    Relation,
    Single,
    TieGroup,
    UnknownElementError,
    WorkingOrder,
)
from .logger import get_sharinggen_logger

__all__ = [
    "Element",
    "Group",
    "InvalidElementsError",
    "Predicate",
    "Relation",
    "Single",
    "TieGroup",
    "UnknownElementError",
    "WorkingOrder",
    "get_sharinggen_logger",
]
