"""Decision-tree synthesis, leveling rules and their verification."""

from .emitter import GeneratedRule, LevelingOutcome, LevelingStep, apply_rule, describe_order, emit
from .synthesizer import (
    DecisionTree,
    ElementBranch,
    Leaf,
    NodeCounter,
    PivotBranch,
    synthesize,
)
from .tree_graph import tree_as_dot, tree_stats, tree_to_networkx
from .verify import VerificationReport, select_leaf, verify_tree

__all__ = [
    "DecisionTree",
    "ElementBranch",
    "GeneratedRule",
    "Leaf",
    "LevelingOutcome",
    "LevelingStep",
    "NodeCounter",
    "PivotBranch",
    "VerificationReport",
    "apply_rule",
    "describe_order",
    "emit",
    "select_leaf",
    "synthesize",
    "tree_as_dot",
    "tree_stats",
    "tree_to_networkx",
    "verify_tree",
]
