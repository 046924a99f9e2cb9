"""sharinggen: generate the comparison cascade and sharing rules of a leveling automaton.

Typical use::

    from sharinggen import synthesize, render

    tree = synthesize(["right", "left", "up", "down"])
    print(render(tree, style="nested"))
"""

from .common import InvalidElementsError, get_sharinggen_logger
from .compiler import (
    DecisionTree,
    GeneratedRule,
    NodeCounter,
    apply_rule,
    emit,
    select_leaf,
    synthesize,
    verify_tree,
)
from .rendering import RenderConfig, render

__version__ = "0.1.0"
__all__ = [
    "DecisionTree",
    "GeneratedRule",
    "InvalidElementsError",
    "NodeCounter",
    "RenderConfig",
    "apply_rule",
    "emit",
    "get_sharinggen_logger",
    "render",
    "select_leaf",
    "synthesize",
    "verify_tree",
]
