"""Render a decision tree as Java-like source for the cellular-automaton simulator.

Two layouts are available:

``render_nested``
    one nested ``if / else if / else`` cascade, tab indented, ready to be
    pasted into a single method body.

``render_methods``
    one method per branch node, children called as
    ``value = sharingLogicMethodN(...)``.  Keeps each method small enough for
    compilers that choke on very long bodies.

Leaves are rendered as the leveling statements of their rule, preceded by a
comment naming the resolved order (``// value > up = down > left``).
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields
from typing import List

from ..compiler.emitter import GeneratedRule, describe_order
from ..compiler.synthesizer import DecisionTree, ElementBranch, Leaf, Node, PivotBranch

logger = logging.getLogger(__name__)

STYLES = ("nested", "methods")


@dataclass(frozen=True)
class RenderConfig:
    value_type: str = "long"
    count_type: str = "int"
    changed_flag: str = "changed"
    receiver_prefix: str = "add"
    grid_name: str = "newGrid"
    coordinates: str = '"DIMMENSIONS PLACEHOLDER"'
    coordinates_param: str = "string dimmensionsPlaceholder"
    method_prefix: str = "sharingLogicMethod"
    method_modifiers: str = "protected"

    @classmethod
    def from_env(cls, **overrides) -> "RenderConfig":
        """Defaults, then ``SHARINGGEN_<FIELD>`` variables, then ``overrides``."""
        values = {}
        for f in fields(cls):
            env = os.environ.get(f"SHARINGGEN_{f.name.upper()}")
            if env is not None:
                values[f.name] = env
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def ind(level: int) -> str:
    return "\t" * level


def receiver(element: str, config: RenderConfig) -> str:
    return config.receiver_prefix + element[0].upper() + element[1:]


def render_rule(rule: GeneratedRule, pivot: str, level: int, config: RenderConfig) -> str:
    indent = ind(level)
    lb = "\n" + indent
    out = indent + "// " + describe_order(rule.order, pivot) + lb
    out += f"{config.value_type} toShare, share;" + lb
    out += f"{config.count_type} shareCount;"
    for step in rule.steps:
        out += lb + f"toShare = {pivot} - {step.reference};" + lb
        out += f"shareCount = {step.share_count};" + lb
        out += "share = toShare/shareCount;" + lb
        out += "if (share != 0) {" + lb
        out += f"\t{config.changed_flag} = true;" + lb
        out += f"\t{pivot} = {pivot} - toShare + toShare%shareCount + share;" + lb
        for element in step.recipients:
            out += f"\t{receiver(element, config)}({config.grid_name}, {config.coordinates}, share);" + lb
        out += "}"
    return out


def _omits_at_least(branch: PivotBranch) -> bool:
    # Nothing left below the pivot: the generated source has no else clause.
    return isinstance(branch.at_least, Leaf) and not branch.at_least.rule.order


# ----------------------------------------------------------------------
# Nested cascade
# ----------------------------------------------------------------------

def _nested(node: Node, pivot: str, level: int, config: RenderConfig) -> str:
    if isinstance(node, Leaf):
        return render_rule(node.rule, pivot, level, config)
    indent = ind(level)
    inner = level + 1
    if isinstance(node, PivotBranch):
        out = f"{indent}if ({node.subject} < {pivot}) {{\n"
        out += _nested(node.less, pivot, inner, config)
        if not _omits_at_least(node):
            out += f"\n{indent}}} else {{//{node.subject} >= {pivot}\n"
            out += _nested(node.at_least, pivot, inner, config)
        return out + f"\n{indent}}}"
    subject, reference = node.subject, node.reference
    out = f"{indent}if ({subject} < {reference}) {{\n"
    out += _nested(node.less, pivot, inner, config)
    out += f"\n{indent}}} else if ({subject} > {reference}) {{\n"
    out += _nested(node.greater, pivot, inner, config)
    out += f"\n{indent}}} else {{//{subject} == {reference}\n"
    out += _nested(node.equal, pivot, inner, config)
    return out + f"\n{indent}}}"


def render_nested(tree: DecisionTree, config: RenderConfig | None = None, level: int = 0) -> str:
    config = config or RenderConfig()
    text = _nested(tree.root, tree.pivot, level, config)
    logger.debug("rendered nested cascade: %d lines", text.count("\n") + 1)
    return text


# ----------------------------------------------------------------------
# One method per branch
# ----------------------------------------------------------------------

def method_name(node: Node, config: RenderConfig) -> str:
    return f"{config.method_prefix}{node.node_id}"


def method_invocation(node: Node, tree: DecisionTree, config: RenderConfig) -> str:
    args = ", ".join((config.grid_name, tree.pivot) + tree.elements + (config.coordinates,))
    return f"{method_name(node, config)}({args});"


def _method_signature(node: Node, tree: DecisionTree, config: RenderConfig) -> str:
    brackets = "[]" * math.ceil(len(tree.elements) / 2)
    params = [f"{config.value_type}{brackets} {config.grid_name}", f"{config.value_type} {tree.pivot}"]
    params += [f"{config.value_type} {e}" for e in tree.elements]
    params.append(config.coordinates_param)
    return f"{config.method_modifiers} {config.value_type} {method_name(node, config)}({', '.join(params)}) {{\n"


def _method_arm(child: Node, tree: DecisionTree, config: RenderConfig) -> str:
    if isinstance(child, Leaf):
        return render_rule(child.rule, tree.pivot, 2, config)
    return f"\t\t{tree.pivot} = {method_invocation(child, tree, config)}"


def _method_body(node: Node, tree: DecisionTree, config: RenderConfig) -> str:
    pivot = tree.pivot
    out = _method_signature(node, tree, config)
    if isinstance(node, PivotBranch):
        out += f"\tif ({node.subject} < {pivot}) {{\n"
        out += _method_arm(node.less, tree, config)
        if not _omits_at_least(node):
            out += f"\n\t}} else {{//{node.subject} >= {pivot}\n"
            out += _method_arm(node.at_least, tree, config)
        out += "\n\t}"
    elif isinstance(node, ElementBranch):
        subject, reference = node.subject, node.reference
        out += f"\tif ({subject} < {reference}) {{\n"
        out += _method_arm(node.less, tree, config)
        out += f"\n\t}} else if ({subject} > {reference}) {{\n"
        out += _method_arm(node.greater, tree, config)
        out += f"\n\t}} else {{//{subject} == {reference}\n"
        out += _method_arm(node.equal, tree, config)
        out += "\n\t}"
    out += f"\n\treturn {pivot};"
    return out + "\n}"


def render_methods(tree: DecisionTree, config: RenderConfig | None = None) -> List[str]:
    """Return one method text per branch, the root's method first.

    Methods are listed in reverse order of completion of a depth-first pass
    over ``less``, ``greater``/``at_least``, ``equal``.
    """
    config = config or RenderConfig()
    finished: List[str] = []

    def visit(node: Node) -> None:
        if isinstance(node, Leaf):
            return
        arms = (node.less, node.at_least) if isinstance(node, PivotBranch) else (node.less, node.greater, node.equal)
        for child in arms:
            visit(child)
        finished.append(_method_body(node, tree, config))

    visit(tree.root)
    finished.reverse()
    logger.debug("rendered %d methods", len(finished))
    return finished


def render(tree: DecisionTree, style: str = "nested", config: RenderConfig | None = None) -> str:
    if style == "nested":
        return render_nested(tree, config)
    if style == "methods":
        return "\n\n".join(render_methods(tree, config))
    raise ValueError(f"unknown style {style!r}, expected one of {', '.join(STYLES)}")
