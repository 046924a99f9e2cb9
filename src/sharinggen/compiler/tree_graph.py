"""networkx / Graphviz views of a :class:`DecisionTree`."""

from __future__ import annotations

import itertools
from typing import Dict

import networkx as nx

from .emitter import describe_order
from .synthesizer import DecisionTree, Leaf, PivotBranch, children


def tree_to_networkx(tree: DecisionTree) -> nx.DiGraph:
    """Mirror ``tree`` into a DiGraph.

    Branch nodes are keyed ``b<node_id>``, leaves ``l<n>`` numbered as reached.
    Edges carry the comparison outcome as ``relation`` (``<``, ``>``, ``==``,
    ``>=``).
    """
    g = nx.DiGraph(elements=tree.elements, pivot=tree.pivot)
    leaf_ids = itertools.count()
    keys: Dict[int, str] = {}

    def key(node) -> str:
        if id(node) not in keys:
            keys[id(node)] = f"l{next(leaf_ids)}" if isinstance(node, Leaf) else f"b{node.node_id}"
        return keys[id(node)]

    for node in tree.walk():
        nid = key(node)
        if isinstance(node, Leaf):
            g.add_node(
                nid,
                kind="leaf",
                chain=describe_order(node.rule.order, tree.pivot),
                steps=len(node.rule.steps),
            )
            continue
        reference = node.pivot if isinstance(node, PivotBranch) else node.reference
        g.add_node(nid, kind="branch", subject=node.subject, reference=reference)
        for relation, child in children(node):
            g.add_edge(nid, key(child), relation=relation.value)
    return g


def tree_as_dot(tree: DecisionTree) -> str:
    """Return a Graphviz DOT representation of the decision tree."""
    g = tree_to_networkx(tree)
    out = ["digraph sharing {"]
    for nid, data in g.nodes(data=True):
        if data["kind"] == "leaf":
            out.append(f"  {nid} [shape=box, label=\"{data['chain']}\"];")
        else:
            out.append(f"  {nid} [label=\"{data['subject']} ? {data['reference']}\"];")
    for src, dst, data in g.edges(data=True):
        out.append(f"  {src} -> {dst} [label=\"{data['relation']}\"];")
    out.append("}")
    return "\n".join(out)


def tree_stats(tree: DecisionTree) -> Dict[str, int]:
    g = tree_to_networkx(tree)
    leaves = sum(1 for _, kind in g.nodes(data="kind") if kind == "leaf")
    return {
        "branches": g.number_of_nodes() - leaves,
        "leaves": leaves,
        "depth": nx.dag_longest_path_length(g),
    }
