import networkx as nx

from sharinggen import synthesize
from sharinggen.compiler.tree_graph import tree_as_dot, tree_stats, tree_to_networkx


def test_networkx_mirror_matches_tree(tree):
    g = tree_to_networkx(tree)
    assert nx.is_arborescence(g)
    leaves = [n for n, kind in g.nodes(data="kind") if kind == "leaf"]
    assert len(leaves) == len(tree.leaves())
    assert all(g.out_degree(n) == 0 for n in leaves)
    branches = [n for n, kind in g.nodes(data="kind") if kind == "branch"]
    assert len(branches) == len(tree.branches())


def test_edges_carry_relations():
    g = tree_to_networkx(synthesize(["right", "left"]))
    root = "b1"
    assert g.nodes[root]["subject"] == "right"
    assert g.nodes[root]["reference"] == "value"
    assert sorted(d["relation"] for _, _, d in g.out_edges(root, data=True)) == ["<", ">="]
    placed = "b2"
    assert sorted(d["relation"] for _, _, d in g.out_edges(placed, data=True)) == ["<", "==", ">"]


def test_stats():
    stats = tree_stats(synthesize(["right", "left"]))
    assert stats == {"branches": 4, "leaves": 6, "depth": 3}


def test_dot_output():
    dot = tree_as_dot(synthesize(["up"]))
    assert dot.startswith("digraph sharing {")
    assert 'b1 [label="up ? value"];' in dot
    assert 'shape=box, label="value > up"' in dot
    assert '[label=">="];' in dot
    assert dot.endswith("}")
