import numpy as np
import pytest

from sharinggen import synthesize
from sharinggen.common.types import Group, Single, UnknownElementError
from sharinggen.compiler.emitter import apply_rule
from sharinggen.compiler.verify import (
    assignment_grid,
    check_conservation,
    check_monotonic,
    check_order,
    expected_outcomes,
    leaf_key,
    select_leaf,
    verify_tree,
)


def test_select_leaf_follows_values(von_neumann_tree):
    values = {"right": 3, "left": 3, "up": 11, "down": 0}
    leaf = select_leaf(von_neumann_tree, 20, values)
    assert leaf.rule.order == (Single("up"), Group(("right", "left")), Single("down"))


def test_select_leaf_drops_neighbours_at_or_above_pivot(von_neumann_tree):
    values = {"right": 9, "left": 2, "up": 5, "down": 5}
    leaf = select_leaf(von_neumann_tree, 5, values)
    assert leaf.rule.order == (Single("left"),)


def test_select_leaf_all_above():
    tree = synthesize(["up"])
    leaf = select_leaf(tree, 1, {"up": 4})
    assert leaf.rule.steps == ()


def test_select_leaf_missing_label(von_neumann_tree):
    with pytest.raises(UnknownElementError):
        select_leaf(von_neumann_tree, 5, {"right": 1})


def test_expected_outcomes_small():
    outcomes = expected_outcomes(["a", "b"])
    assert outcomes == {
        (),
        (frozenset("a"),),
        (frozenset("b"),),
        (frozenset("a"), frozenset("b")),
        (frozenset("b"), frozenset("a")),
        (frozenset("ab"),),
    }


def test_leaf_key_ignores_member_order():
    tree = synthesize(["a", "b"])
    assert leaf_key(tree.root.less.equal.rule) == (frozenset({"a", "b"}),)


def test_checks_pass_for_one_application(von_neumann_tree):
    values = {"right": 1, "left": 7, "up": 7, "down": 30}
    leaf = select_leaf(von_neumann_tree, 25, values)
    outcome = apply_rule(leaf.rule, 25, values)
    assert check_order(leaf.rule, 25, values) == []
    assert check_conservation(outcome) == []
    assert check_monotonic(outcome, 25, values) == []


def test_check_order_flags_wrong_leaf():
    tree = synthesize(["a", "b"])
    wrong = tree.root.less.less.rule  # value > a > b
    assert check_order(wrong, 10, {"a": 1, "b": 5})


def test_assignment_grid_shape():
    grid = assignment_grid(3, -1, 1)
    assert grid.shape == (27, 3)
    assert grid.min() == -1 and grid.max() == 1
    assert len({tuple(row) for row in grid.tolist()}) == 27
    with pytest.raises(ValueError):
        assignment_grid(2, 3, 2)


@pytest.mark.parametrize("n", [1, 2, 3])
def test_verify_small_trees(n):
    tree = synthesize(["right", "left", "up"][:n])
    report = verify_tree(tree, 0, 6)
    assert report.ok, report.failures[:5]
    assert report.assignments == 7 ** (n + 1)
    assert report.leaves_hit == len(tree.leaves())


def test_verify_negative_values():
    tree = synthesize(["right", "left"])
    report = verify_tree(tree, -5, 4)
    assert report.ok, report.failures[:5]


@pytest.mark.exhaustive
@pytest.mark.parametrize("n", [4, 5])
def test_verify_large_trees(n):
    tree = synthesize(["right", "left", "up", "down", "front"][:n])
    report = verify_tree(tree, 0, 6)
    assert report.ok, report.failures[:5]
    assert report.leaves_hit == len(tree.leaves())


def test_conservation_over_random_assignments(von_neumann_tree):
    rng = np.random.default_rng(7)
    for row in rng.integers(-50, 200, size=(300, 5)):
        pivot, *rest = (int(v) for v in row)
        values = dict(zip(von_neumann_tree.elements, rest))
        outcome = apply_rule(select_leaf(von_neumann_tree, pivot, values).rule, pivot, values)
        total_before = pivot + sum(values.values())
        total_after = outcome.pivot + sum(values.values()) + sum(outcome.received.values())
        assert total_before == total_after


def test_check_order_missing_label():
    tree = synthesize(["a", "b"])
    rule = tree.root.less.equal.rule  # value > a = b
    with pytest.raises(UnknownElementError):
        check_order(rule, 10, {"a": 1})
