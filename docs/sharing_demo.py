"""Demonstration of the leveling rules for a four-neighbour cell.

Builds the decision tree for ``right, left, up, down``, picks the leaf for
one concrete neighbourhood and shows what the generated rule would do.
"""

from __future__ import annotations

from sharinggen import apply_rule, select_leaf, synthesize
from sharinggen.compiler import describe_order


def main() -> None:
    tree = synthesize(["right", "left", "up", "down"])
    neighbours = {"right": 3, "left": 3, "up": 11, "down": 0}
    value = 20
    leaf = select_leaf(tree, value, neighbours)
    outcome = apply_rule(leaf.rule, value, neighbours)
    print(describe_order(leaf.rule.order))
    for step in outcome.trace:
        print(f"  toShare={step.to_share} shareCount={step.share_count} share={step.share}")
    print(f"value {value} -> {outcome.pivot}, received {outcome.received}")


if __name__ == "__main__":
    main()
