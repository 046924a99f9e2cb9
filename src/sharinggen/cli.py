"""Command line front end: element labels in, generated sharing logic out."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .common import InvalidElementsError, get_sharinggen_logger
from .compiler import synthesize, tree_as_dot, tree_stats, verify_tree
from .rendering import STYLES, RenderConfig, render


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharinggen",
        description="Generate the comparison cascade and sharing rules for N neighbours.",
    )
    parser.add_argument("elements", nargs="+", help="Neighbour labels, e.g. right left up down")
    parser.add_argument("--pivot", default=os.environ.get("SHARINGGEN_PIVOT", "value"),
                        help="Name of the central cell's variable (default: value)")
    parser.add_argument("--style", choices=STYLES, default=os.environ.get("SHARINGGEN_STYLE", "nested"),
                        help="nested cascade or one method per branch")
    parser.add_argument("-o", "--output", type=Path, help="Write the generated source here instead of stdout")
    parser.add_argument("--dot", type=Path, help="Also write the decision tree as Graphviz DOT")
    parser.add_argument("--method-prefix", help="Prefix of generated method names")
    parser.add_argument("--coordinates", help="Argument text passed to receiver calls")
    parser.add_argument("--verify", action="store_true",
                        help="Exhaustively check the tree against integer assignments")
    parser.add_argument("--range", nargs=2, type=int, metavar=("LOW", "HIGH"), default=(0, 6),
                        help="Value range used by --verify (default: 0 6)")
    parser.add_argument("--log-level", help="Overrides SHARINGGEN_LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_sharinggen_logger(args.log_level)

    try:
        tree = synthesize(args.elements, pivot=args.pivot)
    except InvalidElementsError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if logger.isEnabledFor(logging.INFO):
        logger.info("tree stats: %s", tree_stats(tree))

    if args.verify:
        low, high = args.range
        report = verify_tree(tree, low, high)
        for failure in report.failures[:20]:
            print(f"[FAIL] {failure}", file=sys.stderr)
        if not report.ok:
            print(f"[ERROR] verification failed: {len(report.failures)} problems", file=sys.stderr)
            return 1
        print(f"[INFO] verified {report.assignments} assignments, {report.leaves_hit} leaves hit",
              file=sys.stderr)

    config = RenderConfig.from_env(method_prefix=args.method_prefix, coordinates=args.coordinates)
    text = render(tree, args.style, config) + "\n"
    if args.output is not None:
        args.output.write_text(text)
        logger.info("wrote %s", args.output)
    else:
        sys.stdout.write(text)

    if args.dot is not None:
        args.dot.write_text(tree_as_dot(tree) + "\n")
        logger.info("wrote %s", args.dot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
