"""
1) Load family tree data (JSON document, GEDCOM file, or the built-in demo).
2) Validate it for missing references, cycles and generation mismatches.
3) Compute the tree layout: positions, connections and canvas size.
4) Write the result: a preview image, a Graphviz DOT file, or the layout as JSON.
"""

import argparse
import json
import logging
from pathlib import Path

from demo import generate_demo_family_tree
from layout import compute_layout
from log import setup_logging
from models import LayoutConfig
from parsing import load_gedcom, load_tree_json
from plotting import layout_to_dot, plot_layout

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out a family tree and render or export the result.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("input", type=Path, nargs="?", help="Tree JSON or GEDCOM (.ged) file.")
    source.add_argument("--demo", action="store_true", help="Use the built-in demo tree.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("family_tree.png"),
        help="Output path; .png/.svg/.pdf preview, .dot Graphviz, .json layout (default: family_tree.png).",
    )
    parser.add_argument("--select", help="Person or pet id to highlight in the preview.")
    parser.add_argument("--node-width", type=float, default=LayoutConfig.node_width)
    parser.add_argument("--node-height", type=float, default=LayoutConfig.node_height)
    parser.add_argument("--sibling-gap", type=float, default=LayoutConfig.sibling_gap)
    parser.add_argument("--vertical-gap", type=float, default=LayoutConfig.vertical_gap)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-dir", type=Path, help="Also write logs to this directory.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_dir)

    if args.demo:
        logger.info("Using demo family tree")
        data = generate_demo_family_tree()
    elif args.input.suffix.lower() == ".ged":
        logger.info("Parsing GEDCOM file: %s", args.input)
        data = load_gedcom(args.input)
    else:
        logger.info("Loading tree JSON: %s", args.input)
        data = load_tree_json(args.input)
    logger.info("  Found %d members and %d pets", len(data.members), len(data.pets))

    config = LayoutConfig(
        node_width=args.node_width,
        node_height=args.node_height,
        sibling_gap=args.sibling_gap,
        vertical_gap=args.vertical_gap,
    )
    result = compute_layout(data, config)
    logger.info(
        "  Layout has %d units and %d connections on a %.0fx%.0f canvas",
        len(result.units),
        len(result.connections),
        result.dimensions.width,
        result.dimensions.height,
    )

    if result.issues:
        logger.info("  Found %d data issues:", len(result.issues))
        for issue in result.issues[:10]:
            logger.info("    - %s", issue.message)
        if len(result.issues) > 10:
            logger.info("    ... and %d more", len(result.issues) - 10)
    else:
        logger.info("  No data issues found")

    ext = args.output.suffix.lower().lstrip(".")
    if ext == "json":
        args.output.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
    elif ext == "dot":
        layout_to_dot(data, result).write(str(args.output), format="raw")
    else:
        plot_layout(data, result, args.output, selected_id=args.select, config=config)
    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
