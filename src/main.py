"""
Command-line entry point.

  labels         Label every person relative to a point-of-view person
  validate       Lint a graph definition (cycles, unknown ids, dates)
  layout         Print Graphviz node positions as JSON
  plot           Render the tree, optionally annotated from a POV
  import-gedcom  Convert a GEDCOM file into a graph-definition YAML document
"""

import argparse
import json
import logging
from pathlib import Path
import sys

import yaml

from graph import build_family_graph, build_graph, get_ego_subgraph
from kinship import label_all
from labels import DEFAULT_LANGUAGE, TRANSLATIONS
from layout import NODE_HEIGHT, NODE_WIDTH, build_layout_request, compute_layout
from parsing import dump_definition, load_definition, read_gedcom
from plotting import plot_graph
from validation import validate_definition

logger = logging.getLogger(__name__)


def cmd_labels(args) -> int:
    people, relationships = load_definition(args.definition)
    if args.pov not in {p.id for p in people}:
        print(f"Unknown person id: {args.pov}", file=sys.stderr)
        return 1

    graph = build_family_graph(relationships)
    labels = label_all(args.pov, graph, people, args.lang)
    for person in people:
        print(f"{person.name or person.id} ({person.id}): {labels[person.id] or '-'}")
    return 0


def cmd_validate(args) -> int:
    people, relationships = load_definition(args.definition)
    print(f"Loaded {len(people)} people and {len(relationships)} relationships")

    warnings = validate_definition(people, relationships)
    if not warnings:
        print("No validation issues found")
        return 0

    print(f"Found {len(warnings)} validation warnings:")
    for w in warnings:
        print(f"  - {w}")
    return 1


def cmd_layout(args) -> int:
    people, relationships = load_definition(args.definition)
    request = build_layout_request(people, build_family_graph(relationships), args.width, args.height)
    print(json.dumps(compute_layout(request), indent=2))
    return 0


def cmd_plot(args) -> int:
    people, relationships = load_definition(args.definition)
    G = build_graph(people, relationships)

    kinship_labels = None
    if args.pov:
        kinship_labels = label_all(args.pov, build_family_graph(relationships), people, args.lang)
        if args.radius is not None:
            G = get_ego_subgraph(G, args.pov, radius=args.radius)

    print(f"Plotting {G.number_of_nodes()} people")
    plot_graph(G, args.output, kinship_labels=kinship_labels, pov_id=args.pov)
    return 0


def cmd_import_gedcom(args) -> int:
    print(f"Parsing GEDCOM file: {args.gedcom}")
    people, relationships = read_gedcom(args.gedcom)
    print(f"  Found {len(people)} people and {len(relationships)} relationships")

    args.output.write_text(dump_definition(people, relationships), encoding="utf-8")
    print(f"Graph definition written to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sanak", description="Family tree kinship labelling")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("labels", help="Label everyone relative to a POV person")
    p.add_argument("definition", type=Path, help="Graph-definition YAML file")
    p.add_argument("--pov", required=True, help="Point-of-view person id")
    p.add_argument("--lang", default=DEFAULT_LANGUAGE, choices=sorted(TRANSLATIONS))
    p.set_defaults(func=cmd_labels)

    p = sub.add_parser("validate", help="Lint a graph definition")
    p.add_argument("definition", type=Path)
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("layout", help="Print Graphviz node positions as JSON")
    p.add_argument("definition", type=Path)
    p.add_argument("--width", type=int, default=NODE_WIDTH)
    p.add_argument("--height", type=int, default=NODE_HEIGHT)
    p.set_defaults(func=cmd_layout)

    p = sub.add_parser("plot", help="Render the family tree")
    p.add_argument("definition", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None, help="png, svg or pdf; shown if omitted")
    p.add_argument("--pov", default=None, help="Annotate people relative to this person")
    p.add_argument("--radius", type=int, default=None, help="Only draw people this close to the POV")
    p.add_argument("--lang", default=DEFAULT_LANGUAGE, choices=sorted(TRANSLATIONS))
    p.set_defaults(func=cmd_plot)

    p = sub.add_parser("import-gedcom", help="Convert GEDCOM to a graph definition")
    p.add_argument("gedcom", type=Path)
    p.add_argument("-o", "--output", type=Path, default=Path("family.yaml"))
    p.set_defaults(func=cmd_import_gedcom)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
