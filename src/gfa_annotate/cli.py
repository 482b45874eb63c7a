# src/gfa_annotate/cli.py
from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .annotation.intersect import intersect
from .annotation.writer import node_feature_table, write_node_table, write_spans
from .errors import GfaAnnotateError
from .index.position import build_position_index
from .io.annotations import FORMATS, read_annotations
from .io.gfa import graph_summary, read_gfa

log = logging.getLogger("gfa_annotate")
if not log.handlers:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    log.addHandler(h)
log.setLevel(logging.INFO)


def _require_file(path: str, what: str) -> None:
    if not os.path.exists(path):
        log.error(f"No {what} file: {path}")
        sys.exit(1)


# ----- subcommands -----

def annotate_cmd(args) -> int:
    _require_file(args.gfa, "gfa")
    _require_file(args.bed, "bed")

    log.info("Read the gff/bed file")
    annotations = read_annotations(args.bed, fmt=args.format)
    log.info("Read the gfa file")
    graph = read_gfa(args.gfa)

    indexes = build_position_index(graph)
    spans = intersect(graph, annotations, indexes)
    write_spans(spans, args.output)
    log.info(f"Saved: {args.output}  (n={len(spans)})")

    if args.node_table:
        df = node_feature_table(spans)
        write_node_table(df, args.node_table)
        log.info(f"Saved: {args.node_table}  (nodes={len(df)})")
    return 0


def index_cmd(args) -> int:
    _require_file(args.gfa, "gfa")
    graph = read_gfa(args.gfa)
    for name, steps, length in graph_summary(graph):
        log.debug(f"{name}: {steps} steps, {length} bp")
    indexes = build_position_index(graph)
    with open(args.output, "w", encoding="utf-8") as f:
        f.write("path\tend_offset\tnode_index\tnode_id\n")
        for name, index in indexes.items():
            nodes = graph.path(name).nodes
            for key, i in index.items():
                node_id = "*" if index.is_sentinel(key) else str(nodes[i])
                f.write(f"{name}\t{key}\t{i}\t{node_id}\n")
    log.info(f"Saved: {args.output}  (paths={len(indexes)})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gfa-annotate",
        description="Overlap annotation and genome graphs"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # annotate
    p = sub.add_parser(
        "annotate",
        help="Map BED/GFF intervals onto the graph nodes of the matching path"
    )
    p.add_argument("-g", "--gfa", required=True, help="Input GFA (.gfa or .gfa.gz) with P and/or W lines")
    p.add_argument("-b", "--bed", required=True, help="Annotation file (BED or GFF/GTF, optionally gzipped)")
    p.add_argument("-o", "--output", required=True, help="Output TSV: path, start, end, tag, [nodes], [orientations]")
    p.add_argument("--format", choices=FORMATS, default="auto",
                   help="Annotation format (default: auto, from the file extension)")
    p.add_argument("--node-table", default=None, help="Optional TSV with one row per annotated node")
    p.set_defaults(func=annotate_cmd)

    # index
    p = sub.add_parser(
        "index",
        help="Dump the per-path position index (node end offsets)"
    )
    p.add_argument("-g", "--gfa", required=True, help="Input GFA (.gfa or .gfa.gz)")
    p.add_argument("-o", "--output", required=True, help="Output TSV path")
    p.set_defaults(func=index_cmd)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        log.setLevel(logging.DEBUG)
    elif args.quiet:
        log.setLevel(logging.WARNING)
    try:
        return args.func(args)
    except GfaAnnotateError as e:
        log.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
