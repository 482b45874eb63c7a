# src/gfa_annotate/io/gfa.py
from __future__ import annotations
import re
import sys
import logging
from pathlib import Path
from typing import Dict, List, Tuple

from ..errors import GfaFormatError
from ..model import Graph, GraphPath, Node
from .common import open_maybe_gzip

log = logging.getLogger("gfa_annotate")
if not log.handlers:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    log.addHandler(h)
log.setLevel(logging.INFO)

# record types that carry no node/path information for us
_IGNORED = {"H", "L", "C", "J", "E", "G", "O", "U", "F"}
_WALK_STEP = re.compile(r"([<>])([^<>]+)")


def _parse_node_id(token: str, src: str, ln: int) -> int:
    try:
        nid = int(token)
    except ValueError:
        raise GfaFormatError(f"Node identifier is not an unsigned integer: {token!r}", src, ln) from None
    if nid < 0:
        raise GfaFormatError(f"Node identifier is negative: {token!r}", src, ln)
    return nid


def parse_segment(parts: List[str], src: str, ln: int) -> Node:
    """
    S <id> <sequence> [tags...]
    Length is len(sequence), or LN:i: when the sequence is '*'.
    """
    if len(parts) < 3:
        raise GfaFormatError("S line needs at least 3 columns", src, ln)
    nid = _parse_node_id(parts[1], src, ln)
    seq = parts[2]
    length = None
    if seq != "*":
        length = len(seq)
    else:
        for tag in parts[3:]:
            if tag.startswith("LN:i:"):
                try:
                    length = int(tag[5:])
                except ValueError:
                    raise GfaFormatError(f"Bad LN tag: {tag}", src, ln) from None
                break
        if length is None:
            raise GfaFormatError(f"Segment {nid} has no sequence and no LN:i: tag", src, ln)
    if length <= 0:
        raise GfaFormatError(f"Segment {nid} has non-positive length {length}", src, ln)
    return Node(nid, length)


def parse_path(parts: List[str], src: str, ln: int) -> GraphPath:
    """P <name> <1+,2-,...> [overlaps]"""
    if len(parts) < 3:
        raise GfaFormatError("P line needs at least 3 columns", src, ln)
    name = parts[1]
    nodes: List[int] = []
    dirs: List[bool] = []
    for step in filter(None, parts[2].split(",")):
        sign = step[-1]
        if sign not in "+-":
            raise GfaFormatError(f"Path step without orientation: {step!r}", src, ln)
        nodes.append(_parse_node_id(step[:-1], src, ln))
        dirs.append(sign == "+")
    return GraphPath(name, tuple(nodes), tuple(dirs))


def parse_walk(parts: List[str], src: str, ln: int) -> GraphPath:
    """W <sample> <hap> <seqid> <start> <end> <>1<2...>; named sample#hap#seqid."""
    if len(parts) < 7:
        raise GfaFormatError("W line needs 7 columns", src, ln)
    name = f"{parts[1]}#{parts[2]}#{parts[3]}"
    walk = parts[6]
    steps = _WALK_STEP.findall(walk)
    if "".join(d + n for d, n in steps) != walk:
        raise GfaFormatError(f"Malformed walk: {walk[:40]!r}", src, ln)
    nodes = tuple(_parse_node_id(n, src, ln) for _, n in steps)
    dirs = tuple(d == ">" for d, _ in steps)
    return GraphPath(name, nodes, dirs)


def read_gfa(path: str | Path) -> Graph:
    """
    Load nodes (S) and paths (P, W) from a GFA 1.x file (.gfa or .gfa.gz).
    Links and other records are skipped: only lengths and walks are needed.
    """
    src = str(path)
    nodes: Dict[int, Node] = {}
    paths: List[GraphPath] = []
    seen: Dict[str, int] = {}
    with open_maybe_gzip(src) as f:
        for ln, line in enumerate(f, 1):
            s = line.rstrip("\r\n")
            if not s or s.startswith("#"):
                continue
            parts = s.split("\t")
            kind = parts[0]
            if kind == "S":
                node = parse_segment(parts, src, ln)
                if node.id in nodes:
                    raise GfaFormatError(f"Duplicate segment {node.id}", src, ln)
                nodes[node.id] = node
            elif kind in ("P", "W"):
                p = parse_path(parts, src, ln) if kind == "P" else parse_walk(parts, src, ln)
                if p.name in seen:
                    raise GfaFormatError(
                        f"Duplicate path name '{p.name}' (first seen on line {seen[p.name]})", src, ln
                    )
                seen[p.name] = ln
                paths.append(p)
            elif kind in _IGNORED:
                continue
            else:
                log.debug(f"Skipping unknown GFA record type {kind!r} (line {ln})")
    log.info(f"Loaded graph {src}: {len(nodes)} nodes, {len(paths)} paths")
    return Graph(nodes, tuple(paths))


def graph_summary(graph: Graph) -> List[Tuple[str, int, int]]:
    """(name, n_steps, length) per path, in file order."""
    return [(p.name, len(p), graph.path_length(p.name)) for p in graph.paths]
