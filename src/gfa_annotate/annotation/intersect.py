# src/gfa_annotate/annotation/intersect.py
from __future__ import annotations
import sys
import logging
from typing import Iterator, List, Mapping

from ..errors import PositionLookupError, PreconditionError
from ..index.position import PositionIndex
from ..model import AnnotatedSpan, AnnotationCollection, Graph, GraphPath, Interval

log = logging.getLogger("gfa_annotate")
if not log.handlers:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    log.addHandler(h)
log.setLevel(logging.INFO)


def intersect_interval(path: GraphPath, index: PositionIndex, iv: Interval) -> AnnotatedSpan:
    """
    Map one interval onto the contiguous run of path nodes it overlaps.

    interior: nodes ending at a key k with start+1 <= k < end (a node ending
              exactly at start lies before the interval).
    last:     the first node ending at or after end.
    With no interior node the interval sits inside `last` alone; otherwise the
    span runs from the first interior node through `last`, both inclusive.
    """
    iv.validate()
    interior = index.range_keys(iv.start + 1, iv.end)
    key, last = index.first_at_or_after(iv.end)
    if index.is_sentinel(key):
        # sentinel maps to walk index 0
        log.warning(
            f"Interval {iv.path}:{iv.start}-{iv.end} ({iv.tag!r}) ends past the path end "
            f"({index.total_length}); resolved through the sentinel to node index 0"
        )
    if last >= len(path):
        raise PositionLookupError(
            f"Interval {iv.path}:{iv.start}-{iv.end} resolves to node index {last} "
            f"but path '{path.name}' has {len(path)} node(s)"
        )
    first = interior[0][1] if interior else last
    if first > last:
        raise PositionLookupError(
            f"Interval {iv.path}:{iv.start}-{iv.end} resolves to an inverted node range "
            f"[{first}, {last}] (path length {index.total_length})"
        )
    return AnnotatedSpan.from_range(iv, path, first, last)


def iter_intersect(
    graph: Graph,
    annotations: AnnotationCollection,
    position_indexes: Mapping[str, PositionIndex],
) -> Iterator[AnnotatedSpan]:
    """Yield one span per interval on a known path, in annotation order."""
    for name, intervals in annotations.items():
        index = position_indexes.get(name)
        if index is None:
            log.debug(f"Path '{name}' not in graph; skipping {len(intervals)} interval(s)")
            continue
        if not graph.has_path(name):
            raise PreconditionError(f"Position index present for '{name}' but the graph has no such path")
        path = graph.path(name)
        for iv in intervals:
            yield intersect_interval(path, index, iv)


def intersect(
    graph: Graph,
    annotations: AnnotationCollection,
    position_indexes: Mapping[str, PositionIndex],
) -> List[AnnotatedSpan]:
    spans = list(iter_intersect(graph, annotations, position_indexes))
    log.info(f"Mapped {len(spans)} of {annotations.n_intervals()} intervals onto graph nodes")
    return spans
