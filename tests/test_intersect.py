import io
import logging

import pytest

from gfa_annotate.annotation.intersect import intersect, intersect_interval
from gfa_annotate.annotation.writer import write_spans
from gfa_annotate.errors import InvalidIntervalError, PositionLookupError
from gfa_annotate.index.position import build_position_index
from gfa_annotate.io.gfa import read_gfa
from gfa_annotate.model import AnnotationCollection, Graph, GraphPath, Interval, Node


def _run(graph, *intervals):
    coll = AnnotationCollection.from_intervals(intervals)
    return intersect(graph, coll, build_position_index(graph))


def _span(graph, start, end, tag="t"):
    path = graph.path("chr1")
    index = build_position_index(graph)["chr1"]
    return intersect_interval(path, index, Interval("chr1", start, end, tag))


def test_interval_across_boundary(graph):
    span = _span(graph, 12, 20, "geneX")
    assert span.node_ids == (2, 3)
    assert span.orientations == (False, True)
    assert (span.path, span.start, span.end, span.tag) == ("chr1", 12, 20, "geneX")


def test_interval_inside_single_node(graph):
    span = _span(graph, 2, 8, "geneY")
    assert span.node_ids == (1,)
    assert span.orientations == (True,)


@pytest.mark.parametrize(
    "start,end,expected",
    [
        (0, 10, (1,)),        # exactly node A
        (10, 15, (2,)),       # exactly node B; A ends at start
        (9, 10, (1,)),        # last base of A
        (10, 11, (2,)),       # first base of B
        (14, 20, (2, 3)),     # B's last base is covered
        (5, 15, (1, 2)),
        (0, 23, (1, 2, 3)),   # whole path
        (20, 23, (3,)),       # touches the path end
    ],
)
def test_boundaries(graph, start, end, expected):
    assert _span(graph, start, end).node_ids == expected


def test_single_node_containment(graph):
    ends = [0, 10, 15, 23]
    for i, node_id in enumerate((1, 2, 3)):
        prev_end, this_end = ends[i], ends[i + 1]
        for start in range(prev_end, this_end):
            for end in range(start + 1, this_end + 1):
                assert _span(graph, start, end).node_ids == (node_id,)


def test_multi_node_span_coverage(graph):
    ends = [10, 15, 23]
    for start in range(0, 23):
        for end in range(start + 1, 24):
            first = next(i for i, e in enumerate(ends) if e > start)
            last = next(i for i, e in enumerate(ends) if e >= end)
            span = _span(graph, start, end)
            assert len(span.node_ids) == last - first + 1
            assert span.node_ids == (1, 2, 3)[first:last + 1]


def test_sentinel_lookup_maps_to_first_node(graph, caplog):
    with caplog.at_level(logging.WARNING, logger="gfa_annotate"):
        span = _span(graph, 23, 24, "tail")
    assert span.node_ids == (1,)
    assert "sentinel" in caplog.text


def test_sentinel_with_interior_is_fatal(graph):
    with pytest.raises(PositionLookupError, match="inverted"):
        _span(graph, 20, 24)


def test_interval_past_sentinel_is_fatal(graph):
    with pytest.raises(PositionLookupError):
        _span(graph, 0, 30)


def test_malformed_interval_is_fatal(graph):
    with pytest.raises(InvalidIntervalError):
        _span(graph, 8, 8)


def test_unknown_path_skipped(graph, caplog):
    with caplog.at_level(logging.DEBUG, logger="gfa_annotate"):
        spans = _run(graph, Interval("chrUn", 0, 5, "x"), Interval("chr1", 2, 8, "y"))
    assert [s.tag for s in spans] == ["y"]
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_output_order_follows_annotations(graph):
    spans = _run(
        graph,
        Interval("chr1", 12, 20, "a"),
        Interval("chr1", 0, 3, "b"),
        Interval("chr1", 16, 17, "c"),
    )
    assert [s.tag for s in spans] == ["a", "b", "c"]


def test_idempotent_output(graph):
    ivs = [Interval("chr1", 12, 20, "geneX"), Interval("chr1", 2, 8, "geneY")]
    outs = []
    for _ in range(2):
        buf = io.StringIO()
        write_spans(_run(graph, *ivs), buf)
        outs.append(buf.getvalue())
    assert outs[0] == outs[1]
    assert outs[0] == "chr1\t12\t20\tgeneX\t[2, 3]\t[false, true]\nchr1\t2\t8\tgeneY\t[1]\t[true]\n"


def test_empty_path_is_fatal():
    g = Graph.from_parts([Node(1, 4)], [GraphPath("empty", (), ())])
    coll = AnnotationCollection.from_intervals([Interval("empty", 0, 1, "x")])
    with pytest.raises(PositionLookupError, match="0 node"):
        intersect(g, coll, build_position_index(g))


def test_empty_walk_from_gfa_is_fatal(tmp_path):
    gfa = tmp_path / "empty.gfa"
    gfa.write_text("S\t1\tACGT\nP\tempty\t\t*\n")
    g = read_gfa(gfa)
    coll = AnnotationCollection.from_intervals([Interval("empty", 0, 1, "x")])
    with pytest.raises(PositionLookupError):
        intersect(g, coll, build_position_index(g))
