"""
Shared fixtures: a three-node graph

    chr1 = A(id 1, len 10, +)  B(id 2, len 5, -)  C(id 3, len 8, +)

with cumulative node ends 10, 15, 23 and the sentinel at 24.
"""
import gzip
import logging

import pytest

from gfa_annotate.model import Graph, GraphPath, Node

GFA_TEXT = (
    "H\tVN:Z:1.0\n"
    "S\t1\tAAAAAAAAAA\n"
    "S\t2\t*\tLN:i:5\n"
    "S\t3\tCCCCCCCC\n"
    "L\t1\t+\t2\t-\t0M\n"
    "L\t2\t-\t3\t+\t0M\n"
    "P\tchr1\t1+,2-,3+\t*\n"
    "W\tHG01\t1\tchr2\t0\t13\t>3<2\n"
)

BED_TEXT = (
    "track name=genes\n"
    "# comment\n"
    "chr1\t12\t20\tgeneX\n"
    "chrUn\t0\t5\tnowhere\n"
    "chr1\t2\t8\tgeneY\t0\t+\n"
    "HG01#1#chr2\t0\t9\tgeneZ\n"
)


@pytest.fixture(autouse=True)
def reset_log_level():
    yield
    logging.getLogger("gfa_annotate").setLevel(logging.INFO)


@pytest.fixture
def graph():
    nodes = [Node(1, 10), Node(2, 5), Node(3, 8)]
    paths = [GraphPath("chr1", (1, 2, 3), (True, False, True))]
    return Graph.from_parts(nodes, paths)


@pytest.fixture
def gfa_file(tmp_path):
    p = tmp_path / "graph.gfa"
    p.write_text(GFA_TEXT)
    return p


@pytest.fixture
def gfa_gz_file(tmp_path):
    p = tmp_path / "graph.gfa.gz"
    with gzip.open(p, "wt") as f:
        f.write(GFA_TEXT)
    return p


@pytest.fixture
def bed_file(tmp_path):
    p = tmp_path / "features.bed"
    p.write_text(BED_TEXT)
    return p
