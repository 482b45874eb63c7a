# src/gfa_annotate/io/annotations.py
from __future__ import annotations
import sys
import logging
from pathlib import Path
from typing import Iterator, List

from ..errors import AnnotationFormatError
from ..model import AnnotationCollection, Interval
from .common import open_maybe_gzip, strip_gz

log = logging.getLogger("gfa_annotate")
if not log.handlers:
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    log.addHandler(h)
log.setLevel(logging.INFO)

FORMATS = ("auto", "bed", "gff")
GFF_SUFFIXES = (".gff", ".gff3", ".gtf")


def detect_format(path: str | Path) -> str:
    return "gff" if strip_gz(path).endswith(GFF_SUFFIXES) else "bed"


def _coords(start_s: str, end_s: str, src: str, ln: int):
    try:
        return int(start_s), int(end_s)
    except ValueError:
        raise AnnotationFormatError(f"Non-integer coordinates: {start_s!r}, {end_s!r}", src, ln) from None


def iter_bed(path: str | Path) -> Iterator[Interval]:
    """
    BED rows -> Interval (0-based, end exclusive).
    The tag is every column after the third, joined by TAB ("" if none).
    """
    src = str(path)
    with open_maybe_gzip(src) as f:
        for ln, line in enumerate(f, 1):
            s = line.rstrip("\r\n")
            if not s.strip() or s.startswith(("#", "track", "browser")):
                continue
            parts = s.split("\t")
            if len(parts) < 3:
                raise AnnotationFormatError(f"Expected at least 3 columns, got {len(parts)}", src, ln)
            start, end = _coords(parts[1], parts[2], src, ln)
            yield Interval(parts[0], start, end, "\t".join(parts[3:])).validate()


def iter_gff(path: str | Path) -> Iterator[Interval]:
    """
    GFF3/GTF rows -> Interval. GFF is 1-based and end-inclusive, so start-1.
    The tag is the attribute column.
    """
    src = str(path)
    with open_maybe_gzip(src) as f:
        for ln, line in enumerate(f, 1):
            s = line.rstrip("\r\n")
            if s.startswith("##FASTA"):
                break
            if not s.strip() or s.startswith("#"):
                continue
            parts = s.split("\t")
            if len(parts) < 9:
                raise AnnotationFormatError(f"Expected 9 columns, got {len(parts)}", src, ln)
            start, end = _coords(parts[3], parts[4], src, ln)
            yield Interval(parts[0], start - 1, end, parts[8]).validate()


def read_annotations(path: str | Path, fmt: str = "auto") -> AnnotationCollection:
    """Load a BED or GFF file (optionally gzipped), grouped by path name."""
    if fmt not in FORMATS:
        raise ValueError(f"Unknown annotation format {fmt!r}; expected one of {', '.join(FORMATS)}")
    if fmt == "auto":
        fmt = detect_format(path)
    reader = iter_gff if fmt == "gff" else iter_bed
    intervals: List[Interval] = list(reader(path))
    coll = AnnotationCollection.from_intervals(intervals)
    log.info(f"Loaded {len(intervals)} {fmt.upper()} intervals on {len(coll)} paths from {path}")
    return coll
