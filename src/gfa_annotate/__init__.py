# src/gfa_annotate/__init__.py

__version__ = "0.1.0"

from .model import (
    Node,
    GraphPath,
    Graph,
    Interval,
    AnnotationCollection,
    AnnotatedSpan,
)
from .index.position import PositionIndex, build_position_index
from .annotation.intersect import intersect, iter_intersect
