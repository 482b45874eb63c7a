# src/gfa_annotate/annotation/__init__.py

from .intersect import (
    intersect,
    intersect_interval,
    iter_intersect,
)
from .writer import (
    format_list,
    format_span,
    write_spans,
    node_feature_table,
    write_node_table,
)
