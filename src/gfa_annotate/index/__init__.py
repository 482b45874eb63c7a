# src/gfa_annotate/index/__init__.py

from .position import (
    PositionIndex,
    build_position_index,
    path_node_lengths,
)
