# src/gfa_annotate/index/position.py
from __future__ import annotations
from typing import Dict, Iterator, List, Tuple

import numpy as np

from ..errors import PositionLookupError, PreconditionError
from ..model import Graph, GraphPath

Entry = Tuple[int, int]  # (end offset, node walk index)


class PositionIndex:
    """
    Ordered map: cumulative end offset of each node occurrence -> its walk index.

    keys[i] is the path coordinate just past node i, so keys are the prefix sums
    of the node lengths. One extra entry (total_length + 1 -> 0) is kept at the
    end so that "first key >= end" resolves for intervals ending at the path end.
    NOTE: that sentinel points at walk index 0, not at the last node. Lookups
    that land on it are reported by the intersector.
    """

    __slots__ = ("path", "keys", "values")

    def __init__(self, path: str, keys: np.ndarray, values: np.ndarray):
        if len(keys) != len(values) or len(keys) == 0:
            raise PreconditionError(f"Position index for '{path}' is empty or misaligned")
        if len(keys) > 1 and not bool(np.all(np.diff(keys) > 0)):
            raise PreconditionError(f"Position index keys for '{path}' are not strictly increasing")
        # last entry must be the sentinel: (total_length + 1) -> 0
        expected = int(keys[-2]) + 1 if len(keys) > 1 else 1
        if int(keys[-1]) != expected or int(values[-1]) != 0:
            raise PositionLookupError(
                f"Position index for '{path}' lacks its sentinel entry ({expected} -> 0); "
                f"last entry is ({int(keys[-1])} -> {int(values[-1])})"
            )
        self.path = path
        self.keys = np.asarray(keys, dtype=np.int64)
        self.values = np.asarray(values, dtype=np.int64)

    @classmethod
    def from_lengths(cls, path: str, lengths: np.ndarray) -> "PositionIndex":
        ends = np.cumsum(lengths, dtype=np.int64)
        total = int(ends[-1]) if len(ends) else 0
        keys = np.append(ends, np.int64(total + 1))
        values = np.append(np.arange(len(ends), dtype=np.int64), np.int64(0))
        return cls(path, keys, values)

    @property
    def total_length(self) -> int:
        return int(self.keys[-2]) if len(self.keys) > 1 else 0

    @property
    def sentinel(self) -> int:
        return int(self.keys[-1])

    def is_sentinel(self, key: int) -> bool:
        return key == self.sentinel

    def __len__(self) -> int:
        return len(self.keys)

    def items(self) -> Iterator[Entry]:
        for k, v in zip(self.keys.tolist(), self.values.tolist()):
            yield k, v

    def range_keys(self, lo: int, hi: int) -> List[Entry]:
        """Entries with lo <= key < hi, in key order."""
        if hi <= lo:
            return []
        i0 = int(np.searchsorted(self.keys, lo, side="left"))
        i1 = int(np.searchsorted(self.keys, hi, side="left"))
        return list(zip(self.keys[i0:i1].tolist(), self.values[i0:i1].tolist()))

    def first_at_or_after(self, offset: int) -> Entry:
        i = int(np.searchsorted(self.keys, offset, side="left"))
        if i >= len(self.keys):
            raise PositionLookupError(
                f"No node ends at or after offset {offset} on path '{self.path}' "
                f"(length {self.total_length}, sentinel {self.sentinel})"
            )
        return int(self.keys[i]), int(self.values[i])

    def __repr__(self) -> str:
        return f"PositionIndex(path={self.path!r}, nodes={len(self) - 1}, length={self.total_length})"


def path_node_lengths(graph: Graph, path: GraphPath) -> np.ndarray:
    lengths = np.fromiter(
        (graph.node_length(n, path.name) for n in path.nodes),
        dtype=np.int64,
        count=len(path),
    )
    if len(lengths) and lengths.min() <= 0:
        bad = path.nodes[int(np.argmin(lengths))]
        raise PreconditionError(f"Node {bad} on path '{path.name}' has non-positive length")
    return lengths


def build_position_index(graph: Graph) -> Dict[str, PositionIndex]:
    """One PositionIndex per path name. Raises MissingNodeError on dangling node references."""
    return {p.name: PositionIndex.from_lengths(p.name, path_node_lengths(graph, p)) for p in graph.paths}
