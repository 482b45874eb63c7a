# src/gfa_annotate/model.py
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from .errors import InvalidIntervalError, MissingNodeError

# (path, start, end, tag, node_ids, orientations)
SpanTuple = Tuple[str, int, int, str, Tuple[int, ...], Tuple[bool, ...]]


@dataclass(frozen=True)
class Node:
    id: int
    length: int


@dataclass(frozen=True)
class GraphPath:
    """
    One walk through the graph. orientations[i] is True when nodes[i] is
    traversed forward ('+' / '>').
    """
    name: str
    nodes: Tuple[int, ...]
    orientations: Tuple[bool, ...]

    def __post_init__(self):
        if len(self.nodes) != len(self.orientations):
            raise ValueError(
                f"Path '{self.name}': {len(self.nodes)} nodes but {len(self.orientations)} orientations"
            )

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class Graph:
    """
    Read-only sequence graph: node table plus the paths embedded in it.
    Paths are resolved by name through a dict built once at construction.
    """
    nodes: Mapping[int, Node]
    paths: Tuple[GraphPath, ...]
    _by_name: Mapping[str, GraphPath] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        by_name: Dict[str, GraphPath] = {}
        for p in self.paths:
            if p.name in by_name:
                raise ValueError(f"Duplicate path name: {p.name}")
            by_name[p.name] = p
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        object.__setattr__(self, "paths", tuple(self.paths))
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))

    @classmethod
    def from_parts(cls, nodes: Iterable[Node], paths: Iterable[GraphPath]) -> "Graph":
        return cls({n.id: n for n in nodes}, tuple(paths))

    def node_length(self, node_id: int, path: str | None = None) -> int:
        node = self.nodes.get(node_id)
        if node is None:
            raise MissingNodeError(node_id, path)
        return node.length

    def has_path(self, name: str) -> bool:
        return name in self._by_name

    def path(self, name: str) -> GraphPath:
        return self._by_name[name]

    def path_names(self) -> List[str]:
        return [p.name for p in self.paths]

    def path_length(self, name: str) -> int:
        p = self._by_name[name]
        return sum(self.node_length(n, name) for n in p.nodes)


@dataclass(frozen=True)
class Interval:
    """Half-open [start, end) on a named path, 0-based."""
    path: str
    start: int
    end: int
    tag: str = ""

    def validate(self) -> "Interval":
        if self.start < 0:
            raise InvalidIntervalError(f"Negative start in interval {self.path}:{self.start}-{self.end}")
        if self.end <= self.start:
            raise InvalidIntervalError(
                f"Interval end must be greater than start: {self.path}:{self.start}-{self.end} ({self.tag!r})"
            )
        return self


class AnnotationCollection(Mapping[str, Tuple[Interval, ...]]):
    """
    path name -> intervals, in first-seen path order and file order within a path.
    """

    def __init__(self, groups: Mapping[str, Iterable[Interval]] | None = None):
        self._groups: Dict[str, Tuple[Interval, ...]] = {}
        for name, ivs in (groups or {}).items():
            self._groups[name] = tuple(ivs)

    @classmethod
    def from_intervals(cls, intervals: Iterable[Interval]) -> "AnnotationCollection":
        grouped: Dict[str, List[Interval]] = {}
        for iv in intervals:
            grouped.setdefault(iv.path, []).append(iv)
        return cls(grouped)

    def __getitem__(self, name: str) -> Tuple[Interval, ...]:
        return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def n_intervals(self) -> int:
        return sum(len(v) for v in self._groups.values())

    def __repr__(self) -> str:
        return f"AnnotationCollection(paths={len(self)}, intervals={self.n_intervals()})"


@dataclass(frozen=True)
class AnnotatedSpan:
    path: str
    start: int
    end: int
    tag: str
    node_ids: Tuple[int, ...]
    orientations: Tuple[bool, ...]

    @classmethod
    def from_range(cls, interval: Interval, path: GraphPath, first: int, last: int) -> "AnnotatedSpan":
        """Build from an inclusive node-index range [first, last] into path's walk."""
        return cls(
            path=interval.path,
            start=interval.start,
            end=interval.end,
            tag=interval.tag,
            node_ids=path.nodes[first:last + 1],
            orientations=path.orientations[first:last + 1],
        )

    def as_tuple(self) -> SpanTuple:
        return (self.path, self.start, self.end, self.tag, self.node_ids, self.orientations)
