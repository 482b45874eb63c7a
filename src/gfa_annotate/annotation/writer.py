# src/gfa_annotate/annotation/writer.py
from __future__ import annotations
from pathlib import Path
from typing import IO, Iterable, Sequence, Union

import pandas as pd

from ..model import AnnotatedSpan

Target = Union[str, Path, IO[str]]


def format_list(values: Sequence) -> str:
    """[1, 2, 3] / [true, false]"""
    return "[" + ", ".join(("true" if v else "false") if isinstance(v, bool) else str(v) for v in values) + "]"


def format_span(span: AnnotatedSpan) -> str:
    return (
        f"{span.path}\t{span.start}\t{span.end}\t{span.tag}\t"
        f"{format_list(span.node_ids)}\t{format_list(span.orientations)}\n"
    )


def _write_lines(lines: Iterable[str], target: Target) -> None:
    if isinstance(target, (str, Path)):
        with open(target, "w", encoding="utf-8") as f:
            f.writelines(lines)
    else:
        target.writelines(lines)


def write_spans(spans: Iterable[AnnotatedSpan], target: Target) -> None:
    """One tab-separated line per span, no header."""
    _write_lines((format_span(s) for s in spans), target)


# ---------- node -> feature table ----------

NODE_TABLE_COLUMNS = ["node", "n_features", "tags"]


def node_feature_table(spans: Iterable[AnnotatedSpan]) -> pd.DataFrame:
    """
    Invert spans into one row per node: how many span occurrences cover it and their
    tags (';'-joined, first-seen order, duplicates kept once).
    """
    rows = [(nid, s.tag) for s in spans for nid in s.node_ids]
    if not rows:
        return pd.DataFrame(columns=NODE_TABLE_COLUMNS)
    df = pd.DataFrame(rows, columns=["node", "tag"])
    out = (
        df.groupby("node", sort=True)["tag"]
        .agg(n_features="size", tags=lambda t: ";".join(dict.fromkeys(t)))
        .reset_index()
    )
    return out[NODE_TABLE_COLUMNS]


def write_node_table(df: pd.DataFrame, target: Target) -> None:
    df.to_csv(target, sep="\t", index=False)
