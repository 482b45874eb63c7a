# src/gfa_annotate/io/common.py
from __future__ import annotations
import gzip
from pathlib import Path


def open_maybe_gzip(path: str | Path):
    path = str(path)
    return gzip.open(path, "rt") if path.endswith(".gz") else open(path, "r", encoding="utf-8")


def strip_gz(path: str | Path) -> str:
    """File name without a trailing .gz, lower-cased (for extension sniffing)."""
    name = Path(path).name.lower()
    return name[:-3] if name.endswith(".gz") else name
