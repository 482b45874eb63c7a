# src/gfa_annotate/io/__init__.py

from .gfa import read_gfa, graph_summary
from .annotations import read_annotations, detect_format, iter_bed, iter_gff
