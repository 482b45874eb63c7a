# src/gfa_annotate/errors.py
from __future__ import annotations


class GfaAnnotateError(Exception):
    """Base class for every error raised by gfa_annotate."""


# ----- fatal contract violations -----

class PreconditionError(GfaAnnotateError):
    """Inputs violate an assumption of the core; the run must stop."""


class MissingNodeError(PreconditionError, KeyError):
    def __init__(self, node_id: int, path: str | None = None):
        self.node_id = node_id
        self.path = path
        where = f" (referenced by path '{path}')" if path is not None else ""
        super().__init__(f"Node {node_id} is not in the node table{where}")

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.args[0]


class InvalidIntervalError(PreconditionError, ValueError):
    pass


class PositionLookupError(PreconditionError, LookupError):
    pass


# ----- malformed input files -----

class ParseError(GfaAnnotateError, ValueError):
    def __init__(self, message: str, source: str | None = None, line: int | None = None):
        self.source = source
        self.line = line
        prefix = ""
        if source is not None:
            prefix = f"{source}:{line}: " if line is not None else f"{source}: "
        super().__init__(prefix + message)


class GfaFormatError(ParseError):
    pass


class AnnotationFormatError(ParseError):
    pass
