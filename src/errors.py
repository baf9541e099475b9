"""Failure taxonomy shared by resolution, analysis and translation."""

from __future__ import annotations


class CallGraphError(Exception):
    """Base class for per-artifact failures.

    ``kind`` is the short tag recorded in batch tallies.
    """

    kind = "CallGraphError"


class NotFoundError(CallGraphError):
    """Raised when no configured repository serves the requested file."""

    kind = "NotFound"


class FetchError(CallGraphError):
    """Raised when every repository failed with a transport error."""

    kind = "FetchFailure"


class MalformedInputError(CallGraphError):
    """Raised for unparseable coordinates, batch lines, POMs or raw graphs."""

    kind = "MalformedInput"


class AnalysisFailure(CallGraphError):
    """Raised when the external call-graph analyzer cannot build a graph."""

    kind = "AnalysisFailure"


__all__ = [
    "AnalysisFailure",
    "CallGraphError",
    "FetchError",
    "MalformedInputError",
    "NotFoundError",
]
