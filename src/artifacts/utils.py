"""orjson encoding of revision call graph documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.artifacts.revision import RevisionCallGraph


def _dumps(graph: RevisionCallGraph, *, indent: bool = False) -> bytes:
    # Field order is part of the document layout; keys are never sorted.
    opts = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(graph.to_dict(), option=opts)


def _write_json(path: Path, graph: RevisionCallGraph) -> None:
    path.write_bytes(_dumps(graph, indent=True))
