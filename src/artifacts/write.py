from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING

from artifacts.utils import _dumps, _write_json
from contract.artifacts import callgraph_filename

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.artifacts.revision import RevisionCallGraph

logger = logging.getLogger(__name__)


def write_callgraph(
    graph: RevisionCallGraph,
    *,
    out_dir: Path | None = None,
    to_stdout: bool = False,
    stream: IO[bytes] | None = None,
) -> Path | None:
    """Write a revision call graph to a directory and/or stdout.

    Args:
        graph: Completed revision document
        out_dir: Directory receiving ``{artifactId}_{groupId}_{version}.json``
        to_stdout: Also write compact JSON to stdout
        stream: Binary stream used instead of stdout (tests)

    Returns:
        Path of the written file, or None when no directory was given.
    """
    written: Path | None = None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)
        written = out_dir / callgraph_filename(graph.product, graph.version)
        _write_json(written, graph)
        logger.info("Wrote call graph to %s", written)

    if to_stdout:
        target = stream if stream is not None else sys.stdout.buffer
        target.write(_dumps(graph))
        target.write(b"\n")
        target.flush()

    return written


__all__ = ["write_callgraph"]
