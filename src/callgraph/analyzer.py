"""Boundary to the external call-graph analyzer."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING, Protocol

from callgraph.raw import RawCallGraph
from errors import AnalysisFailure

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


class CallGraphAnalyzer(Protocol):
    """Builds a raw call graph over a classpath."""

    def analyze(self, classpath: Sequence[Path]) -> RawCallGraph: ...


class ExternalAnalyzer:
    """Runs an analyzer command and reads the raw graph JSON from stdout.

    Classpath entries are appended to ``command`` as extra arguments.
    """

    def __init__(self, command: Sequence[str], timeout: float | None = None) -> None:
        if not command:
            msg = "Analyzer command must not be empty"
            raise ValueError(msg)
        self.command = list(command)
        self.timeout = timeout

    def analyze(self, classpath: Sequence[Path]) -> RawCallGraph:
        args = [*self.command, *(str(entry) for entry in classpath)]
        logger.debug("Running analyzer: %s", args)
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            msg = f"Analyzer timed out after {self.timeout}s"
            raise AnalysisFailure(msg) from exc
        except OSError as exc:
            msg = f"Analyzer could not be started: {exc}"
            raise AnalysisFailure(msg) from exc

        if result.returncode != 0:
            err = result.stderr.decode("utf-8", errors="replace").strip()
            msg = f"Analyzer exited with status {result.returncode}: {err}"
            raise AnalysisFailure(msg)

        return RawCallGraph.from_json(result.stdout)


class PrecomputedAnalyzer:
    """Returns a raw graph previously dumped to a file, ignoring the classpath."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def analyze(self, classpath: Sequence[Path]) -> RawCallGraph:
        del classpath
        return RawCallGraph.from_path(self.path)


__all__ = ["CallGraphAnalyzer", "ExternalAnalyzer", "PrecomputedAnalyzer"]
