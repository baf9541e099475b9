"""Batch processing of coordinate records, one artifact at a time."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pipeline.process import ProcessOutcome, process_record

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from artifacts.models.artifacts.revision import RevisionCallGraph
    from callgraph.analyzer import CallGraphAnalyzer
    from maven.fetch import MavenResolver

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Running tally of per-artifact outcomes in input order."""

    successes: list[ProcessOutcome] = field(default_factory=list)
    failures: list[ProcessOutcome] = field(default_factory=list)

    def record(self, outcome: ProcessOutcome) -> None:
        if outcome.ok:
            self.successes.append(outcome)
        else:
            self.failures.append(outcome)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures)

    def failure_kinds(self) -> list[tuple[str, int]]:
        """Failure kinds, most frequent first."""
        counts = Counter(outcome.failure_kind or "Unknown" for outcome in self.failures)
        return counts.most_common()

    def success_rate(self) -> int | None:
        if not self.total:
            return None
        return 100 * len(self.successes) // self.total


def run_batch(
    lines: Iterable[str],
    *,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
    repos: Sequence[str] | None = None,
    on_graph: Callable[[RevisionCallGraph], object] | None = None,
) -> BatchReport:
    """Process every non-blank JSON line and collect the outcomes.

    ``on_graph`` receives each non-empty call graph (e.g. to write it out).
    A failure in one artifact never stops the batch.
    """
    report = BatchReport()
    for line in lines:
        if not line.strip():
            continue
        outcome = process_record(
            line, resolver=resolver, analyzer=analyzer, repos=repos
        )
        if outcome.status == "ok" and on_graph is not None and outcome.graph is not None:
            try:
                on_graph(outcome.graph)
            except OSError as exc:
                logger.error("Couldn't write call graph for %s: %s", outcome.coordinate, exc)
                outcome = ProcessOutcome(
                    coordinate=outcome.coordinate,
                    status="failed",
                    failure_kind=type(exc).__name__,
                    message=str(exc),
                )
        report.record(outcome)
    return report


def format_report(report: BatchReport) -> str:
    """Render per-artifact outcome lines followed by the summary."""
    lines: list[str] = []
    for outcome in report.successes:
        calls = outcome.graph.call_count() if outcome.graph is not None else 0
        suffix = " (empty)" if outcome.status == "empty" else ""
        lines.append(f"Number of calls: {calls} COORDINATE: {outcome.coordinate}{suffix}")
    for outcome in report.failures:
        lines.append(f"{outcome.coordinate} ERROR: {outcome.failure_kind}")

    lines.append("")
    lines.append("===================SUMMARY=================")
    lines.append(f"Total number of analyzed coordinates: {report.total}")
    lines.append(f"Total number of successful: {len(report.successes)}")
    lines.append(f"Total number of failed: {len(report.failures)}")
    lines.append("Most common exceptions:")
    for kind, count in report.failure_kinds():
        lines.append(f"\t[{kind} - {count}]")
    rate = report.success_rate()
    if rate is not None:
        lines.append(f"Success rate: {rate}%")
    return "\n".join(lines)


__all__ = ["BatchReport", "format_report", "run_batch"]
