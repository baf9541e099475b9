"""Per-artifact call graph generation.

Each function handles exactly one artifact and keeps no state between
calls; failures surface either as raised CallGraphError subclasses
(``generate_*``) or as a failed ProcessOutcome (``process_*``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import orjson

from artifacts.models.artifacts.revision import RevisionCallGraph
from callgraph.translate import translate
from errors import CallGraphError, MalformedInputError
from maven.coordinate import MavenCoordinate
from utils import parse_timestamp

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from artifacts.models.artifacts.dependencies import DependencySet
    from callgraph.analyzer import CallGraphAnalyzer
    from maven.fetch import MavenResolver

logger = logging.getLogger(__name__)

UNKNOWN_COORDINATE = "UNKNOWN COORDINATE"

OutcomeStatus = Literal["ok", "empty", "failed"]


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of processing one artifact."""

    coordinate: str
    status: OutcomeStatus
    graph: RevisionCallGraph | None = None
    failure_kind: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"


def _failure_kind(exc: Exception) -> str:
    return getattr(exc, "kind", type(exc).__name__)


def generate_for_jar(
    jar: Path,
    *,
    product: str,
    version: str,
    timestamp: int,
    depset: DependencySet,
    analyzer: CallGraphAnalyzer,
) -> RevisionCallGraph:
    """Analyze a local JAR and build its revision call graph."""
    raw = analyzer.analyze([jar])
    partial = translate(raw)
    return RevisionCallGraph.build(
        product=product,
        version=version,
        timestamp=timestamp,
        depset=depset,
        partial=partial,
    )


def generate_for_coordinate(
    coordinate: MavenCoordinate,
    timestamp: int,
    *,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
) -> RevisionCallGraph:
    """Resolve dependencies, download the JAR and build the call graph."""
    logger.info("Generating call graph for %s", coordinate)
    depset = resolver.resolve_dependencies(coordinate)
    jar = resolver.download_jar(coordinate)
    try:
        return generate_for_jar(
            jar,
            product=coordinate.product,
            version=coordinate.version,
            timestamp=timestamp,
            depset=depset,
            analyzer=analyzer,
        )
    finally:
        jar.unlink(missing_ok=True)


def merge_dependency_sets(
    coordinates: Sequence[MavenCoordinate], *, resolver: MavenResolver
) -> DependencySet:
    """Concatenate the dependency sets of several coordinates, in order."""
    merged: DependencySet = []
    for coordinate in coordinates:
        merged.extend(resolver.resolve_dependencies(coordinate))
    return merged


def process_coordinate(
    coordinate: MavenCoordinate,
    timestamp: int,
    *,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
) -> ProcessOutcome:
    try:
        graph = generate_for_coordinate(
            coordinate, timestamp, resolver=resolver, analyzer=analyzer
        )
    except (CallGraphError, OSError) as exc:
        logger.error("Failed to generate a call graph for %s: %s", coordinate, exc)
        return ProcessOutcome(
            coordinate=coordinate.coordinate,
            status="failed",
            failure_kind=_failure_kind(exc),
            message=str(exc),
        )

    if graph.is_callgraph_empty():
        logger.warning("Empty call graph for %s", coordinate)
        return ProcessOutcome(coordinate=coordinate.coordinate, status="empty", graph=graph)

    logger.info("Call graph successfully generated for %s", coordinate)
    return ProcessOutcome(coordinate=coordinate.coordinate, status="ok", graph=graph)


def process_record(
    record: str | bytes,
    *,
    resolver: MavenResolver,
    analyzer: CallGraphAnalyzer,
    repos: Sequence[str] | None = None,
) -> ProcessOutcome:
    """Process one ``{groupId, artifactId, version, date}`` JSON record."""
    label = UNKNOWN_COORDINATE
    try:
        data = orjson.loads(record)
        if not isinstance(data, dict):
            msg = "Coordinate record must be a JSON object"
            raise MalformedInputError(msg)
        coordinate = MavenCoordinate.from_record(data).with_repos(repos)
        label = coordinate.coordinate
        if "date" not in data:
            msg = f"Coordinate record for {coordinate} is missing 'date'"
            raise MalformedInputError(msg)
        timestamp = parse_timestamp(data["date"])
    except (orjson.JSONDecodeError, MalformedInputError) as exc:
        logger.error("Could not parse input coordinate: %s", exc)
        return ProcessOutcome(
            coordinate=label,
            status="failed",
            failure_kind=MalformedInputError.kind,
            message=str(exc),
        )

    return process_coordinate(
        coordinate, timestamp, resolver=resolver, analyzer=analyzer
    )


__all__ = [
    "UNKNOWN_COORDINATE",
    "ProcessOutcome",
    "generate_for_coordinate",
    "generate_for_jar",
    "merge_dependency_sets",
    "process_coordinate",
    "process_record",
]
