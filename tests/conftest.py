from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from callgraph.raw import RawCallGraph
from errors import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

FIXTURES = Path(__file__).parent / "fixtures"


class FakeFetcher:
    """In-memory repository: unknown URLs are 404s, stored exceptions are raised."""

    def __init__(self, responses: dict[str, bytes | Exception] | None = None) -> None:
        self.responses = responses if responses is not None else {}
        self.requested: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.requested.append(url)
        response = self.responses.get(url)
        if response is None:
            msg = f"Could not find URL: {url}"
            raise NotFoundError(msg)
        if isinstance(response, Exception):
            raise response
        return response


class RecordingAnalyzer:
    """Returns a fixed raw graph and remembers which classpaths it saw."""

    def __init__(self, raw: RawCallGraph) -> None:
        self.raw = raw
        self.classpaths: list[list[Path]] = []
        self.existed: list[bool] = []

    def analyze(self, classpath: Sequence[Path]) -> RawCallGraph:
        self.classpaths.append(list(classpath))
        self.existed.append(all(entry.exists() for entry in classpath))
        return self.raw


@pytest.fixture
def raw_graph_path() -> Path:
    return FIXTURES / "raw" / "single_source_to_target.json"


@pytest.fixture
def pom_path() -> Path:
    return FIXTURES / "poms" / "properties.pom"


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def recording_analyzer(raw_graph_path: Path) -> RecordingAnalyzer:
    return RecordingAnalyzer(RawCallGraph.from_path(raw_graph_path))
