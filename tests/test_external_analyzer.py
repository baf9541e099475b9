from __future__ import annotations

import sys
from pathlib import Path

import pytest

from callgraph.analyzer import ExternalAnalyzer, PrecomputedAnalyzer
from callgraph.raw import ApplicationMethod
from errors import AnalysisFailure, MalformedInputError

RAW_GRAPH = Path(__file__).parent / "fixtures" / "raw" / "single_source_to_target.json"


def _write_script(root: Path, body: str) -> Path:
    script = root / "analyzer.py"
    script.write_text(body, encoding="utf-8")
    return script


def test_external_analyzer_reads_stdout_and_passes_classpath(tmp_path: Path) -> None:
    script = _write_script(
        tmp_path,
        f"""
import json
import sys
from pathlib import Path

graph = json.loads(Path({str(RAW_GRAPH)!r}).read_text())
graph["nodes"][0]["name"] = "<init>" if sys.argv[1:] == ["a.jar", "b.jar"] else "wrong"
print(json.dumps(graph))
""",
    )
    analyzer = ExternalAnalyzer([sys.executable, str(script)])

    raw = analyzer.analyze([Path("a.jar"), Path("b.jar")])

    assert len(raw.nodes) == 5
    assert isinstance(raw.nodes[0], ApplicationMethod)
    assert raw.nodes[0].name == "<init>"


def test_nonzero_exit_is_analysis_failure(tmp_path: Path) -> None:
    script = _write_script(
        tmp_path,
        "import sys\nsys.stderr.write('class not found')\nsys.exit(3)\n",
    )

    with pytest.raises(AnalysisFailure, match="class not found"):
        ExternalAnalyzer([sys.executable, str(script)]).analyze([])


def test_timeout_is_analysis_failure(tmp_path: Path) -> None:
    script = _write_script(tmp_path, "import time\ntime.sleep(10)\n")

    with pytest.raises(AnalysisFailure, match="timed out"):
        ExternalAnalyzer([sys.executable, str(script)], timeout=0.5).analyze([])


def test_missing_executable_is_analysis_failure(tmp_path: Path) -> None:
    with pytest.raises(AnalysisFailure):
        ExternalAnalyzer([str(tmp_path / "no-such-analyzer")]).analyze([])


def test_invalid_output_is_malformed_input(tmp_path: Path) -> None:
    script = _write_script(tmp_path, "print('not json')\n")

    with pytest.raises(MalformedInputError):
        ExternalAnalyzer([sys.executable, str(script)]).analyze([])


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        ExternalAnalyzer([])


def test_precomputed_analyzer_ignores_classpath() -> None:
    raw = PrecomputedAnalyzer(RAW_GRAPH).analyze([Path("ignored.jar")])

    assert [edge.kind for edge in raw.edges] == [
        "invokespecial",
        "invokestatic",
        "invokespecial",
    ]
