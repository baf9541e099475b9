from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import pytest

from artifacts.models.artifacts.revision import RevisionCallGraph
from callgraph.raw import RawCallGraph
from callgraph.translate import translate
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    validate_callgraph,
)

RAW_GRAPH = Path(__file__).parent / "fixtures" / "raw" / "single_source_to_target.json"

SOURCE_TYPE = "/name.space/SingleSourceToTarget"


def _valid_document() -> dict[str, Any]:
    graph = RevisionCallGraph.build(
        product="name.space:demo",
        version="1.0",
        timestamp=0,
        depset=[],
        partial=translate(RawCallGraph.from_path(RAW_GRAPH)),
    )
    return orjson.loads(orjson.dumps(graph.to_dict()))


def _write(path: Path, document: dict[str, Any]) -> Path:
    path.write_bytes(orjson.dumps(document))
    return path


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_key() -> None:
    """ValidationMessage.location appends the offending key."""
    msg = ValidationMessage("cha", Path("cg.json"), "bad", key="/a/B")
    assert msg.location() == "cg.json:cha[/a/B]"


def test_validation_message_location_without_key() -> None:
    msg = ValidationMessage("document", Path("cg.json"), "bad")
    assert msg.location() == "cg.json:document"


def test_validation_result_ok_tracks_errors() -> None:
    assert ValidationResult().ok is True
    assert ValidationResult(errors=[ValidationMessage("x", Path("a"), "boom")]).ok is False


# Group 2: Document checks


def test_generated_document_is_valid(tmp_path: Path) -> None:
    result = validate_callgraph(_write(tmp_path / "cg.json", _valid_document()))

    assert result.ok, [m.message for m in result.errors]
    assert result.warnings == []


def test_invalid_json_reported(tmp_path: Path) -> None:
    path = tmp_path / "cg.json"
    path.write_text("{", encoding="utf-8")

    result = validate_callgraph(path)

    assert _messages_contain(result.errors, "Invalid JSON")


def test_missing_file_reported(tmp_path: Path) -> None:
    result = validate_callgraph(tmp_path / "absent.json")

    assert _messages_contain(result.errors, "Invalid JSON")


def test_schema_violation_reported(tmp_path: Path) -> None:
    document = _valid_document()
    del document["timestamp"]

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert _messages_contain(result.errors, "Schema validation failed")


def test_unexpected_forge_is_a_warning(tmp_path: Path) -> None:
    document = _valid_document()
    document["forge"] = "pypi"

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert result.ok
    assert [w.section for w in result.warnings] == ["forge"]


# Group 3: Graph consistency


def test_unknown_internal_call_id_reported(tmp_path: Path) -> None:
    document = _valid_document()
    document["graph"]["internalCalls"].append([1, 99])

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert _messages_contain(result.errors, "Unknown method ID 99")


def test_duplicate_method_id_reported(tmp_path: Path) -> None:
    document = _valid_document()
    document["cha"]["/name.space/Other"] = {
        "methods": {"0": "/name.space/Other.run()%2Fjava.lang%2FVoidType"}
    }

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert _messages_contain(result.errors, "Duplicate method ID 0")


def test_method_under_wrong_type_reported(tmp_path: Path) -> None:
    document = _valid_document()
    document["cha"][SOURCE_TYPE]["methods"]["7"] = "/other.ns/Foo.run()%2Fjava.lang%2FVoidType"

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert _messages_contain(result.errors, "is not declared by this type")


@pytest.mark.parametrize("count", ["0", "one", "-1"])
def test_invalid_external_count_reported(tmp_path: Path, count: str) -> None:
    document = _valid_document()
    [key] = document["graph"]["externalCalls"]
    document["graph"]["externalCalls"][key]["invokespecial"] = count

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert _messages_contain(result.errors, "Invalid count")


def test_undecodable_external_callee_reported(tmp_path: Path) -> None:
    document = _valid_document()
    document["graph"]["externalCalls"] = {"0,not-a-uri": {"invokestatic": "1"}}

    result = validate_callgraph(_write(tmp_path / "cg.json", document))

    assert _messages_contain(result.errors, "missing leading '/'")
