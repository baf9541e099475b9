"""Validation helpers for emitted revision call graph documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from artifacts.models.artifacts.revision import RevisionCallGraph
from contract.artifacts import FORGE, GENERATOR
from uri import FormatError, TypeURI, decode

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    section: str
    path: Path
    message: str
    key: str | None = None

    def location(self) -> str:
        if self.key is None:
            return f"{self.path}:{self.section}"
        return f"{self.path}:{self.section}[{self.key}]"


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_callgraph(path: Path) -> ValidationResult:
    """Check that a document parses and that its call graph is self-consistent.

    Every type and method URI must decode, each method must sit under its
    own type, method IDs must be unique, and every call must reference a
    known method ID.
    """
    result = ValidationResult()

    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(section="document", path=path, message=f"Invalid JSON: {exc}.")
        )
        return result

    try:
        graph = RevisionCallGraph.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                section="document",
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return result

    for name, expected, actual in (
        ("forge", FORGE, graph.forge),
        ("generator", GENERATOR, graph.generator),
    ):
        if actual != expected:
            result.warnings.append(
                ValidationMessage(
                    section=name,
                    path=path,
                    message=f"Expected {expected!r}, got {actual!r}.",
                )
            )

    method_ids = _validate_cha(graph, path, result)
    _validate_graph(graph, path, result, method_ids)
    return result


def _validate_cha(
    graph: RevisionCallGraph, path: Path, result: ValidationResult
) -> set[int]:
    method_ids: set[int] = set()
    for type_key, entry in graph.cha.items():
        try:
            type_uri = TypeURI.parse(type_key)
        except FormatError as exc:
            result.errors.append(
                ValidationMessage(section="cha", path=path, key=type_key, message=str(exc))
            )
            continue

        for id_text, method_text in entry.methods.items():
            if not id_text.isdigit():
                result.errors.append(
                    ValidationMessage(
                        section="cha",
                        path=path,
                        key=type_key,
                        message=f"Method ID is not a non-negative integer: {id_text!r}.",
                    )
                )
                continue
            method_id = int(id_text)
            if method_id in method_ids:
                result.errors.append(
                    ValidationMessage(
                        section="cha",
                        path=path,
                        key=type_key,
                        message=f"Duplicate method ID {method_id}.",
                    )
                )
            method_ids.add(method_id)

            try:
                method = decode(method_text)
            except FormatError as exc:
                result.errors.append(
                    ValidationMessage(section="cha", path=path, key=type_key, message=str(exc))
                )
                continue
            if method.type_uri != type_uri:
                result.errors.append(
                    ValidationMessage(
                        section="cha",
                        path=path,
                        key=type_key,
                        message=f"Method {method_text} is not declared by this type.",
                    )
                )
    return method_ids


def _validate_graph(
    graph: RevisionCallGraph,
    path: Path,
    result: ValidationResult,
    method_ids: set[int],
) -> None:
    for caller, callee in graph.graph.internal_calls:
        for endpoint in (caller, callee):
            if endpoint not in method_ids:
                result.errors.append(
                    ValidationMessage(
                        section="internalCalls",
                        path=path,
                        key=f"{caller},{callee}",
                        message=f"Unknown method ID {endpoint}.",
                    )
                )

    for key, counts in graph.graph.external_calls.items():
        caller_text, _, callee_text = key.partition(",")
        if not caller_text.isdigit() or int(caller_text) not in method_ids:
            result.errors.append(
                ValidationMessage(
                    section="externalCalls",
                    path=path,
                    key=key,
                    message=f"Unknown caller ID {caller_text!r}.",
                )
            )
        try:
            decode(callee_text)
        except FormatError as exc:
            result.errors.append(
                ValidationMessage(section="externalCalls", path=path, key=key, message=str(exc))
            )
        for kind, count in counts.items():
            if not count.isdigit() or int(count) < 1:
                result.errors.append(
                    ValidationMessage(
                        section="externalCalls",
                        path=path,
                        key=key,
                        message=f"Invalid count {count!r} for {kind}.",
                    )
                )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_callgraph",
]
