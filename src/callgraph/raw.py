"""Raw call graph models for the external analyzer output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from errors import MalformedInputError

if TYPE_CHECKING:
    from pathlib import Path

CallKind = Literal[
    "invokevirtual",
    "invokespecial",
    "invokestatic",
    "invokeinterface",
    "invokedynamic",
]


class _MethodNodeBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int
    type: str = Field(description="JVM type name of the declaring class")
    name: str
    descriptor: str = Field(description="JVM method descriptor, e.g. (I)V")


class ApplicationMethod(_MethodNodeBase):
    """A method declared in the analyzed artifact."""

    origin: Literal["application"] = "application"


class LibraryMethod(_MethodNodeBase):
    """A method declared in a dependency or the platform runtime."""

    origin: Literal["library"] = "library"


MethodNode = Annotated[
    ApplicationMethod | LibraryMethod, Field(discriminator="origin")
]


class CallEdge(BaseModel):
    """A directed call from one node to another through one call site."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    caller: int
    callee: int
    kind: CallKind


class TypeFacts(BaseModel):
    """Supertype information the analyzer knows about a declaring type."""

    model_config = ConfigDict(extra="forbid")

    superclass: str | None = None
    interfaces: list[str] = Field(default_factory=list)


class RawCallGraph(BaseModel):
    """Methods, call edges and optional supertype facts for one classpath."""

    model_config = ConfigDict(extra="forbid")

    nodes: list[MethodNode] = Field(default_factory=list)
    edges: list[CallEdge] = Field(default_factory=list)
    types: dict[str, TypeFacts] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_edge_endpoints(self) -> RawCallGraph:
        ids = [node.id for node in self.nodes]
        known = set(ids)
        if len(known) != len(ids):
            msg = "node ids must be unique"
            raise ValueError(msg)
        for edge in self.edges:
            if edge.caller not in known or edge.callee not in known:
                msg = f"edge {edge.caller}->{edge.callee} references an unknown node"
                raise ValueError(msg)
        return self

    @classmethod
    def from_json(cls, data: str | bytes) -> RawCallGraph:
        """Validate analyzer output, mapping schema errors to MalformedInputError."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            msg = f"Invalid raw call graph: {exc}"
            raise MalformedInputError(msg) from exc

    @classmethod
    def from_path(cls, path: Path) -> RawCallGraph:
        return cls.from_json(path.read_bytes())


__all__ = [
    "ApplicationMethod",
    "CallEdge",
    "CallKind",
    "LibraryMethod",
    "MethodNode",
    "RawCallGraph",
    "TypeFacts",
]
