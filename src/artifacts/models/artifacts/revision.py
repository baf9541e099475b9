"""Revision call graph document models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from artifacts.models.artifacts.dependencies import Dependency
from contract.artifacts import FORGE, GENERATOR

if TYPE_CHECKING:
    from callgraph.partial import PartialCallGraph


class TypeEntry(BaseModel):
    """Class-hierarchy entry keyed by type URI in ``cha``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    methods: dict[str, str] = Field(default_factory=dict)
    super_classes: list[str] | None = Field(default=None, alias="superClasses")
    super_interfaces: list[str] | None = Field(default=None, alias="superInterfaces")

    @model_serializer(mode="wrap")
    def _drop_unknown_supertypes(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


class Graph(BaseModel):
    """Internal and external calls of one revision.

    ``external_calls`` keys are ``"{callerID},{calleeURI}"``; counts are
    decimal strings.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    internal_calls: list[tuple[int, int]] = Field(
        default_factory=list, alias="internalCalls"
    )
    external_calls: dict[str, dict[str, str]] = Field(
        default_factory=dict, alias="externalCalls"
    )

    @classmethod
    def from_partial(cls, partial: PartialCallGraph) -> Graph:
        return cls(
            internal_calls=partial.internal_calls,
            external_calls={
                f"{caller},{callee}": {kind: str(count) for kind, count in counts.items()}
                for (caller, callee), counts in partial.external_calls.items()
            },
        )


class RevisionCallGraph(BaseModel):
    """The emitted document for one artifact revision."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    forge: str = Field(default=FORGE)
    product: str
    version: str
    generator: str = Field(default=GENERATOR)
    depset: list[list[Dependency]] = Field(default_factory=list)
    cha: dict[str, TypeEntry] = Field(default_factory=dict)
    graph: Graph = Field(default_factory=Graph)
    timestamp: int

    @classmethod
    def build(
        cls,
        *,
        product: str,
        version: str,
        timestamp: int,
        depset: list[list[Dependency]],
        partial: PartialCallGraph,
    ) -> RevisionCallGraph:
        cha: dict[str, TypeEntry] = {}
        for type_uri, entry in partial.class_hierarchy.items():
            cha[str(type_uri)] = TypeEntry(
                methods={str(mid): str(uri) for mid, uri in entry.methods.items()},
                super_classes=(
                    None
                    if entry.super_classes is None
                    else [str(t) for t in entry.super_classes]
                ),
                super_interfaces=(
                    None
                    if entry.super_interfaces is None
                    else [str(t) for t in entry.super_interfaces]
                ),
            )
        return cls(
            product=product,
            version=version,
            timestamp=timestamp,
            depset=depset,
            cha=cha,
            graph=Graph.from_partial(partial),
        )

    def is_callgraph_empty(self) -> bool:
        return not self.graph.internal_calls and not self.graph.external_calls

    def call_count(self) -> int:
        return len(self.graph.internal_calls) + len(self.graph.external_calls)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = ["Graph", "RevisionCallGraph", "TypeEntry"]
