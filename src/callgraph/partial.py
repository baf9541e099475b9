"""Deduplicating accumulator for one artifact's call graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from uri import MethodURI, TypeURI


@dataclass
class TypeMethods:
    """Class-hierarchy entry: methods seen for one type plus known supertypes."""

    methods: dict[int, MethodURI] = field(default_factory=dict)
    super_classes: list[TypeURI] | None = None
    super_interfaces: list[TypeURI] | None = None


class PartialCallGraph:
    """Internal/external edges keyed by method IDs from the class hierarchy.

    ``internal_calls`` keeps first-insertion order and never holds the same
    (caller, callee) pair twice. ``external_calls`` maps (caller, callee URI)
    to per-call-kind occurrence counts.
    """

    def __init__(self) -> None:
        self.class_hierarchy: dict[TypeURI, TypeMethods] = {}
        self._internal_calls: dict[tuple[int, int], None] = {}
        self.external_calls: dict[tuple[int, MethodURI], dict[str, int]] = {}

    @property
    def internal_calls(self) -> list[tuple[int, int]]:
        return list(self._internal_calls)

    def add_method(self, method_id: int, method: MethodURI) -> None:
        entry = self.class_hierarchy.setdefault(method.type_uri, TypeMethods())
        entry.methods[method_id] = method

    def set_supertypes(
        self,
        type_uri: TypeURI,
        super_classes: list[TypeURI],
        super_interfaces: list[TypeURI],
    ) -> None:
        entry = self.class_hierarchy.setdefault(type_uri, TypeMethods())
        entry.super_classes = super_classes
        entry.super_interfaces = super_interfaces

    def add_internal_call(self, caller: int, callee: int) -> None:
        self._internal_calls.setdefault((caller, callee), None)

    def add_external_call(self, caller: int, callee: MethodURI, kind: str) -> None:
        metadata = self.external_calls.setdefault((caller, callee), {})
        metadata[kind] = metadata.get(kind, 0) + 1

    def is_empty(self) -> bool:
        return not self._internal_calls and not self.external_calls


__all__ = ["PartialCallGraph", "TypeMethods"]
