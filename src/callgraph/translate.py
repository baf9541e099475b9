"""Translation of a raw analyzer graph into a PartialCallGraph."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from callgraph.jvm import method_uri, type_from_jvm_name
from callgraph.partial import PartialCallGraph
from callgraph.raw import ApplicationMethod

if TYPE_CHECKING:
    from callgraph.raw import RawCallGraph
    from uri import MethodURI

logger = logging.getLogger(__name__)

# Callees outside the artifact are addressed with an empty product authority.
EXTERNAL_PRODUCT = ""


def _assign_method_ids(
    raw: RawCallGraph, graph: PartialCallGraph
) -> dict[int, int]:
    """Number every artifact method and register it in the class hierarchy.

    Methods are numbered in (type URI, method URI) order so the IDs do not
    depend on the order in which the analyzer listed its nodes.
    """
    uris: dict[int, MethodURI] = {
        node.id: method_uri(node.type, node.name, node.descriptor)
        for node in raw.nodes
        if isinstance(node, ApplicationMethod)
    }

    method_ids: dict[MethodURI, int] = {}
    for uri in sorted(set(uris.values()), key=lambda u: (str(u.type_uri), str(u))):
        method_ids[uri] = len(method_ids)
        graph.add_method(method_ids[uri], uri)

    return {node_id: method_ids[uri] for node_id, uri in uris.items()}


def _attach_supertypes(raw: RawCallGraph, graph: PartialCallGraph) -> None:
    for jvm_name, facts in raw.types.items():
        type_uri = type_from_jvm_name(jvm_name)
        if type_uri not in graph.class_hierarchy:
            continue
        super_classes = (
            [type_from_jvm_name(facts.superclass)] if facts.superclass else []
        )
        super_interfaces = [type_from_jvm_name(name) for name in facts.interfaces]
        graph.set_supertypes(type_uri, super_classes, super_interfaces)


def translate(raw: RawCallGraph) -> PartialCallGraph:
    """Build the deduplicated internal/external call graph of the artifact.

    Edges whose caller is a library method are dropped. Edges are applied in
    a canonical order, so the result is independent of the analyzer's
    traversal order.
    """
    graph = PartialCallGraph()
    local_ids = _assign_method_ids(raw, graph)
    _attach_supertypes(raw, graph)

    nodes = {node.id: node for node in raw.nodes}
    internal: set[tuple[int, int]] = set()
    external: list[tuple[int, str, MethodURI, str]] = []
    external_uris: dict[int, MethodURI] = {}
    skipped = 0

    for edge in raw.edges:
        caller = local_ids.get(edge.caller)
        if caller is None:
            skipped += 1
            continue

        callee = local_ids.get(edge.callee)
        if callee is not None:
            internal.add((caller, callee))
            continue

        target = external_uris.get(edge.callee)
        if target is None:
            node = nodes[edge.callee]
            target = method_uri(
                node.type, node.name, node.descriptor, product=EXTERNAL_PRODUCT
            )
            external_uris[edge.callee] = target
        external.append((caller, str(target), target, edge.kind))

    for caller, callee in sorted(internal):
        graph.add_internal_call(caller, callee)

    for caller, _, target, kind in sorted(external, key=lambda e: (e[0], e[1], e[3])):
        graph.add_external_call(caller, target, kind)

    logger.debug(
        "Translated %d types, %d internal and %d external calls (%d library edges skipped)",
        len(graph.class_hierarchy),
        len(graph.internal_calls),
        len(graph.external_calls),
        skipped,
    )
    return graph


__all__ = ["EXTERNAL_PRODUCT", "translate"]
