"""POM parsing and direct dependency extraction.

Only the given document is read: no parent POM inheritance, no dependency
management, no version range parsing. Each resolved dependency carries one
pinned constraint (lowerBound == upperBound).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from artifacts.models.artifacts.dependencies import Constraint, Dependency, DependencySet
from contract.artifacts import FORGE, WILDCARD_VERSION
from errors import MalformedInputError

PROPERTY_MARKER = "${"


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if isinstance(child.tag, str) and _local_name(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [
        child
        for child in element
        if isinstance(child.tag, str) and _local_name(child.tag) == name
    ]


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def parse_pom(content: bytes) -> ET.Element:
    """Parse POM bytes and return the ``<project>`` root element."""
    try:
        return ET.fromstring(content)
    except ET.ParseError as exc:
        msg = f"Unparseable POM: {exc}"
        raise MalformedInputError(msg) from exc


def read_properties(root: ET.Element) -> dict[str, str]:
    """Collect the children of the root-level ``<properties>`` block."""
    properties_node = _child(root, "properties")
    if properties_node is None:
        return {}
    return {
        _local_name(prop.tag): _text(prop)
        for prop in properties_node
        if isinstance(prop.tag, str)
    }


def resolve_version(version_text: str | None, properties: dict[str, str]) -> str | None:
    """Resolve a ``<version>`` value.

    Missing elements become the wildcard; ``${name}`` references are looked
    up in ``properties`` and resolve to None when the property is unknown.
    """
    if version_text is None:
        return WILDCARD_VERSION
    if version_text.startswith(PROPERTY_MARKER):
        return properties.get(version_text[len(PROPERTY_MARKER) : -1])
    return version_text


def resolve_dependency_block(
    block: ET.Element, properties: dict[str, str]
) -> list[Dependency]:
    dependencies: list[Dependency] = []
    for dep_node in _children(block, "dependency"):
        group_node = _child(dep_node, "groupId")
        artifact_node = _child(dep_node, "artifactId")
        if group_node is None or artifact_node is None:
            msg = "POM dependency is missing groupId or artifactId"
            raise MalformedInputError(msg)

        version_node = _child(dep_node, "version")
        version = resolve_version(
            _text(version_node) if version_node is not None else None, properties
        )
        dependencies.append(
            Dependency(
                forge=FORGE,
                product=f"{_text(group_node)}:{_text(artifact_node)}",
                constraints=[Constraint.pinned(version)],
            )
        )
    return dependencies


def resolve_dependency_set(content: bytes) -> DependencySet:
    """Resolve the root and per-profile dependency blocks of a POM.

    Order is root block first, then profiles in document order. Blocks that
    yield no dependencies are omitted.
    """
    root = parse_pom(content)
    properties = read_properties(root)

    blocks: list[ET.Element] = []
    outer = _child(root, "dependencies")
    if outer is not None:
        blocks.append(outer)

    profiles_node = _child(root, "profiles")
    if profiles_node is not None:
        for profile in _children(profiles_node, "profile"):
            profile_deps = _child(profile, "dependencies")
            if profile_deps is not None:
                blocks.append(profile_deps)

    depset: DependencySet = []
    for block in blocks:
        resolved = resolve_dependency_block(block, properties)
        if resolved:
            depset.append(resolved)
    return depset


__all__ = [
    "PROPERTY_MARKER",
    "parse_pom",
    "read_properties",
    "resolve_dependency_block",
    "resolve_dependency_set",
    "resolve_version",
]
