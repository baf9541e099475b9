"""Revision call graph contract definitions.

This module fixes the constants and naming rules of the emitted document.
"""

from __future__ import annotations

# Forge and generator identifiers written into every revision document.
FORGE = "mvn"
GENERATOR = "WALA"

# Version recorded for dependencies that declare no <version>.
WILDCARD_VERSION = "*"

MAVEN_CENTRAL = "https://repo.maven.apache.org/maven2/"


def callgraph_filename(product: str, version: str) -> str:
    """Build the output file name for a revision.

    Format: ``{artifactId}_{groupId}_{version}.json`` where ``product`` is
    ``groupId:artifactId``.

    Examples:
        >>> callgraph_filename("org.slf4j:slf4j-api", "1.7.29")
        'slf4j-api_org.slf4j_1.7.29.json'
    """
    group_id, sep, artifact_id = product.partition(":")
    if not sep:
        return f"{product}_{version}.json"
    return f"{artifact_id}_{group_id}_{version}.json"


__all__ = [
    "FORGE",
    "GENERATOR",
    "MAVEN_CENTRAL",
    "WILDCARD_VERSION",
    "callgraph_filename",
]
