"""Model namespace for revision call graph documents."""

from artifacts.models.artifacts.dependencies import (
    Constraint,
    Dependency,
    DependencySet,
)
from artifacts.models.artifacts.revision import Graph, RevisionCallGraph, TypeEntry

__all__ = [
    "Constraint",
    "Dependency",
    "DependencySet",
    "Graph",
    "RevisionCallGraph",
    "TypeEntry",
]
