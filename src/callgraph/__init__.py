"""Raw call graph translation into URI-addressed partial call graphs."""

from callgraph.analyzer import CallGraphAnalyzer, ExternalAnalyzer, PrecomputedAnalyzer
from callgraph.jvm import method_uri, parse_descriptor, type_from_jvm_name
from callgraph.partial import PartialCallGraph, TypeMethods
from callgraph.raw import (
    ApplicationMethod,
    CallEdge,
    LibraryMethod,
    RawCallGraph,
    TypeFacts,
)
from callgraph.translate import translate

__all__ = [
    "ApplicationMethod",
    "CallEdge",
    "CallGraphAnalyzer",
    "ExternalAnalyzer",
    "LibraryMethod",
    "PartialCallGraph",
    "PrecomputedAnalyzer",
    "RawCallGraph",
    "TypeFacts",
    "TypeMethods",
    "method_uri",
    "parse_descriptor",
    "translate",
    "type_from_jvm_name",
]
