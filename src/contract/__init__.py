"""Output contract for revision call graph documents.

Constants are imported eagerly; validation is loaded lazily because it
depends on the artifact models, which themselves import this package.
"""

from contract.artifacts import (
    FORGE,
    GENERATOR,
    MAVEN_CENTRAL,
    WILDCARD_VERSION,
    callgraph_filename,
)


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_callgraph"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_callgraph,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_callgraph": validate_callgraph,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "FORGE",
    "GENERATOR",
    "MAVEN_CENTRAL",
    "WILDCARD_VERSION",
    "ValidationMessage",
    "ValidationResult",
    "callgraph_filename",
    "validate_callgraph",
]
