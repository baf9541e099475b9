"""Canonical URI codec for Java types and methods."""

from uri.codec import (
    ARRAY_SUFFIX,
    DEFAULT_NAMESPACE,
    JAVA_LANG,
    PRIMITIVE_TYPES,
    FormatError,
    MethodURI,
    TypeURI,
    decode,
    encode,
)

__all__ = [
    "ARRAY_SUFFIX",
    "DEFAULT_NAMESPACE",
    "JAVA_LANG",
    "PRIMITIVE_TYPES",
    "FormatError",
    "MethodURI",
    "TypeURI",
    "decode",
    "encode",
]
