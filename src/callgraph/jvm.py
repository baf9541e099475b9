"""Mapping of JVM type names and method descriptors onto URIs."""

from __future__ import annotations

from errors import MalformedInputError
from uri import DEFAULT_NAMESPACE, JAVA_LANG, MethodURI, TypeURI

PRIMITIVE_DESCRIPTORS: dict[str, str] = {
    "V": "VoidType",
    "Z": "BooleanType",
    "B": "ByteType",
    "C": "CharType",
    "S": "ShortType",
    "I": "IntType",
    "J": "LongType",
    "F": "FloatType",
    "D": "DoubleType",
}

CONSTRUCTOR = "<init>"

OBJECT_TYPE = TypeURI(JAVA_LANG, "Object")


def type_from_jvm_name(name: str) -> TypeURI:
    """Convert a JVM type name to a TypeURI.

    Accepts primitive letters, ``Lpkg/Name`` (with or without the trailing
    ``;``) and any number of leading ``[`` array markers.

    Examples:
        >>> str(type_from_jvm_name("Ljava/lang/String;"))
        '/java.lang/String'
        >>> str(type_from_jvm_name("[I"))
        '/java.lang/IntType%5B%5D'
    """
    stripped = name.lstrip("[")
    dimensions = len(name) - len(stripped)

    if stripped in PRIMITIVE_DESCRIPTORS:
        return TypeURI(JAVA_LANG, PRIMITIVE_DESCRIPTORS[stripped], dimensions)

    if not stripped.startswith("L") or len(stripped) < 2:
        msg = f"Unrecognized JVM type name: {name!r}"
        raise MalformedInputError(msg)

    internal = stripped[1:].removesuffix(";")
    package, _, simple = internal.rpartition("/")
    namespace = package.replace("/", ".") if package else DEFAULT_NAMESPACE
    return TypeURI(namespace, simple, dimensions)


def _read_field_type(descriptor: str, pos: int) -> tuple[TypeURI, int]:
    start = pos
    while pos < len(descriptor) and descriptor[pos] == "[":
        pos += 1
    if pos >= len(descriptor):
        msg = f"Truncated descriptor: {descriptor!r}"
        raise MalformedInputError(msg)

    if descriptor[pos] == "L":
        end = descriptor.find(";", pos)
        if end == -1:
            msg = f"Unterminated class type in descriptor: {descriptor!r}"
            raise MalformedInputError(msg)
        return type_from_jvm_name(descriptor[start : end + 1]), end + 1

    return type_from_jvm_name(descriptor[start : pos + 1]), pos + 1


def parse_descriptor(descriptor: str) -> tuple[tuple[TypeURI, ...], TypeURI]:
    """Split a method descriptor into parameter types and return type."""
    if not descriptor.startswith("("):
        msg = f"Method descriptor must start with '(': {descriptor!r}"
        raise MalformedInputError(msg)

    params: list[TypeURI] = []
    pos = 1
    while pos < len(descriptor) and descriptor[pos] != ")":
        param, pos = _read_field_type(descriptor, pos)
        params.append(param)

    if pos >= len(descriptor):
        msg = f"Unbalanced method descriptor: {descriptor!r}"
        raise MalformedInputError(msg)

    ret, end = _read_field_type(descriptor, pos + 1)
    if end != len(descriptor):
        msg = f"Trailing characters in method descriptor: {descriptor!r}"
        raise MalformedInputError(msg)
    return tuple(params), ret


def method_uri(
    type_name: str,
    method_name: str,
    descriptor: str,
    *,
    product: str | None = None,
) -> MethodURI:
    """Build the MethodURI for a JVM method reference."""
    declaring = type_from_jvm_name(type_name)
    if declaring.dimensions:
        # Array types inherit every method from Object.
        declaring = OBJECT_TYPE
    elif declaring.is_primitive:
        msg = f"Primitive type cannot declare methods: {type_name!r}"
        raise MalformedInputError(msg)

    name = declaring.name if method_name == CONSTRUCTOR else method_name
    params, ret = parse_descriptor(descriptor)
    return MethodURI(
        namespace=declaring.namespace,
        type_name=declaring.name,
        method_name=name,
        parameters=params,
        return_type=ret,
        product=product,
    )


__all__ = [
    "CONSTRUCTOR",
    "PRIMITIVE_DESCRIPTORS",
    "method_uri",
    "parse_descriptor",
    "type_from_jvm_name",
]
