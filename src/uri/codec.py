"""Canonical URIs for Java types and methods.

A type fragment is ``/{namespace}/{Name}`` followed by ``%5B%5D`` per array
dimension. A method URI is::

    [//{product}]/{namespace}/{Type}.{method}({param},{param}...){return}

Parameter and return fragments are written relative (bare ``Name``) when
they share the method's namespace and absolute otherwise, then escaped
exactly once (``%`` -> ``%25``, ``/`` -> ``%2F``) so the enclosing URI keeps a
single ``/`` structure. Names are percent-encoded with ``quote(safe="$")``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote

from errors import MalformedInputError

ARRAY_SUFFIX = "%5B%5D"
JAVA_LANG = "java.lang"
DEFAULT_NAMESPACE = "(default)"

PRIMITIVE_TYPES = frozenset(
    {
        "VoidType",
        "BooleanType",
        "ByteType",
        "CharType",
        "ShortType",
        "IntType",
        "LongType",
        "FloatType",
        "DoubleType",
    }
)

# Encoded tokens only ever contain unreserved characters and %XX escapes.
_ENCODED_TOKEN = re.compile(r"(?:[A-Za-z0-9_.\-~$]|%[0-9A-F]{2})+")

_METHOD_BODY = re.compile(
    r"/(?P<namespace>[^/]+)/(?P<type>[^/.()]+)\.(?P<method>[^/()]+)"
    r"\((?P<params>[^()]*)\)(?P<ret>[^/(),]+)"
)


class FormatError(MalformedInputError):
    """Raised when a string does not follow the URI grammar."""

    kind = "FormatError"


def _quote(name: str) -> str:
    return quote(name, safe="$")


def _unquote_token(token: str, what: str) -> str:
    if not _ENCODED_TOKEN.fullmatch(token):
        msg = f"Invalid {what} token: {token!r}"
        raise FormatError(msg)
    return unquote(token)


def _escape(fragment: str) -> str:
    return fragment.replace("%", "%25").replace("/", "%2F")


def _check_type_name(name: str) -> None:
    if not name:
        msg = "Type name must not be empty"
        raise FormatError(msg)
    if any(char in name for char in ".[]"):
        msg = f"Type name may not contain '.', '[' or ']': {name!r}"
        raise FormatError(msg)


@dataclass(frozen=True)
class TypeURI:
    """A (possibly array) type: namespace, simple name and array depth."""

    namespace: str
    name: str
    dimensions: int = 0

    def __post_init__(self) -> None:
        if not self.namespace:
            msg = "Namespace must not be empty"
            raise FormatError(msg)
        _check_type_name(self.name)
        if self.dimensions < 0:
            msg = f"Array dimensions must be non-negative: {self.dimensions}"
            raise FormatError(msg)

    @property
    def is_primitive(self) -> bool:
        return self.namespace == JAVA_LANG and self.name in PRIMITIVE_TYPES

    def element_type(self) -> TypeURI:
        return TypeURI(self.namespace, self.name)

    def fragment(self, relative_to: str | None = None) -> str:
        """Render the fragment, bare when it lives in ``relative_to``."""
        suffix = ARRAY_SUFFIX * self.dimensions
        if relative_to is not None and relative_to == self.namespace:
            return f"{_quote(self.name)}{suffix}"
        return f"/{_quote(self.namespace)}/{_quote(self.name)}{suffix}"

    def __str__(self) -> str:
        return self.fragment()

    @classmethod
    def parse(cls, text: str, *, namespace: str | None = None) -> TypeURI:
        """Parse an unescaped type fragment.

        Relative fragments resolve against ``namespace``; without one they
        are rejected.
        """
        if text.startswith("/"):
            parts = text.split("/")
            if len(parts) != 3:
                msg = f"Type fragment must be /namespace/Name: {text!r}"
                raise FormatError(msg)
            _, raw_namespace, token = parts
            resolved_namespace = _unquote_token(raw_namespace, "namespace")
        else:
            if namespace is None:
                msg = f"Type fragment is missing leading '/': {text!r}"
                raise FormatError(msg)
            if "/" in text:
                msg = f"Relative type fragment may not contain '/': {text!r}"
                raise FormatError(msg)
            token = text
            resolved_namespace = namespace

        dimensions = 0
        while token.endswith(ARRAY_SUFFIX):
            token = token[: -len(ARRAY_SUFFIX)]
            dimensions += 1

        name = _unquote_token(token, "type") if token else ""
        if not name or any(char in name for char in ".[]"):
            msg = f"Unknown type token: {text!r}"
            raise FormatError(msg)
        return cls(resolved_namespace, name, dimensions)


@dataclass(frozen=True)
class MethodURI:
    """Structured form of a method URI.

    Equality and hashing are defined on the decoded fields, so two spellings
    of the same signature compare equal.
    """

    namespace: str
    type_name: str
    method_name: str
    parameters: tuple[TypeURI, ...]
    return_type: TypeURI
    product: str | None = None

    def __post_init__(self) -> None:
        if not self.namespace:
            msg = "Namespace must not be empty"
            raise FormatError(msg)
        _check_type_name(self.type_name)
        if not self.method_name:
            msg = "Method name must not be empty"
            raise FormatError(msg)

    @property
    def type_uri(self) -> TypeURI:
        return TypeURI(self.namespace, self.type_name)

    def __str__(self) -> str:
        return encode(
            self.namespace,
            self.type_name,
            self.method_name,
            self.parameters,
            self.return_type,
            product=self.product,
        )


def encode(
    namespace: str,
    type_name: str,
    method_name: str,
    parameters: tuple[TypeURI, ...] | list[TypeURI],
    return_type: TypeURI,
    *,
    product: str | None = None,
) -> str:
    """Build the canonical method URI string."""
    if not namespace:
        msg = "Namespace must not be empty"
        raise FormatError(msg)
    _check_type_name(type_name)
    if not method_name:
        msg = "Method name must not be empty"
        raise FormatError(msg)

    params = ",".join(_escape(param.fragment(namespace)) for param in parameters)
    ret = _escape(return_type.fragment(namespace))
    authority = "" if product is None else f"//{_quote(product)}"
    return (
        f"{authority}/{_quote(namespace)}/{_quote(type_name)}"
        f".{_quote(method_name)}({params}){ret}"
    )


def decode(text: str) -> MethodURI:
    """Parse a method URI string back into a :class:`MethodURI`."""
    if not text.startswith("/"):
        msg = f"URI is missing leading '/': {text!r}"
        raise FormatError(msg)

    product: str | None = None
    body = text
    if text.startswith("//"):
        end = text.find("/", 2)
        if end == -1:
            msg = f"URI has a product but no path: {text!r}"
            raise FormatError(msg)
        raw_product = text[2:end]
        product = _unquote_token(raw_product, "product") if raw_product else ""
        body = text[end:]

    if body.count("(") != 1 or body.count(")") != 1 or body.find("(") > body.find(")"):
        msg = f"Unbalanced parameter list: {text!r}"
        raise FormatError(msg)

    match = _METHOD_BODY.fullmatch(body)
    if match is None:
        msg = f"Malformed method URI: {text!r}"
        raise FormatError(msg)

    namespace = _unquote_token(match["namespace"], "namespace")
    type_name = _unquote_token(match["type"], "type")
    method_name = _unquote_token(match["method"], "method")

    parameters: tuple[TypeURI, ...] = ()
    if match["params"]:
        parameters = tuple(
            _decode_fragment(raw, namespace) for raw in match["params"].split(",")
        )
    return_type = _decode_fragment(match["ret"], namespace)

    return MethodURI(
        namespace=namespace,
        type_name=type_name,
        method_name=method_name,
        parameters=parameters,
        return_type=return_type,
        product=product,
    )


def _decode_fragment(raw: str, namespace: str) -> TypeURI:
    if not raw or not _ENCODED_TOKEN.fullmatch(raw):
        msg = f"Unknown type token: {raw!r}"
        raise FormatError(msg)
    return TypeURI.parse(unquote(raw), namespace=namespace)


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
