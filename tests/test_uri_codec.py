from __future__ import annotations

import pytest

from errors import MalformedInputError
from uri import DEFAULT_NAMESPACE, FormatError, MethodURI, TypeURI, decode, encode

VOID = TypeURI("java.lang", "VoidType")


def test_internal_method_uri_escapes_foreign_return_type() -> None:
    uri = encode("name.space", "SingleSourceToTarget", "sourceMethod", (), VOID)

    assert uri == "/name.space/SingleSourceToTarget.sourceMethod()%2Fjava.lang%2FVoidType"


def test_external_method_uri_has_empty_product_authority() -> None:
    uri = encode("java.lang", "Object", "Object", (), VOID, product="")

    assert uri == "///java.lang/Object.Object()VoidType"


def test_product_authority_is_encoded() -> None:
    uri = encode("com.example", "Util", "run", (), VOID, product="com.example:util")

    assert uri.startswith("//com.example%3Autil/com.example/Util.run(")
    assert decode(uri).product == "com.example:util"


def test_array_parameter_is_escaped_exactly_once() -> None:
    uri = encode(
        "com.example",
        "Util",
        "join",
        (
            TypeURI("java.lang", "String", 1),
            TypeURI("com.example", "Sep"),
            TypeURI("java.lang", "IntType"),
        ),
        TypeURI("java.lang", "String"),
    )

    assert uri == (
        "/com.example/Util.join("
        "%2Fjava.lang%2FString%255B%255D,Sep,%2Fjava.lang%2FIntType"
        ")%2Fjava.lang%2FString"
    )


@pytest.mark.parametrize(
    "method",
    [
        MethodURI("name.space", "Foo", "bar", (), VOID),
        MethodURI(
            "name.space",
            "Foo",
            "bar",
            (TypeURI("name.space", "Foo", 2), TypeURI("java.util", "List")),
            TypeURI("java.lang", "IntType", 1),
        ),
        MethodURI("java.lang", "Object", "Object", (), VOID, product=""),
        MethodURI("name.space", "Foo", "<clinit>", (), TypeURI("java.lang", "VoidType")),
        MethodURI(DEFAULT_NAMESPACE, "Main", "main", (TypeURI("java.lang", "String", 1),), VOID),
        MethodURI("name.space", "Outer$Inner", "lambda$run$0", (), VOID),
    ],
)
def test_decode_inverts_encode(method: MethodURI) -> None:
    decoded = decode(str(method))

    assert decoded == method
    assert str(decoded) == str(method)


def test_clinit_name_is_percent_encoded() -> None:
    uri = encode("name.space", "Foo", "<clinit>", (), VOID)

    assert ".%3Cclinit%3E()" in uri


def test_default_namespace_is_percent_encoded() -> None:
    assert str(TypeURI(DEFAULT_NAMESPACE, "Main")) == "/%28default%29/Main"


def test_relative_and_absolute_spellings_compare_equal() -> None:
    absolute = decode(
        "/java.lang/Object.equals(%2Fjava.lang%2FObject)%2Fjava.lang%2FBooleanType"
    )
    relative = decode("/java.lang/Object.equals(Object)BooleanType")

    assert absolute == relative
    assert hash(absolute) == hash(relative)
    assert str(absolute) == "/java.lang/Object.equals(Object)BooleanType"


def test_type_uri_parse_counts_array_dimensions() -> None:
    parsed = TypeURI.parse("/java.lang/IntType%5B%5D%5B%5D")

    assert parsed == TypeURI("java.lang", "IntType", 2)
    assert parsed.is_primitive
    assert parsed.element_type() == TypeURI("java.lang", "IntType")


def test_relative_type_fragment_needs_namespace() -> None:
    with pytest.raises(FormatError):
        TypeURI.parse("Foo")

    assert TypeURI.parse("Foo", namespace="name.space") == TypeURI("name.space", "Foo")


@pytest.mark.parametrize(
    "text",
    [
        "name.space/Foo.bar()VoidType",
        "/name.space/Foo.bar(VoidType",
        "/name.space/Foo.bar)(VoidType",
        "/name.space/Foo.bar(()VoidType",
        "/name.space/Foo.bar()",
        "/name.space/Foo.bar()IntType%5B",
        "/name.space/Foo.bar(In t)VoidType",
        "/name.space/Foo.bar(,)VoidType",
        "//product",
        "/Foo.bar()VoidType",
    ],
)
def test_decode_rejects_malformed_uris(text: str) -> None:
    with pytest.raises(FormatError):
        decode(text)


def test_format_error_is_malformed_input() -> None:
    with pytest.raises(MalformedInputError) as exc_info:
        decode("not-a-uri")

    assert exc_info.value.kind == "FormatError"


@pytest.mark.parametrize("name", ["", "a.b", "Foo[]"])
def test_type_names_reject_reserved_characters(name: str) -> None:
    with pytest.raises(FormatError):
        TypeURI("name.space", name)


def test_empty_namespace_rejected() -> None:
    with pytest.raises(FormatError):
        encode("", "Foo", "bar", (), VOID)
