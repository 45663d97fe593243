# tests/test_serializer.py
"""
测试报文序列化器，以及 解析 -> 序列化 的往返一致性。
"""

import pytest

from shiori_core.exceptions import ProtocolError
from shiori_core.protocols.message import (
    ErrorLevel,
    Headers,
    Method,
    Request,
    Response,
    SecurityLevel,
    Status,
)
from shiori_core.protocols.parser import parse_request, parse_response
from shiori_core.protocols.serializer import (
    serialize,
    serialize_headers,
    serialize_request,
    serialize_response,
)


def test_serialize_request_wire_form():
    request = Request(
        method=Method.GET,
        version="3.0",
        headers={"Charset": "UTF-8", "ID": "OnBoot"},
    )
    assert serialize_request(request) == (
        "GET SHIORI/3.0\r\nCharset: UTF-8\r\nID: OnBoot\r\n\r\n"
    )


def test_serialize_request_multi_word_method():
    request = Request(method=Method.NOTIFY_OTHER_GHOST_NAME, version="2.3")
    assert serialize_request(request) == "NOTIFY OtherGhostName SHIORI/2.3\r\n\r\n"


def test_serialize_zero_headers_still_terminated():
    assert serialize(Request()) == "GET SHIORI/3.0\r\n\r\n"
    assert serialize(Response(status=Status.NO_CONTENT)) == (
        "SHIORI/3.0 204 No Content\r\n\r\n"
    )


def test_serialize_response_wire_form():
    response = Response(version="3.0", status=Status.INTERNAL_SERVER_ERROR)
    response.error_level = ErrorLevel.CRITICAL
    response.error_description = "boom"
    assert serialize_response(response) == (
        "SHIORI/3.0 500 Internal Server Error\r\n"
        "ErrorLevel: critical\r\n"
        "ErrorDescription: boom\r\n"
        "\r\n"
    )


def test_serialize_follows_insertion_order():
    headers = Headers()
    headers["B"] = "2"
    headers["A"] = "1"
    headers["B"] = "3"
    assert serialize_headers(headers) == "B: 3\r\nA: 1\r\n"


@pytest.mark.parametrize(
    "name, value",
    [
        ("ID", "line1\r\nline2"),
        ("ID", "bare\nlf"),
        ("Bad Name", "x"),
        ("", "x"),
        ("A: B", "c"),
        ("ID", 1),
        (1, "x"),
    ],
)
def test_serialize_rejects_unrepresentable_header(name, value):
    with pytest.raises(ProtocolError):
        serialize_headers(Headers({name: value}))


def test_serialize_unknown_type():
    with pytest.raises(TypeError):
        serialize("GET SHIORI/3.0")


# =========================================================================
# 往返一致性
# =========================================================================


@pytest.mark.parametrize("method", list(Method))
def test_request_roundtrip(method):
    request = Request(method=method, version="2.6")
    request.id = "OnTest"
    request.charset = "Shift_JIS"
    request.security_level = SecurityLevel.EXTERNAL
    request.set_reference(0, "a\x01b")
    request.set_reference(7, "")

    parsed = parse_request(serialize(request))

    assert parsed.method is request.method
    assert parsed.protocol is request.protocol
    assert parsed.version == request.version
    assert list(parsed.headers.items()) == list(request.headers.items())
    assert parsed == request


@pytest.mark.parametrize("status", list(Status))
def test_response_roundtrip(status):
    response = Response(version="3.0", status=status)
    response.value = r"\0\s[0]こんにちは\e"
    response.sender = "ghost"
    response.marker = "m\x02n"

    parsed = parse_response(serialize(response))

    assert parsed.status is status
    assert parsed.version == response.version
    assert list(parsed.headers.items()) == list(response.headers.items())
    assert parsed == response


def test_parse_then_serialize_is_stable(request_text, response_text):
    assert serialize(parse_request(request_text)) == request_text
    assert serialize(parse_response(response_text)) == response_text


def test_colon_in_header_name_does_not_leak_into_value():
    request = Request(headers={"A: B": "c"})
    with pytest.raises(ProtocolError, match="header name"):
        serialize_request(request)
