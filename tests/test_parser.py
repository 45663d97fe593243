# tests/test_parser.py
"""
测试报文解析器 (parse_request / parse_response)。
重点验证:
1. 首行多词方法的消歧 (GET Version 不能被识别为 GET)。
2. 结尾空行数量必须恰好为 2。
3. 头部重复时后者覆盖前者。
"""

import pytest

from shiori_core.exceptions import (
    InvalidHeaderLineError,
    InvalidLeadingLineError,
    MalformedTerminationError,
    ParseError,
    UnknownEnumValueError,
)
from shiori_core.protocols.message import (
    Method,
    Protocol,
    SecurityLevel,
    Status,
)
from shiori_core.protocols.parser import parse_request, parse_response

# =========================================================================
# Request
# =========================================================================


def test_parse_request_basic(request_text):
    request = parse_request(request_text)
    assert request.method is Method.GET
    assert request.protocol is Protocol.SHIORI
    assert request.version == "3.0"
    assert request.id == "OnBoot"
    assert request.charset == "UTF-8"
    assert request.sender == "SSP"
    assert request.security_level is SecurityLevel.LOCAL
    assert request.reference(0) == "master"
    assert list(request.headers) == [
        "Charset",
        "Sender",
        "SecurityLevel",
        "ID",
        "Reference0",
    ]


def test_parse_request_get_with_id():
    request = parse_request("GET SHIORI/3.0\r\nID: x\r\n\r\n")
    assert request.method is Method.GET
    assert request.id == "x"


def test_parse_notify():
    request = parse_request("NOTIFY SHIORI/3.0\r\nCharset: UTF-8\r\nID: hwnd\r\n\r\n")
    assert request.method is Method.NOTIFY
    assert request.id == "hwnd"


@pytest.mark.parametrize("method", list(Method))
def test_parse_every_method_token(method):
    """多词方法不能被裸 GET / NOTIFY 前缀截断"""
    request = parse_request(f"{method.display} SHIORI/2.6\r\n\r\n")
    assert request.method is method
    assert request.version == "2.6"


def test_parse_get_version_zero_headers():
    request = parse_request("GET Version SHIORI/2.6\r\n\r\n")
    assert request.method is Method.GET_VERSION
    assert len(request.headers) == 0


def test_parse_request_lf_line_endings():
    """宿主实现同样接受 LF 作为行边界"""
    request = parse_request(
        "GET SHIORI/3.0\nCharset: UTF-8\nID: menu.background.color.b\n\n"
    )
    assert request.id == "menu.background.color.b"


def test_parse_request_bare_cr_line_endings():
    request = parse_request("GET SHIORI/3.0\rCharset: UTF-8\rID: OnBoot\r\r")
    assert request.id == "OnBoot"
    assert request.charset == "UTF-8"
    assert len(request.headers) == 2


def test_parse_response_mixed_line_endings():
    response = parse_response("SHIORI/3.0 200 OK\rValue: a\nSender: b\r\n\r")
    assert response.value == "a"
    assert response.sender == "b"


@pytest.mark.parametrize(
    "leading",
    [
        "POST SHIORI/3.0",  # 未知方法
        "GET Foo SHIORI/3.0",  # 未知的多词方法
        "GET HTTP/1.1",  # 未知协议
        "GET SHIORI/3",  # 版本号缺少小数部分
        "GET  SHIORI/3.0",  # 多余空格
        "get SHIORI/3.0",  # 方法区分大小写
        "",
    ],
)
def test_parse_request_invalid_leading_line(leading):
    with pytest.raises(InvalidLeadingLineError) as e:
        parse_request(f"{leading}\r\nID: x\r\n\r\n")
    assert e.value.line_index == 0
    assert e.value.line == leading


def test_parse_empty_input():
    with pytest.raises(InvalidLeadingLineError):
        parse_request("")


@pytest.mark.parametrize(
    "line",
    [
        "ID:x",  # 冒号后缺少空格
        "ID x",
        "X-Custom: y",  # 名称不允许连字符
        ": value",
        " ID: x",
    ],
)
def test_parse_request_invalid_header_line(line):
    text = f"GET SHIORI/3.0\r\nCharset: UTF-8\r\n{line}\r\n\r\n"
    with pytest.raises(InvalidHeaderLineError) as e:
        parse_request(text)
    assert e.value.line_index == 2
    assert e.value.line == line
    assert "line 2" in str(e.value)


def test_header_name_allows_dots_and_digits():
    request = parse_request("GET SHIORI/3.0\r\nX.Ukagaka.1: v\r\n\r\n")
    assert request.headers["X.Ukagaka.1"] == "v"


def test_header_value_kept_verbatim():
    value = "  a\x01b\x02c: d\\n  "
    request = parse_request(f"GET SHIORI/3.0\r\nReference0: {value}\r\n\r\n")
    assert request.reference(0) == value


def test_empty_header_value():
    request = parse_request("GET SHIORI/3.0\r\nReference0: \r\n\r\n")
    assert request.reference(0) == ""


def test_duplicate_header_last_wins():
    request = parse_request("GET SHIORI/3.0\r\nID: first\r\nCharset: UTF-8\r\nID: second\r\n\r\n")
    assert request.id == "second"
    assert len(request.headers) == 2


# =========================================================================
# Framing
# =========================================================================


def test_zero_headers_terminated():
    """首行 + CRLF + CRLF 恰好产生 2 个空行"""
    request = parse_request("GET SHIORI/3.0\r\n\r\n")
    assert request.method is Method.GET
    assert len(request.headers) == 0


@pytest.mark.parametrize(
    "text, blank_lines",
    [
        ("GET SHIORI/3.0", 0),
        ("GET SHIORI/3.0\r\n", 1),
        ("GET SHIORI/3.0\r\nID: x\r\n", 1),
        ("GET SHIORI/3.0\r\nID: x", 0),
        ("GET SHIORI/3.0\r\n\r\n\r\n", 3),
        ("GET SHIORI/3.0\r\nID: x\r\n\r\n\r\n\r\n", 4),
    ],
)
def test_malformed_termination(text, blank_lines):
    with pytest.raises(MalformedTerminationError) as e:
        parse_request(text)
    assert e.value.blank_lines == blank_lines


def test_parse_errors_share_base():
    for text in ("POST SHIORI/3.0\r\n\r\n", "GET SHIORI/3.0\r\nbad\r\n\r\n", "GET SHIORI/3.0\r\n"):
        with pytest.raises(ParseError):
            parse_request(text)


# =========================================================================
# Response
# =========================================================================


def test_parse_response_basic(response_text):
    response = parse_response(response_text)
    assert response.protocol is Protocol.SHIORI
    assert response.version == "3.0"
    assert response.status is Status.OK
    assert response.status_code == 200
    assert response.value == "\\0\\s[0]Hello\\e"
    assert response.sender == "ghost"


@pytest.mark.parametrize("status", list(Status))
def test_parse_every_status(status):
    response = parse_response(f"SHIORI/3.0 {int(status)} {status.display}\r\n\r\n")
    assert response.status is status


def test_parse_response_ignores_status_text():
    """状态行中的名称文本不做校验，以数字为准"""
    response = parse_response("SHIORI/2.0 204 Whatever You Like\r\n\r\n")
    assert response.status is Status.NO_CONTENT
    assert response.version == "2.0"


def test_parse_response_strict_status_text():
    with pytest.raises(InvalidLeadingLineError):
        parse_response("SHIORI/3.0 204 OK\r\n\r\n", strict_status_text=True)
    response = parse_response("SHIORI/3.0 204 No Content\r\n\r\n", strict_status_text=True)
    assert response.status is Status.NO_CONTENT


def test_parse_response_unknown_status():
    with pytest.raises(UnknownEnumValueError) as e:
        parse_response("SHIORI/3.0 999 Unknown\r\n\r\n")
    assert e.value.value == 999


@pytest.mark.parametrize(
    "leading",
    [
        "SHIORI/3.0 OK",
        "SHIORI/3.0 200",  # 缺少名称部分前的空格
        "HTTP/1.1 200 OK",
        "GET SHIORI/3.0",
    ],
)
def test_parse_response_invalid_status_line(leading):
    with pytest.raises(InvalidLeadingLineError):
        parse_response(f"{leading}\r\n\r\n")


def test_parse_response_termination():
    with pytest.raises(MalformedTerminationError):
        parse_response("SHIORI/3.0 200 OK\r\nValue: x\r\n")
