# src/shiori_core/protocols/parser.py
"""
SHIORI 报文解析器 (Parser)

负责将线格式文本校验并解码为 Request / Response。
采用逐行解析而非对整条报文套用单个正则：报文长度与头部数量均无上限。

本模块是无状态的 (Stateless)，解析失败时直接抛出异常，不返回部分结果。
"""

import logging
import re
from collections.abc import Callable
from typing import TypeVar

from ..exceptions import (
    InvalidHeaderLineError,
    InvalidLeadingLineError,
    MalformedTerminationError,
)
from .constants import Grammar, Wire
from .message import (
    Headers,
    Method,
    Protocol,
    Request,
    Response,
    Status,
    decode_enum,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", Request, Response)


def _parse_message(
    text: str,
    leading_re: re.Pattern,
    build: Callable[[tuple[str, ...], str], M],
) -> M:
    """通用的逐行解析流程。

    Args:
        text: 完整报文文本。
        leading_re: 首行正则。
        build: 根据首行捕获组构建报文对象的回调，接收 (groups, 原始首行)。

    Returns:
        填充好头部的报文对象。
    """
    lines = Wire.LINE_SPLIT_RE.split(text)

    # 1. 首行
    leading = lines[0]
    m = leading_re.fullmatch(leading)
    if m is None:
        raise InvalidLeadingLineError(0, leading)
    message = build(m.groups(), leading)

    # 2. 头部行与空行
    headers = Headers()
    blank_lines = 0
    for index, line in enumerate(lines[1:], start=1):
        if not line:
            blank_lines += 1
            continue
        hm = Grammar.HEADER_LINE_RE.fullmatch(line)
        if hm is None:
            raise InvalidHeaderLineError(index, line)
        # 重复头部: 后出现的覆盖先出现的
        headers[hm.group(1)] = hm.group(2)

    # 3. 结尾校验
    if blank_lines != Wire.TERMINATING_BLANK_LINES:
        raise MalformedTerminationError(blank_lines)

    message.headers = headers
    logger.debug("parsed %r with %d headers", leading, len(headers))
    return message


def parse_request(text: str) -> Request:
    """解析 SHIORI 请求报文。

    Args:
        text: 完整请求文本 (如 "GET SHIORI/3.0\\r\\nID: OnBoot\\r\\n\\r\\n")。

    Returns:
        Request: 解析后的请求对象。

    Raises:
        InvalidLeadingLineError: 请求行不合法 (含未知方法)。
        InvalidHeaderLineError: 头部行不合法。
        MalformedTerminationError: 结尾空行数量不等于 2。
    """

    def build(groups: tuple[str, ...], leading: str) -> Request:
        method, protocol, version = groups
        return Request(
            method=decode_enum(Method, method),
            protocol=decode_enum(Protocol, protocol),
            version=version,
        )

    return _parse_message(text, Grammar.REQUEST_LINE_RE, build)


def parse_response(text: str, strict_status_text: bool = False) -> Response:
    """解析 SHIORI 响应报文。

    状态行中数字状态码之后的名称文本默认不做校验，以数字状态码为准。

    Args:
        text: 完整响应文本 (如 "SHIORI/3.0 200 OK\\r\\nValue: hi\\r\\n\\r\\n")。
        strict_status_text: 为 True 时要求名称文本与状态码的标准名称一致。

    Returns:
        Response: 解析后的响应对象。

    Raises:
        InvalidLeadingLineError: 状态行不合法，或严格模式下名称文本不匹配。
        UnknownEnumValueError: 状态码不在已知集合中 (如 999)。
        InvalidHeaderLineError: 头部行不合法。
        MalformedTerminationError: 结尾空行数量不等于 2。
    """

    def build(groups: tuple[str, ...], leading: str) -> Response:
        protocol, version, code, status_text = groups
        status = decode_enum(Status, int(code))
        if strict_status_text and status_text != status.display:
            raise InvalidLeadingLineError(0, leading)
        return Response(
            protocol=decode_enum(Protocol, protocol),
            version=version,
            status=status,
        )

    return _parse_message(text, Grammar.STATUS_LINE_RE, build)
