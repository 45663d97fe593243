# src/shiori_core/protocols/serializer.py
"""
SHIORI 报文序列化器 (Serializer)

负责将 Request / Response 渲染为解析器可接受的线格式文本。
本模块是无状态的 (Stateless)。
"""

from ..exceptions import ProtocolError
from .constants import Grammar, Wire
from .message import Headers, Request, Response


def serialize_headers(headers: Headers) -> str:
    """按插入顺序渲染头部行，每行以 CRLF 结尾。

    Raises:
        ProtocolError: 头部名或头部值无法以单行形式写出 (含换行符等)。
    """
    lines = []
    for name, value in headers.items():
        # 名与值分别校验，否则 "A: B" 这样的名会与值拼成一条合法行
        if not isinstance(name, str) or not Grammar.HEADER_NAME_RE.fullmatch(name):
            raise ProtocolError(f"header name cannot be serialized: {name!r}")
        if not isinstance(value, str) or not Grammar.HEADER_VALUE_RE.fullmatch(value):
            raise ProtocolError(f"header value cannot be serialized: {name}={value!r}")
        lines.append(f"{name}: {value}" + Wire.CRLF)
    return "".join(lines)


def serialize_request(request: Request) -> str:
    """渲染请求报文。

    结构: `<Method> <Protocol>/<Version>` CRLF + 头部行 + CRLF
    """
    request_line = (
        f"{request.method.display} {request.protocol.value}/{request.version}"
    )
    return request_line + Wire.CRLF + serialize_headers(request.headers) + Wire.CRLF


def serialize_response(response: Response) -> str:
    """渲染响应报文。

    结构: `<Protocol>/<Version> <Code> <Name>` CRLF + 头部行 + CRLF
    """
    status_line = (
        f"{response.protocol.value}/{response.version} "
        f"{response.status_code} {response.status.display}"
    )
    return status_line + Wire.CRLF + serialize_headers(response.headers) + Wire.CRLF


def serialize(message: Request | Response) -> str:
    """按报文类型分发到对应的序列化函数。"""
    if isinstance(message, Request):
        return serialize_request(message)
    if isinstance(message, Response):
        return serialize_response(message)
    raise TypeError(f"cannot serialize {type(message).__name__}")
