# src/shiori_core/protocols/__init__.py
"""
SHIORI 协议层 (Protocol Layer)

本包负责报文的纯粹解析 (Parse) 与构建 (Serialize)。

- 不包含任何 socket 操作或 I/O。
- 不包含任何跨报文的状态管理。
- 不依赖于 core 或 config 层。
"""

from . import constants
from .message import (
    ErrorLevel,
    Headers,
    Method,
    Protocol,
    Request,
    Response,
    SecurityLevel,
    Status,
)
from .parser import parse_request, parse_response
from .serializer import (
    serialize,
    serialize_headers,
    serialize_request,
    serialize_response,
)

# 公共 API
__all__ = [
    "constants",
    "ErrorLevel",
    "Headers",
    "Method",
    "Protocol",
    "Request",
    "Response",
    "SecurityLevel",
    "Status",
    "parse_request",
    "parse_response",
    "serialize",
    "serialize_headers",
    "serialize_request",
    "serialize_response",
]
