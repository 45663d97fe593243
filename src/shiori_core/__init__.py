# src/shiori_core/__init__.py
"""
Shiori-Core v1.0.0
SHIORI 协议 (伺か 宿主 <-> SHIORI 模块) 的报文解析与序列化核心库。
"""

# 暴露核心配置
from .config import (
    ShioriConfig,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
)

# 暴露引擎
from .core import ShioriCore

# 暴露异常体系 (方便上层 try-except)
from .exceptions import (
    ConfigError,
    InvalidHeaderLineError,
    InvalidLeadingLineError,
    MalformedTerminationError,
    MissingHeaderError,
    ParseError,
    ProtocolError,
    ShioriError,
    UnknownEnumValueError,
)

# 暴露报文模型与编解码
from .protocols import (
    ErrorLevel,
    Headers,
    Method,
    Protocol,
    Request,
    Response,
    SecurityLevel,
    Status,
    parse_request,
    parse_response,
    serialize,
    serialize_request,
    serialize_response,
)
from .utils import combined, combined2, separated, separated2

__version__ = "1.0.0"

__all__ = [
    "ShioriCore",
    "ShioriConfig",
    "create_config_from_dict",
    "load_config_from_env",
    "load_config_from_toml",
    "ShioriError",
    "ConfigError",
    "ProtocolError",
    "ParseError",
    "InvalidLeadingLineError",
    "InvalidHeaderLineError",
    "MalformedTerminationError",
    "UnknownEnumValueError",
    "MissingHeaderError",
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
    "serialize_request",
    "serialize_response",
    "separated",
    "separated2",
    "combined",
    "combined2",
]
