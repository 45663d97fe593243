# File: src/shiori_core/protocols/message.py
"""
SHIORI 协议层 - 报文模型 (Message Model)

定义 Request / Response 的类型化结构，以及覆盖在头部集合之上的类型化访问器。
访问器负责在领域值 (枚举、整数) 与底层字符串存储之间转换。

本模块不包含任何解析或序列化逻辑。
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import partial
from typing import Any, TypeVar

from ..exceptions import MissingHeaderError, ProtocolError, UnknownEnumValueError
from .constants import Grammar, HeaderName

E = TypeVar("E", bound=Enum)


def decode_enum(enum_cls: type[E], value: object) -> E:
    """将原始值解码为枚举成员，无法识别时抛出 UnknownEnumValueError。

    Args:
        enum_cls: 目标枚举类型。
        value: 枚举成员本身，或其取值 (字符串/整数)。

    Returns:
        对应的枚举成员。

    Raises:
        UnknownEnumValueError: 值不属于该枚举。
    """
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownEnumValueError(enum_cls.__name__, value) from None


# =========================================================================
# 枚举 (Enums)
# =========================================================================


class Protocol(Enum):
    """SHIORI 协议名 (目前只有一种)。"""

    SHIORI = "SHIORI"


class Method(Enum):
    """SHIORI 请求方法。取值即线格式中的方法字面量。"""

    GET = "GET"  # SHIORI/3.0
    NOTIFY = "NOTIFY"  # SHIORI/3.0
    GET_VERSION = "GET Version"  # SHIORI/2.x
    GET_SENTENCE = "GET Sentence"
    GET_WORD = "GET Word"
    GET_STATUS = "GET Status"
    TEACH = "TEACH"
    GET_STRING = "GET String"
    NOTIFY_OWNER_GHOST_NAME = "NOTIFY OwnerGhostName"
    NOTIFY_OTHER_GHOST_NAME = "NOTIFY OtherGhostName"
    TRANSLATE_SENTENCE = "TRANSLATE Sentence"

    @property
    def display(self) -> str:
        return self.value


class Status(IntEnum):
    """SHIORI 响应状态码。"""

    OK = 200
    NO_CONTENT = 204
    NOT_ENOUGH = 311
    ADVICE = 312
    BAD_REQUEST = 400
    INTERNAL_SERVER_ERROR = 500

    @property
    def display(self) -> str:
        """状态行中数字状态码之后的可读名称。"""
        return _STATUS_DISPLAY[self]


_STATUS_DISPLAY = {
    Status.OK: "OK",
    Status.NO_CONTENT: "No Content",
    Status.NOT_ENOUGH: "Not Enough",
    Status.ADVICE: "Advice",
    Status.BAD_REQUEST: "Bad Request",
    Status.INTERNAL_SERVER_ERROR: "Internal Server Error",
}


class ErrorLevel(Enum):
    """ErrorLevel 头部取值，按字面名称编码。"""

    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class SecurityLevel(Enum):
    """SecurityLevel 头部取值，按字面名称编码。"""

    LOCAL = "local"
    EXTERNAL = "external"


# =========================================================================
# 头部集合 (Headers)
# =========================================================================


class Headers(dict[str, str]):
    """有序的 头部名 -> 头部值 映射。

    插入顺序即序列化时的输出顺序；键区分大小写且唯一 (后写覆盖先写，位置不变)。
    """

    def require(self, name: str) -> str:
        """读取头部，不存在时抛出 MissingHeaderError (不做默认值替换)。"""
        try:
            return self[name]
        except KeyError:
            raise MissingHeaderError(name) from None


def _header_property(name: str, doc: str) -> property:
    def fget(self: "_HeaderAccessors") -> str:
        return self.headers.require(name)

    def fset(self: "_HeaderAccessors", value: str) -> None:
        self.headers[name] = str(value)

    def fdel(self: "_HeaderAccessors") -> None:
        if name not in self.headers:
            raise MissingHeaderError(name)
        del self.headers[name]

    return property(fget, fset, fdel, doc)


def _enum_header_property(name: str, enum_cls: type[Enum], doc: str) -> property:
    def fget(self: "_HeaderAccessors") -> Enum:
        return decode_enum(enum_cls, self.headers.require(name))

    def fset(self: "_HeaderAccessors", value: Enum | str) -> None:
        # 同时接受枚举成员与其字面名称，统一写入字面名称
        self.headers[name] = decode_enum(enum_cls, value).value

    def fdel(self: "_HeaderAccessors") -> None:
        if name not in self.headers:
            raise MissingHeaderError(name)
        del self.headers[name]

    return property(fget, fset, fdel, doc)


_REFERENCE_NAME_RE = re.compile(rf"{HeaderName.REFERENCE_PREFIX}(\d+)", re.ASCII)


def reference_name(index: int) -> str:
    """拼接 Reference<N> 头部名。

    Raises:
        ValueError: index 不是非负整数。
    """
    if isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ValueError(f"reference index must be a non-negative int: {index!r}")
    return f"{HeaderName.REFERENCE_PREFIX}{index}"


def _to_version(value: str) -> str:
    if not isinstance(value, str) or not Grammar.VERSION_RE.fullmatch(value):
        raise ProtocolError(f"invalid protocol version: {value!r}")
    return value


def _to_headers(value: Any) -> Headers:
    # 已是 Headers 时直接持有，否则复制为 Headers
    return value if isinstance(value, Headers) else Headers(value)


class _HeaderAccessors:
    """Request / Response 共有的头部访问器。"""

    headers: Headers

    charset = _header_property(HeaderName.CHARSET, "Charset 头部")
    sender = _header_property(HeaderName.SENDER, "Sender 头部")
    security_level = _enum_header_property(
        HeaderName.SECURITY_LEVEL, SecurityLevel, "SecurityLevel 头部"
    )

    def reference(self, index: int) -> str:
        """读取 Reference<index> 头部。"""
        return self.headers.require(reference_name(index))

    def set_reference(self, index: int, value: str) -> None:
        """写入 Reference<index> 头部。序号没有上限。"""
        self.headers[reference_name(index)] = str(value)

    @property
    def references(self) -> dict[int, str]:
        """当前存在的全部 Reference<N> 头部，按序号升序排列。"""
        found = {}
        for name, value in self.headers.items():
            m = _REFERENCE_NAME_RE.fullmatch(name)
            if m:
                found[int(m.group(1))] = value
        return dict(sorted(found.items()))

    # 字段名 -> 赋值时的校验/转换函数，由子类填写
    _coercers: dict[str, Callable[[Any], Any]] = {}

    def __setattr__(self, name: str, value: Any) -> None:
        # 构造与后续原地赋值都经过这里，保证字段始终满足不变式
        coerce = self._coercers.get(name)
        if coerce is not None:
            value = coerce(value)
        super().__setattr__(name, value)


# =========================================================================
# 报文 (Messages)
# =========================================================================


@dataclass
class Request(_HeaderAccessors):
    """SHIORI 请求报文。

    Attributes:
        method: 请求方法，必须是 11 种已知方法之一。
        protocol: 协议名。
        version: 协议版本 (如 "3.0", "2.6")。
        headers: 有序头部集合。
    """

    method: Method = Method.GET
    protocol: Protocol = Protocol.SHIORI
    version: str = "3.0"
    headers: Headers = field(default_factory=Headers)

    _coercers = {
        "method": partial(decode_enum, Method),
        "protocol": partial(decode_enum, Protocol),
        "version": _to_version,
        "headers": _to_headers,
    }

    id = _header_property(HeaderName.ID, "ID 头部")
    status = _header_property(HeaderName.STATUS, "Status 头部 (SHIORI/3.0 宿主状态)")
    base_id = _header_property(HeaderName.BASE_ID, "BaseId 头部")


@dataclass
class Response(_HeaderAccessors):
    """SHIORI 响应报文。

    Attributes:
        protocol: 协议名。
        version: 协议版本。
        status: 状态码 (状态行字段，不是头部)。
        headers: 有序头部集合。
    """

    protocol: Protocol = Protocol.SHIORI
    version: str = "3.0"
    status: Status = Status.OK
    headers: Headers = field(default_factory=Headers)

    _coercers = {
        "protocol": partial(decode_enum, Protocol),
        "version": _to_version,
        "status": partial(decode_enum, Status),
        "headers": _to_headers,
    }

    @property
    def status_code(self) -> int:
        """状态码的整数形式。赋值时校验是否属于已知状态码集合。"""
        return int(self.status)

    @status_code.setter
    def status_code(self, value: int) -> None:
        self.status = decode_enum(Status, value)

    value = _header_property(HeaderName.VALUE, "Value 头部")
    marker = _header_property(HeaderName.MARKER, "Marker 头部")
    request_charset = _header_property(HeaderName.REQUEST_CHARSET, "RequestCharset 头部")
    error_level = _enum_header_property(
        HeaderName.ERROR_LEVEL, ErrorLevel, "ErrorLevel 头部"
    )
    error_description = _header_property(
        HeaderName.ERROR_DESCRIPTION, "ErrorDescription 头部"
    )
