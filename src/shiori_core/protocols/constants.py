# src/shiori_core/protocols/constants.py
"""
SHIORI 协议层 - 常量定义

本模块定义了所有协议相关的分隔符、固定头部名与行语法。
采用命名空间 (Class Namespace) 组织，不使用扁平全局变量。
"""

import re

# =========================================================================
# 1. 行分隔 (Line Endings)
# =========================================================================


class Wire:
    """报文线格式中的固定字节序列"""

    CRLF = "\r\n"

    # 宿主实现对 CRLF / LF / CR 均视为行边界
    LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")

    # 报文末尾必须恰好出现的空行数
    TERMINATING_BLANK_LINES = 2


# =========================================================================
# 2. 行语法 (Line Grammar)
# =========================================================================


class Grammar:
    """首行与头部行的正则表达式 (均按整行匹配)"""

    # 多词方法必须排在裸 GET / NOTIFY 之前
    REQUEST_LINE_RE = re.compile(
        r"(GET (?:Version|Sentence|Word|Status|String)"
        r"|NOTIFY (?:OwnerGhostName|OtherGhostName)"
        r"|TRANSLATE Sentence"
        r"|TEACH|GET|NOTIFY)"
        r" (SHIORI)/(\d+\.\d+)",
        re.ASCII,
    )
    STATUS_LINE_RE = re.compile(r"(SHIORI)/(\d+\.\d+) (\d+) ([^\r\n]*)", re.ASCII)
    HEADER_LINE_RE = re.compile(r"([A-Za-z0-9.]+): ([^\r\n]*)", re.ASCII)

    # 单独校验各字段 (序列化与模型赋值时使用)
    VERSION_RE = re.compile(r"\d+\.\d+", re.ASCII)
    HEADER_NAME_RE = re.compile(r"[A-Za-z0-9.]+", re.ASCII)
    HEADER_VALUE_RE = re.compile(r"[^\r\n]*")


# =========================================================================
# 3. 头部名称 (Header Names)
# =========================================================================


class HeaderName:
    """类型化访问器使用的固定头部名"""

    # Request
    ID = "ID"
    STATUS = "Status"
    BASE_ID = "BaseId"

    # Response
    VALUE = "Value"
    MARKER = "Marker"
    REQUEST_CHARSET = "RequestCharset"
    ERROR_LEVEL = "ErrorLevel"
    ERROR_DESCRIPTION = "ErrorDescription"

    # 通用
    CHARSET = "Charset"
    SENDER = "Sender"
    SECURITY_LEVEL = "SecurityLevel"

    # Reference0, Reference1, ... 按序号拼接，无上限
    REFERENCE_PREFIX = "Reference"


# =========================================================================
# 4. 多值头部分隔符 (Separators)
# =========================================================================


class Separator:
    PRIMARY = "\x01"
    SECONDARY = "\x02"
