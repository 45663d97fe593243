# File: src/shiori_core/exceptions.py
"""
SHIORI 核心库 - 异常体系 (Exceptions)

定义库内统一使用的异常类，以便上层应用（如 SHIORI 宿主/CLI）能进行精细的错误处理。
所有异常均属于调用方输入缺陷，不存在可重试的暂时性错误。
"""


class ShioriError(Exception):
    """SHIORI 核心库的所有内部异常的基类。

    上层应用可以通过捕获此异常来处理所有由 shiori-core 抛出的已知错误。
    """

    pass


class ConfigError(ShioriError):
    """配置加载或校验失败。

    触发场景:
    1. 字段格式错误 (如版本号不是 `数字.数字`)。
    2. 枚举值非法 (如 SecurityLevel 不是 local/external)。
    3. 找不到配置文件或环境变量。
    """

    pass


class ProtocolError(ShioriError):
    """协议交互错误 (逻辑级别)。

    所有报文解析失败与模型取值校验失败的共同基类。
    """

    pass


class ParseError(ProtocolError):
    """报文解析失败。

    解析失败时不会返回任何部分结果，调用方只能拿到此异常。
    """

    pass


class _LineError(ParseError):
    """携带出错行号与原始行内容的解析错误。"""

    kind = "line"

    def __init__(self, line_index: int, line: str) -> None:
        """初始化行级错误。

        Args:
            line_index: 出错行的行号 (从 0 开始)。
            line: 出错行的原始内容 (不含换行符)。
        """
        self.line_index = line_index
        self.line = line
        super().__init__(f"invalid {self.kind}: line {line_index} [{line}]")


class InvalidLeadingLineError(_LineError):
    """首行 (请求行/状态行) 不符合语法。

    触发场景:
    1. 未知的请求方法 (如 `POST SHIORI/3.0`)。
    2. 协议名不是 SHIORI，或版本号不是 `数字.数字`。
    3. 状态行缺少数字状态码。
    """

    kind = "leading line"


class InvalidHeaderLineError(_LineError):
    """首行之后的非空行不是合法的 `名称: 值` 格式。"""

    kind = "header line"


class MalformedTerminationError(ParseError):
    """报文结尾的空行数量不等于 2。

    报文以首行 + 头部行 + CRLF 结尾，按行切分后末尾应恰好出现两个空行。
    """

    def __init__(self, blank_lines: int) -> None:
        self.blank_lines = blank_lines
        super().__init__(
            f"message has wrong number of trailing crlf: {blank_lines} blank lines"
        )


class UnknownEnumValueError(ProtocolError, ValueError):
    """解码得到的值不属于对应枚举的取值集合。

    适用于请求方法、状态码、ErrorLevel、SecurityLevel。
    同时继承 ValueError，方便沿用标准库的错误处理习惯。
    """

    def __init__(self, enum_name: str, value: object) -> None:
        """初始化枚举解码错误。

        Args:
            enum_name: 目标枚举类型名 (如 "Status")。
            value: 无法识别的原始值。
        """
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"unknown {enum_name} value: {value!r}")


class MissingHeaderError(ShioriError, KeyError):
    """类型化访问器读取的头部不存在。

    协议要求调用方先检查是否存在，或接受硬失败；不会返回默认值。
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        # KeyError 默认会输出 repr，这里保持与其他异常一致的可读文本
        return f"missing header: {self.name}"
