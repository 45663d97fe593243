# File: src/shiori_core/utils.py
"""
SHIORI 核心库 - 多值头部编解码工具

许多头部值 (如 Reference、Value) 使用保留的控制字节打包多个子值:
- 一级分隔符 0x01: 分隔同一组内的子值。
- 二级分隔符 0x02: 分隔组。

本模块只提供通用的切分/拼接，不限定哪些头部使用这种编码。
"""

from collections.abc import Iterable

from .protocols.constants import Separator


def separated(value: str, sep: str = Separator.PRIMARY) -> list[str]:
    """按一级分隔符切分头部值。

    Args:
        value: 原始头部值。
        sep: 分隔符，默认 0x01。

    Returns:
        list[str]: 有序子值列表。空字符串切分结果为 `[""]`。
    """
    return value.split(sep)


def separated2(
    value: str, sep1: str = Separator.SECONDARY, sep2: str = Separator.PRIMARY
) -> list[list[str]]:
    """先按二级分隔符切分为组，再将每组按一级分隔符切分。

    Example:
        >>> separated2("a\\x01b\\x02c")
        [['a', 'b'], ['c']]
    """
    return [chunk.split(sep2) for chunk in value.split(sep1)]


def combined(values: Iterable[str], sep: str = Separator.PRIMARY) -> str:
    """`separated` 的逆操作。"""
    return sep.join(values)


def combined2(
    groups: Iterable[Iterable[str]],
    sep1: str = Separator.SECONDARY,
    sep2: str = Separator.PRIMARY,
) -> str:
    """`separated2` 的逆操作。"""
    return sep1.join(sep2.join(group) for group in groups)
