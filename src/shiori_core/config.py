"""
SHIORI 核心库 - 配置模块

负责配置的加载、解析与强类型转换。
支持从 TOML 文件、环境变量 (含 .env 文件) 或字典中加载配置。
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .exceptions import ConfigError, UnknownEnumValueError
from .protocols.constants import Grammar
from .protocols.message import SecurityLevel, decode_enum

logger = logging.getLogger(__name__)

_TRUE_STRINGS = ("true", "1", "t", "yes", "on")
_FALSE_STRINGS = ("false", "0", "f", "no", "off", "")


@dataclass(frozen=True)
class ShioriConfig:
    """ShioriCore 的强类型配置对象。

    所有字段均为只读 (frozen=True)，确保配置在运行时不可变。

    Attributes:
        version: 引擎构建的响应报文所使用的协议版本。
        charset: 响应缺少 Charset 头部时补上的字符集。
        sender: 响应缺少 Sender 头部时补上的发送者名称 (空字符串表示不补)。
        security_level: 若设置，则为响应补上 SecurityLevel 头部。
        strict_status_text: 解析响应时是否校验状态行中的名称文本。
    """

    version: str = "3.0"
    charset: str = "UTF-8"
    sender: str = ""
    security_level: SecurityLevel | None = None
    strict_status_text: bool = False


def create_config_from_dict(raw_data: dict[str, Any]) -> ShioriConfig:
    """通用工厂：将字典转换为强类型配置对象。

    负责字段的清洗、默认值注入和类型转换。所有字段均可选。

    Args:
        raw_data: 原始配置字典 (来自 TOML 或 Env)。

    Returns:
        ShioriConfig: 验证并转换后的配置对象。

    Raises:
        ConfigError: 当字段格式错误时抛出。
    """
    try:
        # --- 内部辅助函数 ---
        def _to_version(key: str, default: str) -> str:
            val = str(raw_data.get(key, default)).strip()
            if not Grammar.VERSION_RE.fullmatch(val):
                raise ConfigError(f"版本号格式无效 '{key}': {val}")
            return val

        def _to_line(key: str, default: str) -> str:
            # 这些值会原样写进响应头部，不能跨行
            val = str(raw_data.get(key, default)).strip()
            if not Grammar.HEADER_VALUE_RE.fullmatch(val):
                raise ConfigError(f"字段不能包含换行 '{key}': {val!r}")
            return val

        def _to_bool(key: str, default: bool) -> bool:
            val = raw_data.get(key, default)
            if isinstance(val, bool):
                return val
            clean = str(val).strip().lower()
            if clean in _TRUE_STRINGS:
                return True
            if clean in _FALSE_STRINGS:
                return False
            raise ConfigError(f"布尔值格式无效 '{key}': {val}")

        def _to_security_level(key: str) -> SecurityLevel | None:
            val = raw_data.get(key)
            if val is None or str(val).strip() == "":
                return None
            try:
                return decode_enum(SecurityLevel, str(val).strip().lower())
            except UnknownEnumValueError:
                raise ConfigError(f"SecurityLevel 无效 '{key}': {val}")

        # --- 构建对象 ---
        return ShioriConfig(
            version=_to_version("version", "3.0"),
            charset=_to_line("charset", "UTF-8"),
            sender=_to_line("sender", ""),
            security_level=_to_security_level("security_level"),
            strict_status_text=_to_bool("strict_status_text", False),
        )

    except Exception as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"配置生成失败: {e}") from e


def load_config_from_toml(file_path: Path, profile: str = "default") -> ShioriConfig:
    """从 TOML 文件加载配置。

    支持多层级查找策略:
    1. [profile.xxx]: 优先查找指定的 profile 块。
    2. [shiori]: 单一配置块。
    3. Root: 兼容根目录直接配置。

    Args:
        file_path: TOML 文件路径。
        profile: 配置预设名。默认为 "default"。

    Returns:
        ShioriConfig: 配置对象。

    Raises:
        ConfigError: 文件读取失败或 Profile 不存在。
    """
    if not file_path.exists():
        raise ConfigError(f"配置文件未找到: {file_path}")

    try:
        with open(file_path, "rb") as f:
            data = tomllib.load(f)
    except Exception as e:
        raise ConfigError(f"读取 TOML 失败: {e}") from e

    raw_config = {}

    # 优先查找 profile
    if "profile" in data:
        if profile not in data["profile"]:
            # 如果指定了非 default 的 profile 且没找到，报错
            if profile != "default":
                raise ConfigError(f"未找到预设: [profile.{profile}]")
        else:
            raw_config = data["profile"][profile]

    elif "shiori" in data:
        if profile != "default":
            logger.warning(f"配置仅包含 [shiori] 节，忽略 profile='{profile}'。")
        raw_config = data["shiori"]
    else:
        raw_config = data

    return create_config_from_dict(raw_config)


def load_config_from_env(env_file: Path | None = None) -> ShioriConfig:
    """从环境变量加载配置。

    自动读取所有以 `SHIORI_` 开头的已知环境变量，并映射到配置字段。
    例如: `SHIORI_CHARSET` -> `charset`。

    Args:
        env_file: 可选的 .env 文件路径，存在时先加载进环境变量 (覆盖同名变量)。

    Returns:
        ShioriConfig: 配置对象。

    Raises:
        ConfigError: 未检测到任何相关环境变量。
    """
    if env_file is not None:
        if env_file.exists():
            load_dotenv(dotenv_path=env_file, override=True)
            logger.debug(f"已加载配置文件: {env_file}")
        else:
            logger.warning(f"未找到 .env 文件: {env_file}")

    # 字段映射表 (Config Field -> Env Suffix)
    env_map = {
        "version": "VERSION",
        "charset": "CHARSET",
        "sender": "SENDER",
        "security_level": "SECURITY_LEVEL",
        "strict_status_text": "STRICT_STATUS_TEXT",
    }

    raw_data = {}

    for cfg_key, env_suffix in env_map.items():
        env_key = f"SHIORI_{env_suffix}"
        val = os.environ.get(env_key)
        if val is not None:
            raw_data[cfg_key] = val

    if not raw_data:
        raise ConfigError("未检测到 SHIORI_ 前缀的环境变量")

    return create_config_from_dict(raw_data)
