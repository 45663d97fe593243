# src/shiori_core/__main__.py
"""
命令行工具：解析一条 SHIORI 报文并打印其结构，或输出规范化后的线格式。

用法:
    python -m shiori_core request message.txt
    python -m shiori_core response - --canonical < reply.txt
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ShioriConfig, load_config_from_toml
from .core import ShioriCore
from .exceptions import ShioriError
from .protocols.message import Request, Response
from .protocols.parser import parse_request
from .protocols.serializer import serialize

logger = logging.getLogger("ShioriCLI")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shiori_core", description="Parse and re-serialize SHIORI messages."
    )
    parser.add_argument("kind", choices=["request", "response"], help="报文类型")
    parser.add_argument(
        "file", nargs="?", default="-", help="报文文件路径，'-' 表示标准输入"
    )
    parser.add_argument(
        "--canonical", action="store_true", help="输出规范化后的线格式而不是结构摘要"
    )
    parser.add_argument("--encoding", default="utf-8", help="输入文本编码")
    parser.add_argument("--config", type=Path, help="TOML 配置文件")
    parser.add_argument("--profile", default="default", help="TOML 配置预设名")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    return parser


def _read_input(file: str, encoding: str) -> str:
    # 以字节读取，避免文本模式改写 CRLF
    if file == "-":
        raw = sys.stdin.buffer.read()
    else:
        raw = Path(file).read_bytes()
    return raw.decode(encoding)


def _escape(value: str) -> str:
    return value.replace("\x01", "\\x01").replace("\x02", "\\x02")


def format_summary(message: Request | Response) -> str:
    """将报文渲染为便于阅读的多行摘要。"""
    if isinstance(message, Request):
        lines = [
            f"method: {message.method.display}",
            f"protocol: {message.protocol.value}",
            f"version: {message.version}",
        ]
    else:
        lines = [
            f"protocol: {message.protocol.value}",
            f"version: {message.version}",
            f"status: {message.status_code} {message.status.display}",
        ]
    lines.append(f"headers: {len(message.headers)}")
    for name, value in message.headers.items():
        lines.append(f"  {name}: {_escape(value)}")
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT
    )

    try:
        config = (
            load_config_from_toml(args.config, args.profile)
            if args.config
            else ShioriConfig()
        )
        text = _read_input(args.file, args.encoding)
        if args.kind == "request":
            message = parse_request(text)
        else:
            message = ShioriCore(config).parse_response(text)
    except ShioriError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error(f"读取输入失败: {e}")
        return 1

    if args.canonical:
        sys.stdout.write(serialize(message))
    else:
        sys.stdout.write(format_summary(message))
    return 0


if __name__ == "__main__":
    sys.exit(main())
