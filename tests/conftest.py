# tests/conftest.py
import sys
from pathlib import Path

import pytest

# 确保 src 目录在 sys.path 中
src_path = Path(__file__).resolve().parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from shiori_core.config import ShioriConfig


@pytest.fixture
def request_text():
    """[Fixture] 一条典型的 SHIORI/3.0 GET 请求。"""
    return (
        "GET SHIORI/3.0\r\n"
        "Charset: UTF-8\r\n"
        "Sender: SSP\r\n"
        "SecurityLevel: local\r\n"
        "ID: OnBoot\r\n"
        "Reference0: master\r\n"
        "\r\n"
    )


@pytest.fixture
def response_text():
    """[Fixture] 一条典型的 SHIORI/3.0 200 响应。"""
    return (
        "SHIORI/3.0 200 OK\r\n"
        "Charset: UTF-8\r\n"
        "Sender: ghost\r\n"
        "Value: \\0\\s[0]Hello\\e\r\n"
        "\r\n"
    )


@pytest.fixture
def valid_config():
    """[Fixture] 返回一个填满所有字段的 ShioriConfig 对象。"""
    return ShioriConfig(
        version="3.0",
        charset="UTF-8",
        sender="shiori-core",
        security_level=None,
        strict_status_text=False,
    )
