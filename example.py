# example.py
"""
这是一个 ShioriCore API 的最小示例。

它演示了如何将 shiori-core 作为一个库导入到你自己的 SHIORI 模块中，
并实现一个“解析请求 - 处理 - 返回响应”的循环。

运行此示例：
1. 确保已安装本包： pip install -e .
2. 从项目根目录运行： python example.py
"""

import logging
import sys

# 日志配置开始
logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("ShioriExample")
# 日志配置结束

try:
    from shiori_core import (
        Method,
        Request,
        Response,
        ShioriConfig,
        ShioriCore,
        separated,
    )
except ImportError as ie:
    logger.critical(f"导入 shiori_core 失败: {ie}")
    logger.critical("请先执行 pip install -e . 安装本包")
    sys.exit(1)


def on_request(request: Request) -> Response | None:
    """示例处理函数：回应 OnBoot，其余事件无内容。"""
    if request.method == Method.GET_VERSION:
        return core.build_response(headers={"ID": "example", "Version": "1.0.0"})

    if request.headers.get("ID") == "OnBoot":
        response = core.build_response()
        response.value = r"\0\s[0]起動しました。\e"
        return response

    if request.headers.get("ID") == "OnSecondChange":
        # Reference0 形如 "1\x010"，按一级分隔符拆开
        logger.debug(f"Reference0 -> {separated(request.reference(0))}")
    return None


core = ShioriCore(ShioriConfig(sender="example"), on_request)


def main() -> None:
    messages = [
        "GET SHIORI/3.0\r\nCharset: UTF-8\r\nID: OnBoot\r\n\r\n",
        "NOTIFY SHIORI/3.0\r\nID: OnSecondChange\r\nReference0: 1\x010\r\n\r\n",
        "GET Version SHIORI/2.6\r\n\r\n",
        "POST SHIORI/3.0\r\n\r\n",
    ]
    for text in messages:
        sys.stdout.write(core.handle(text))
        sys.stdout.write("-" * 40 + "\n")


# 程序入口
if __name__ == "__main__":
    main()
