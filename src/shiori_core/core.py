# File: src/shiori_core/core.py
"""
SHIORI 核心引擎 (Core Engine)

职责：
1. 资源组装：Config + Handler。
2. 请求分发：原始文本 -> Request -> Handler -> Response -> 原始文本。
3. 错误映射：非法请求 -> 400，Handler 异常 -> 500。

传输层 (DLL 调用、管道、socket) 不属于本引擎，调用方负责把文本交给 handle()。
"""

import logging
from collections.abc import Callable, Mapping

from .config import ShioriConfig
from .exceptions import ProtocolError
from .protocols.constants import HeaderName
from .protocols.message import ErrorLevel, Headers, Request, Response, Status
from .protocols.parser import parse_request, parse_response
from .protocols.serializer import serialize_response

logger = logging.getLogger(__name__)

# 处理函数：返回 None 表示无内容 (204)
RequestHandler = Callable[[Request], Response | None]


def _mark_error(response: Response, description: str) -> Response:
    response.error_level = ErrorLevel.ERROR
    # 头部值不能跨行
    response.error_description = " ".join(description.splitlines())
    return response


class ShioriCore:
    """SHIORI 请求/响应循环引擎。

    引擎只持有不可变的配置与处理函数引用，可在多线程中共享。
    """

    def __init__(
        self,
        config: ShioriConfig | None = None,
        handler: RequestHandler | None = None,
    ) -> None:
        """初始化核心引擎。

        Args:
            config: 全局配置对象。缺省时使用默认配置。
            handler: 业务处理函数。缺省时所有合法请求均返回 204。
        """
        self.config = config or ShioriConfig()
        self.handler = handler

    def build_response(
        self,
        status: Status | int = Status.OK,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """构建一个带有配置版本号的响应。"""
        return Response(
            version=self.config.version,
            status=status,
            headers=Headers(headers or {}),
        )

    def parse_response(self, text: str) -> Response:
        """按配置的严格程度解析响应报文。"""
        return parse_response(text, strict_status_text=self.config.strict_status_text)

    def handle(self, text: str) -> str:
        """处理一条原始请求文本，返回序列化后的响应文本。

        本方法不会抛出协议或业务异常：所有失败都被映射为 400 / 500 响应。
        """
        try:
            try:
                request = parse_request(text)
            except ProtocolError as e:
                logger.warning(f"拒绝非法请求: {e}")
                response = self._error_response(Status.BAD_REQUEST, str(e))
            else:
                response = self.dispatch(request)
            return serialize_response(self._apply_defaults(response))
        except ProtocolError as e:
            # 配置或处理函数给出的内容无法写出，退回不带任何配置头部的 500
            logger.error(f"响应生成失败: {e}")
            return serialize_response(
                _mark_error(Response(status=Status.INTERNAL_SERVER_ERROR), str(e))
            )

    def dispatch(self, request: Request) -> Response:
        """调用处理函数，并将其结果规范化为 Response。"""
        if self.handler is None:
            return self.build_response(Status.NO_CONTENT)

        try:
            result = self.handler(request)
        except Exception as e:
            logger.exception(f"请求处理异常: {request.method.display}")
            return self._error_response(Status.INTERNAL_SERVER_ERROR, str(e))

        if result is None:
            result = self.build_response(Status.NO_CONTENT)
        elif not isinstance(result, Response):
            logger.error(f"处理函数返回了非 Response 对象: {type(result).__name__}")
            return self._error_response(
                Status.INTERNAL_SERVER_ERROR, "handler returned no Response"
            )

        logger.info(
            f"[{request.method.display}] "
            f"{request.headers.get(HeaderName.ID, '-')} -> {result.status_code}"
        )
        return result

    def _error_response(self, status: Status, description: str) -> Response:
        return _mark_error(self.build_response(status), description)

    def _apply_defaults(self, response: Response) -> Response:
        """补齐配置中的默认头部，已有的头部不会被覆盖。"""
        headers = response.headers
        if self.config.charset and HeaderName.CHARSET not in headers:
            headers[HeaderName.CHARSET] = self.config.charset
        if self.config.sender and HeaderName.SENDER not in headers:
            headers[HeaderName.SENDER] = self.config.sender
        if (
            self.config.security_level is not None
            and HeaderName.SECURITY_LEVEL not in headers
        ):
            response.security_level = self.config.security_level
        return response
