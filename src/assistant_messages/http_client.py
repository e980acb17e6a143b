"""HTTP 客户端模块。

本模块封装与远程 API 的通用交互，供各资源操作调用：

- URL 拼接：:meth:`APIClient.full_url`
- 请求构造：:meth:`APIClient.build_request`（请求体序列化失败时立即抛出）
- 请求发送与响应解码：:meth:`APIClient.send`
- Beta 版本请求头：:func:`with_beta_assistant_version`

客户端本身不做重试、缓存或限流。
"""

from typing import Any, Mapping, Optional, TypeVar

import httpx
import orjson
from pydantic import ValidationError

from .config import ClientConfig, get_settings
from .exceptions import (
    APIConnectionError,
    APITimeoutError,
    RequestBuildError,
    ResponseDecodeError,
)
from .logger import get_logger
from .models import APIObject
from .utils.error_handler import raise_for_error_response

logger = get_logger(__name__)

T = TypeVar("T", bound=APIObject)

BETA_HEADER = "OpenAI-Beta"


def with_beta_assistant_version(version: str) -> dict[str, str]:
    """生成标记 Beta 接口版本的请求头。

    :param version: 接口版本号，如 ``v2``
    :return: ``{"OpenAI-Beta": "assistants=v2"}``
    """
    return {BETA_HEADER: f"assistants={version}"}


class APIClient:
    """远程 API 的通用 HTTP 客户端。

    持有一个 ``httpx.AsyncClient``，可以由调用方注入（便于共享连接池或测试），
    未注入时自行创建并在 :meth:`aclose` 时关闭。

    :param config: 客户端配置，未提供时使用 :func:`get_settings`
    :param http_client: 可选的 httpx 异步客户端
    :type config: ClientConfig | None
    :type http_client: httpx.AsyncClient | None

    Example::

        async with APIClient(ClientConfig(api_key="sk-...")) as client:
            request = client.build_request("GET", client.full_url("/threads/t1/messages"))
            messages = await client.send(request, MessagesList)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """关闭自行创建的 httpx 客户端，注入的客户端由调用方负责关闭。"""
        if self._owns_client:
            await self._client.aclose()

    def full_url(self, suffix: str) -> str:
        """将路径后缀拼接到配置的基础 URL 上。"""
        return f"{self.config.base_url}{suffix}"

    def build_request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Request:
        """构造 HTTP 请求。

        :param method: HTTP 方法
        :param url: 完整请求 URL
        :param body: 可序列化为 JSON 的请求体
        :param headers: 额外请求头，覆盖配置中的同名请求头
        :return: httpx.Request 实例
        :raises RequestBuildError: 请求体无法序列化时，不会发出任何请求
        """
        content = None
        if body is not None:
            try:
                content = orjson.dumps(body)
            except TypeError as e:
                logger.error(
                    "Request body serialization failed: method={}, url={}, error={}",
                    method,
                    url,
                    str(e),
                )
                raise RequestBuildError(f"请求体序列化失败: {e}", original_error=e) from e

        request_headers = dict(self.config.HEADERS)
        if content is not None:
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})
        return self._client.build_request(method, url, content=content, headers=request_headers)

    async def send(self, request: httpx.Request, response_model: type[T]) -> T:
        """发送请求并将响应体解码为 ``response_model``。

        :param request: 由 :meth:`build_request` 构造的请求
        :param response_model: 结果模型类型
        :return: 解码后的结果，附带响应头
        :raises APITimeoutError: 请求超时
        :raises APIConnectionError: 网络连接失败
        :raises APIError: 响应状态码不是 2xx
        :raises ResponseDecodeError: 响应体不是合法 JSON 或与结果模型不匹配

        .. note::
           取消等待中的任务会中断请求并抛出 ``asyncio.CancelledError``。
        """
        logger.debug("Sending request: method={}, url={}", request.method, str(request.url))

        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            logger.error("Request timeout: method={}, url={}", request.method, str(request.url))
            raise APITimeoutError(str(request.url), e) from e
        except httpx.RequestError as e:
            logger.error(
                "Request error: error_type={}, error={}, url={}",
                type(e).__name__,
                str(e),
                str(request.url),
            )
            raise APIConnectionError(str(request.url), e) from e

        logger.debug(
            "Response received: status_code={}, method={}, url={}",
            response.status_code,
            request.method,
            str(request.url),
        )

        raise_for_error_response(response)

        try:
            data = orjson.loads(response.content)
            result = response_model.model_validate(data)
        except orjson.JSONDecodeError as e:
            logger.error("Response is not valid JSON: url={}, error={}", str(request.url), str(e))
            raise ResponseDecodeError(
                f"响应解码失败: {e}", body=response.text[:200], original_error=e
            ) from e
        except ValidationError as e:
            logger.error(
                "Response does not match {}: url={}, error_count={}",
                response_model.__name__,
                str(request.url),
                e.error_count(),
            )
            raise ResponseDecodeError(
                f"响应解码失败: {e}", body=response.text[:200], original_error=e
            ) from e

        result.set_header(response.headers)
        return result
