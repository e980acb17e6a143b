"""错误处理工具模块。

提供统一的远程 API 错误处理逻辑：将非 2xx 响应映射为对应的异常类型。
"""

from typing import Any, Optional

import httpx
import orjson

from ..exceptions import (
    APIError,
    AuthenticationError,
    BadRequestError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
)
from ..logger import get_logger

logger = get_logger(__name__)

ERROR_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionError,
    404: NotFoundError,
    429: RateLimitError,
}


def _parse_error_body(text: str) -> Optional[dict[str, Any]]:
    """解析远程服务的错误信封 ``{"error": {...}}``，无法解析时返回 None。"""
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError:
        return None
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"]
    return None


def error_from_response(response: httpx.Response) -> APIError:
    """根据响应状态码构造异常实例。

    优先使用响应体中的 ``error.message``/``error.type``/``error.code``，
    没有错误信封时使用截断后的响应文本。

    :param response: HTTP 响应对象
    :type response: httpx.Response
    :return: 对应状态码的 APIError 子类实例
    :rtype: APIError
    """
    status_code = response.status_code
    error_text = response.text
    error_body = _parse_error_body(error_text)

    if error_body is not None:
        message = error_body.get("message") or f"HTTP错误 {status_code}"
        extra = {"code": error_body.get("code"), "param": error_body.get("param")}
        error_type = error_body.get("type")
    else:
        message = f"HTTP错误 {status_code}: {error_text[:100]}"
        extra = {}
        error_type = None

    if status_code >= 500:
        error_class: type[APIError] = ServerError
    else:
        error_class = ERROR_MAP.get(status_code, APIError)

    if error_class is APIError:
        return APIError(status_code, message, error_type or "api_error", **extra)
    if error_type:
        return error_class(message, status_code=status_code, error_type=error_type, **extra)
    return error_class(message, status_code=status_code, **extra)


def raise_for_error_response(response: httpx.Response) -> None:
    """统一处理远程 API 错误。

    2xx 响应直接返回，其余状态码记录日志后抛出对应异常：

    - 400 -> :class:`BadRequestError`
    - 401 -> :class:`AuthenticationError`
    - 403 -> :class:`PermissionError`
    - 404 -> :class:`NotFoundError`
    - 429 -> :class:`RateLimitError`
    - 5xx -> :class:`ServerError`
    - 其他 -> :class:`APIError`

    :param response: HTTP 响应对象
    :raises APIError: 响应状态码不是 2xx 时
    """
    if response.is_success:
        return

    logger.error(
        "Remote API HTTP error: status_code={}, method={}, url={}, response_text={}",
        response.status_code,
        response.request.method,
        str(response.request.url),
        response.text[:200],
    )
    raise error_from_response(response)
