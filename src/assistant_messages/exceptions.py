"""自定义异常模块。

本模块定义了客户端使用的异常类型，分为三类：

- 请求构造错误：请求体序列化失败，请求尚未发出
- 传输/状态/解码错误：由 HTTP 客户端抛出，原样传递给调用方
- 内容解码错误：``video`` 字段的 JSON 类型不符合预期
"""

from typing import Any, Optional


class MessagesClientError(Exception):
    """客户端所有异常的基类。"""


class RequestBuildError(MessagesClientError):
    """请求构造失败（如请求体无法序列化为 JSON）。

    抛出时没有任何网络活动发生。
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class APIConnectionError(MessagesClientError):
    """无法连接到远程服务（DNS、连接被拒绝等）。"""

    def __init__(self, url: str, original_error: Exception):
        self.url = url
        self.original_error = original_error
        super().__init__(f"连接失败: {url} -- {original_error}")


class APITimeoutError(APIConnectionError):
    """请求超时。"""


class ResponseDecodeError(MessagesClientError):
    """响应体解码失败（非法 JSON 或与结果类型不匹配）。"""

    def __init__(self, message: str, body: str = "", original_error: Optional[Exception] = None):
        self.message = message
        self.body = body
        self.original_error = original_error
        super().__init__(self.message)


class ContentDecodeError(MessagesClientError, ValueError):
    """``video`` 内容字段的 JSON 类型无效。

    同时继承 ValueError，以便在 pydantic 校验中被包装为 ValidationError，
    进而作为 :class:`ResponseDecodeError` 暴露给调用方。
    """

    def __init__(self, json_type: str):
        self.json_type = json_type
        super().__init__(f"invalid type for video field: {json_type}")


class APIError(MessagesClientError):
    """远程 API 错误异常类。

    用于封装远程服务返回的非 2xx 响应，包含状态码和错误信息。
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str = "api_error",
        code: Any = None,
        param: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.code = code
        self.param = param
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.error_type}: {self.message}"


class BadRequestError(APIError):
    """请求参数错误。"""

    def __init__(
        self,
        message: str = "请求参数错误",
        status_code: int = 400,
        error_type: str = "invalid_request_error",
        **kwargs: Any,
    ):
        super().__init__(status_code, message, error_type, **kwargs)


class AuthenticationError(APIError):
    """认证失败。"""

    def __init__(
        self,
        message: str = "认证失败",
        status_code: int = 401,
        error_type: str = "authentication_error",
        **kwargs: Any,
    ):
        super().__init__(status_code, message, error_type, **kwargs)


class PermissionError(APIError):
    """权限不足。"""

    def __init__(
        self,
        message: str = "权限不足",
        status_code: int = 403,
        error_type: str = "permission_error",
        **kwargs: Any,
    ):
        super().__init__(status_code, message, error_type, **kwargs)


class NotFoundError(APIError):
    """资源不存在（线程、消息或文件）。"""

    def __init__(
        self,
        message: str = "资源不存在",
        status_code: int = 404,
        error_type: str = "not_found_error",
        **kwargs: Any,
    ):
        super().__init__(status_code, message, error_type, **kwargs)


class RateLimitError(APIError):
    """请求速率限制。"""

    def __init__(
        self,
        message: str = "请求过于频繁",
        status_code: int = 429,
        error_type: str = "rate_limit_error",
        **kwargs: Any,
    ):
        super().__init__(status_code, message, error_type, **kwargs)


class ServerError(APIError):
    """远程服务器错误（5xx）。"""

    def __init__(
        self,
        message: str = "服务器错误",
        status_code: int = 500,
        error_type: str = "server_error",
        **kwargs: Any,
    ):
        super().__init__(status_code, message, error_type, **kwargs)
