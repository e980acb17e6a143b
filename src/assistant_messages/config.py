"""客户端配置模块。

本模块使用pydantic-settings进行环境变量管理，提供访问远程消息服务所需的配置参数。
配置对象在构造后只读（frozen），通过构造参数显式传递给客户端，
不作为隐藏的全局状态使用。

环境变量统一使用 ``OPENAI_`` 前缀，例如 ``OPENAI_BASE_URL``、``OPENAI_API_KEY``。
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_ASSISTANT_VERSION = "v2"


class ClientConfig(BaseSettings):
    """客户端配置类。

    使用 Pydantic BaseSettings 从环境变量加载配置。
    优先级：构造参数 > 环境变量 > .env 文件 > 默认值。

    :param base_url: API 基础 URL，所有请求路径都拼接在其后
    :param api_key: API 密钥，非空时以 Bearer 方式发送
    :param organization: 组织 ID（可选）
    :param assistant_version: Beta 接口版本号，用于 ``OpenAI-Beta`` 请求头
    :param timeout: 单次请求超时（秒）
    :param log_level: 日志级别（DEBUG/INFO/WARNING/ERROR/CRITICAL）
    :param verbose_logging: 是否启用详细日志模式
    :type base_url: str
    :type api_key: str
    :type organization: Optional[str]
    :type assistant_version: str
    :type timeout: float
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    :type verbose_logging: bool

    .. code-block:: bash

       # .env 文件示例
       OPENAI_API_KEY=sk-xxxx
       OPENAI_BASE_URL=https://api.openai.com/v1
       OPENAI_ASSISTANT_VERSION=v2
       OPENAI_LOG_LEVEL=INFO

    .. seealso::
       :func:`get_settings` - 获取配置单例
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API 基础 URL"
    )

    api_key: str = Field(
        default="",
        description="API 密钥"
    )

    organization: Optional[str] = Field(
        default=None,
        description="组织 ID"
    )

    assistant_version: str = Field(
        default=DEFAULT_ASSISTANT_VERSION,
        description="Beta 接口版本号",
        min_length=1
    )

    timeout: float = Field(
        default=60.0,
        gt=0,
        description="请求超时(秒)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="日志级别"
    )

    verbose_logging: Optional[bool] = Field(
        default=None,
        validate_default=True,
        description="是否启用详细日志模式"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """验证基础 URL 格式，并去掉末尾的斜杠。"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url 必须以 http:// 或 https:// 开头")
        return v.rstrip("/")

    @field_validator("verbose_logging", mode="before")
    @classmethod
    def auto_enable_verbose_for_debug(cls, v: Optional[bool], info) -> bool:
        """如果日志级别为DEBUG，自动启用详细日志（除非明确设置为False）。"""
        if v is not None:
            return v
        log_level = info.data.get("log_level", "INFO")
        return bool(log_level and log_level.upper() == "DEBUG")

    @computed_field
    @property
    def HEADERS(self) -> dict[str, str]:
        """每个请求都会携带的静态请求头。

        Beta 版本标记不在这里，由各资源操作单独附加；
        ``Content-Type`` 只在有请求体时由 :meth:`APIClient.build_request` 附加。
        """
        headers = {
            "Accept": "application/json",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers


@lru_cache
def get_settings() -> ClientConfig:
    """获取客户端配置单例。

    使用lru_cache确保配置只被加载一次。

    :return: ClientConfig实例

    Example::

        >>> settings = get_settings()
        >>> print(settings.base_url, settings.assistant_version)
    """
    return ClientConfig()
