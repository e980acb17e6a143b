"""Assistant Messages - 线程消息资源的异步客户端。

本包为远程对话服务的消息资源提供客户端绑定：构造 HTTP 请求，
并将 JSON 响应解码为带类型的数据结构。

主要模块：
    - messages: 消息资源操作（创建、列出、获取、修改、删除、附件文件）
    - models: 数据模型和消息内容的多态编解码
    - http_client: 通用 HTTP 客户端（URL 拼接、请求头、发送与解码）
    - config: 客户端配置管理
    - logger: 日志配置
    - exceptions: 异常类型
"""

from .config import ClientConfig, get_settings
from .http_client import APIClient, with_beta_assistant_version
from .messages import MessagesClient, build_query
from .models import (
    ImageFile,
    ImageURL,
    Message,
    MessageContent,
    MessageDeletionStatus,
    MessageFile,
    MessageFilesList,
    MessageRequest,
    MessagesList,
    MessageText,
    ThreadAttachment,
    Video,
    VideoURL,
)

__version__ = "0"

__all__ = [
    "APIClient",
    "ClientConfig",
    "ImageFile",
    "ImageURL",
    "Message",
    "MessageContent",
    "MessageDeletionStatus",
    "MessageFile",
    "MessageFilesList",
    "MessageRequest",
    "MessagesClient",
    "MessagesList",
    "MessageText",
    "ThreadAttachment",
    "Video",
    "VideoURL",
    "build_query",
    "get_settings",
    "with_beta_assistant_version",
]
