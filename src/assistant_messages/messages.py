"""消息资源客户端模块。

本模块为线程中的消息及其附件文件提供增删改查操作。每个操作：

1. 根据线程/消息/文件 ID 构造请求路径，必要时附加查询字符串
2. 附加 Beta 版本请求头
3. 交给 :class:`~assistant_messages.http_client.APIClient` 发送并解码响应

操作之间不共享可变状态，可以在多个任务中并发调用。
"""

from typing import Any, Mapping, Optional

import httpx

from .config import ClientConfig
from .http_client import APIClient, with_beta_assistant_version
from .logger import get_logger
from .models import (
    Message,
    MessageDeletionStatus,
    MessageFile,
    MessageFilesList,
    MessageRequest,
    MessagesList,
)

logger = get_logger(__name__)

MESSAGES_SUFFIX = "messages"


def build_query(params: Mapping[str, Any]) -> str:
    """根据可选参数构造查询字符串。

    值为 None 的参数被完全省略（而不是作为空字符串发送），
    参数顺序与传入顺序一致；没有任何参数时返回空字符串，不带 ``?``。

    :param params: 参数名到参数值的映射
    :return: ``"?limit=5&after=msg_1"`` 形式的查询字符串，或 ``""``

    Example::

        >>> build_query({"limit": 5, "order": None, "after": "msg_1"})
        '?limit=5&after=msg_1'
        >>> build_query({"limit": None})
        ''
    """
    values = [(key, value) for key, value in params.items() if value is not None]
    if not values:
        return ""
    return f"?{httpx.QueryParams(values)}"


class MessagesClient:
    """消息资源客户端。

    :param api_client: 通用 HTTP 客户端，未提供时根据 ``config`` 创建
    :param config: 客户端配置，仅在未提供 ``api_client`` 时使用
    :type api_client: APIClient | None
    :type config: ClientConfig | None

    Example::

        async with MessagesClient(config=ClientConfig(api_key="sk-...")) as client:
            message = await client.create_message(
                "thread_abc", MessageRequest(role="user", content="你好")
            )
            page = await client.list_messages("thread_abc", limit=20, order="desc")
    """

    def __init__(
        self,
        api_client: Optional[APIClient] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self._api = api_client or APIClient(config)
        self.config = self._api.config

    async def __aenter__(self) -> "MessagesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self._api.aclose()

    def _beta_headers(self) -> dict[str, str]:
        return with_beta_assistant_version(self.config.assistant_version)

    def _url(self, thread_id: str, *parts: str) -> str:
        suffix = "/".join((f"/threads/{thread_id}", MESSAGES_SUFFIX) + parts)
        return self._api.full_url(suffix)

    async def create_message(self, thread_id: str, request: MessageRequest) -> Message:
        """在线程中创建消息。

        :param thread_id: 线程 ID
        :param request: 创建请求
        :return: 服务端返回的消息（包含分配的 ID 和创建时间）
        :raises RequestBuildError: 请求体无法序列化时
        """
        req = self._api.build_request(
            "POST",
            self._url(thread_id),
            body=request.to_body(),
            headers=self._beta_headers(),
        )
        message = await self._api.send(req, Message)
        logger.info("Message created: thread_id={}, message_id={}", thread_id, message.id)
        return message

    async def list_messages(
        self,
        thread_id: str,
        limit: Optional[int] = None,
        order: Optional[str] = None,
        after: Optional[str] = None,
        before: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> MessagesList:
        """列出线程中的消息（单页）。

        只有调用方传入的非 None 参数才会出现在查询字符串中。
        不自动翻页，调用方根据 ``has_more`` 决定是否继续请求。

        :param thread_id: 线程 ID
        :param limit: 每页数量
        :param order: 排序方向（asc/desc）
        :param after: 游标，返回该消息之后的数据
        :param before: 游标，返回该消息之前的数据
        :param run_id: 只返回由该运行产生的消息
        :return: 消息分页列表
        """
        query = build_query(
            {
                "limit": limit,
                "order": order,
                "after": after,
                "before": before,
                "run_id": run_id,
            }
        )
        req = self._api.build_request(
            "GET",
            f"{self._url(thread_id)}{query}",
            headers=self._beta_headers(),
        )
        messages = await self._api.send(req, MessagesList)
        logger.debug(
            "Messages listed: thread_id={}, count={}, has_more={}",
            thread_id,
            len(messages.data),
            messages.has_more,
        )
        return messages

    async def retrieve_message(self, thread_id: str, message_id: str) -> Message:
        """获取单条消息。"""
        req = self._api.build_request(
            "GET",
            self._url(thread_id, message_id),
            headers=self._beta_headers(),
        )
        return await self._api.send(req, Message)

    async def modify_message(
        self,
        thread_id: str,
        message_id: str,
        metadata: Mapping[str, Any],
    ) -> Message:
        """修改消息的元数据。

        请求体只包含 ``metadata``，角色和内容在创建后不可修改。

        :param thread_id: 线程 ID
        :param message_id: 消息 ID
        :param metadata: 新的元数据
        :return: 修改后的消息
        :raises RequestBuildError: 元数据无法序列化时
        """
        req = self._api.build_request(
            "POST",
            self._url(thread_id, message_id),
            body={"metadata": dict(metadata)},
            headers=self._beta_headers(),
        )
        message = await self._api.send(req, Message)
        logger.info("Message modified: thread_id={}, message_id={}", thread_id, message_id)
        return message

    async def retrieve_message_file(
        self,
        thread_id: str,
        message_id: str,
        file_id: str,
    ) -> MessageFile:
        """获取消息附件文件的元数据。"""
        req = self._api.build_request(
            "GET",
            self._url(thread_id, message_id, "files", file_id),
            headers=self._beta_headers(),
        )
        return await self._api.send(req, MessageFile)

    async def list_message_files(self, thread_id: str, message_id: str) -> MessageFilesList:
        """列出消息的所有附件文件。"""
        req = self._api.build_request(
            "GET",
            self._url(thread_id, message_id, "files"),
            headers=self._beta_headers(),
        )
        return await self._api.send(req, MessageFilesList)

    async def delete_message(self, thread_id: str, message_id: str) -> MessageDeletionStatus:
        """删除消息。

        本地不做任何缓存失效处理，直接返回服务端的删除确认。
        """
        req = self._api.build_request(
            "DELETE",
            self._url(thread_id, message_id),
            headers=self._beta_headers(),
        )
        status = await self._api.send(req, MessageDeletionStatus)
        logger.info(
            "Message deleted: thread_id={}, message_id={}, deleted={}",
            thread_id,
            message_id,
            status.deleted,
        )
        return status
