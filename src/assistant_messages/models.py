"""数据模型定义模块。

本模块定义消息资源的请求和响应模型，以及消息内容的多态编码规则。

消息内容（:class:`MessageContent`）是一个以 ``type`` 字段区分的联合类型，
五种载荷中每次只填充一个：

- ``text``: 文本及注解
- ``image_file``: 通过文件 ID 引用的图片
- ``image_url``: 通过 URL 引用的图片
- ``video_url``: 通过 URL 引用的视频
- ``video``: 单个视频 URL，或一组按顺序排列的帧图片 URL

其中 ``video`` 在线路上不是 JSON 对象，而是裸字符串或字符串数组，
由 :class:`Video` 的自定义编解码处理。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic_core import core_schema

from .exceptions import ContentDecodeError

CONTENT_TYPES = ("text", "image_file", "image_url", "video_url", "video")


def _json_type_name(value: Any) -> str:
    """返回 Python 值对应的 JSON 类型名称。"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def decode_video(value: Any) -> "Video":
    """将 ``video`` 字段的 JSON 值解码为 :class:`Video`。

    - 字符串：单 URL 形式
    - 数组：帧 URL 列表形式，非字符串元素被静默丢弃
    - 其他类型：抛出 :class:`ContentDecodeError`

    :param value: 已由 JSON 解析得到的 Python 值
    :return: Video 实例
    :raises ContentDecodeError: 当值为对象、数字或布尔值时
    """
    if isinstance(value, Video):
        return value
    if isinstance(value, str):
        return Video(url=value)
    if isinstance(value, list):
        # 混合类型数组不报错，只保留字符串元素
        return Video(image_urls=[item for item in value if isinstance(item, str)])
    raise ContentDecodeError(_json_type_name(value))


def encode_video(video: "Video") -> Union[str, List[str], None]:
    """将 :class:`Video` 编码为线路上的 JSON 值。

    帧 URL 列表优先；其次是单 URL；两者都为空时编码为 null。
    """
    if video.image_urls:
        return list(video.image_urls)
    if video.url:
        return video.url
    return None


def _null_as_empty_list(value: Any) -> Any:
    """将响应中显式的 JSON null 列表视为空列表。"""
    return [] if value is None else value


@dataclass
class Video:
    """视频内容载荷。

    ``url`` 与 ``image_urls`` 在线路上互斥：有帧列表时编码为字符串数组，
    否则编码为单个字符串。

    Example::

        >>> Video.from_url("https://x/a.mp4").to_wire()
        'https://x/a.mp4'
        >>> Video.from_frames(["https://x/1.png", "https://x/2.png"]).to_wire()
        ['https://x/1.png', 'https://x/2.png']
    """

    url: str = ""
    image_urls: List[str] = field(default_factory=list)

    @classmethod
    def from_url(cls, url: str) -> "Video":
        return cls(url=url)

    @classmethod
    def from_frames(cls, image_urls: Sequence[str]) -> "Video":
        return cls(image_urls=list(image_urls))

    def to_wire(self) -> Union[str, List[str], None]:
        return encode_video(self)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            decode_video,
            serialization=core_schema.plain_serializer_function_ser_schema(encode_video),
        )


class MessageText(BaseModel):
    """文本内容载荷。注解内容不做解析，保持原样。"""

    value: str = Field(default="", description="文本内容")
    annotations: List[Any] = Field(default_factory=list, description="注解列表（不透明）")

    @field_validator("annotations", mode="before")
    @classmethod
    def null_annotations_as_empty(cls, v: Any) -> Any:
        return _null_as_empty_list(v)


class ImageFile(BaseModel):
    """通过文件 ID 引用的图片。"""

    file_id: str = Field(default="", description="文件 ID")


class ImageURL(BaseModel):
    """通过 URL 引用的图片。"""

    url: str = Field(default="", description="图片 URL")
    detail: Optional[str] = Field(default=None, description="细节级别（auto/low/high）")


class VideoURL(BaseModel):
    """通过 URL 引用的视频。"""

    url: str = Field(default="", description="视频 URL")
    fps: Optional[float] = Field(default=None, description="抽帧频率")
    detail: Optional[str] = Field(default=None, description="细节级别")


class MessageContent(BaseModel):
    """消息内容项。

    ``type`` 指明哪个载荷字段被填充，其余载荷字段为 None。
    该约束由构造方保证（使用 ``of_*`` 工厂方法），解码时不做运行时检查。

    :param type: 内容类型（text/image_file/image_url/video_url/video）
    :param text: 文本载荷
    :param image_file: 文件图片载荷
    :param image_url: URL 图片载荷
    :param video_url: URL 视频载荷
    :param video: 视频载荷（单 URL 或帧列表）
    """

    type: str = Field(default="", description="内容类型")
    text: Optional[MessageText] = Field(default=None, description="文本载荷")
    image_file: Optional[ImageFile] = Field(default=None, description="文件图片载荷")
    image_url: Optional[ImageURL] = Field(default=None, description="URL 图片载荷")
    video_url: Optional[VideoURL] = Field(default=None, description="URL 视频载荷")
    video: Optional[Video] = Field(default=None, description="视频载荷")

    @classmethod
    def of_text(cls, value: str, annotations: Optional[List[Any]] = None) -> "MessageContent":
        return cls(type="text", text=MessageText(value=value, annotations=annotations or []))

    @classmethod
    def of_image_file(cls, file_id: str) -> "MessageContent":
        return cls(type="image_file", image_file=ImageFile(file_id=file_id))

    @classmethod
    def of_image_url(cls, url: str, detail: Optional[str] = None) -> "MessageContent":
        return cls(type="image_url", image_url=ImageURL(url=url, detail=detail))

    @classmethod
    def of_video_url(
        cls, url: str, fps: Optional[float] = None, detail: Optional[str] = None
    ) -> "MessageContent":
        return cls(type="video_url", video_url=VideoURL(url=url, fps=fps, detail=detail))

    @classmethod
    def of_video(cls, video: Union[str, Sequence[str], Video]) -> "MessageContent":
        """构造视频内容项，接受单个 URL、URL 序列或 Video 实例。"""
        if isinstance(video, str):
            video = Video.from_url(video)
        elif not isinstance(video, Video):
            video = Video.from_frames(video)
        return cls(type="video", video=video)

    @property
    def payload(self) -> Any:
        """返回与 ``type`` 对应的载荷，类型未知时返回 None。"""
        if self.type not in CONTENT_TYPES:
            return None
        return getattr(self, self.type)

    def to_wire(self) -> Dict[str, Any]:
        """编码为线路格式，未设置的可选字段被省略。"""
        return self.model_dump(mode="json", exclude_none=True)


class APIObject(BaseModel):
    """远程 API 返回对象的基类。

    保留响应的 HTTP 头，供调用方读取请求 ID 或限流信息。
    """

    model_config = ConfigDict(extra="ignore")

    _http_header: httpx.Headers = PrivateAttr(default_factory=httpx.Headers)

    def set_header(self, headers: Union[httpx.Headers, Dict[str, str]]) -> None:
        self._http_header = httpx.Headers(headers)

    def header(self) -> httpx.Headers:
        return self._http_header


class Message(APIObject):
    """线程中的一条消息。

    只有 ``metadata`` 可以通过修改操作变更，其余字段创建后不可变。
    """

    id: str = Field(default="", description="消息 ID")
    object: str = Field(default="thread.message", description="对象类型")
    created_at: int = Field(default=0, description="创建时间戳（Unix 秒）")
    thread_id: str = Field(default="", description="所属线程 ID")
    role: str = Field(default="", description="消息角色（user/assistant）")
    content: List[MessageContent] = Field(default_factory=list, description="内容项列表")
    file_ids: Optional[List[str]] = Field(default=None, description="附件文件 ID（兼容旧接口）")
    assistant_id: Optional[str] = Field(default=None, description="关联的助手 ID")
    run_id: Optional[str] = Field(default=None, description="关联的运行 ID")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="元数据")

    @field_validator("content", mode="before")
    @classmethod
    def null_content_as_empty(cls, v: Any) -> Any:
        return _null_as_empty_list(v)

    def text(self, separator: str = "\n") -> str:
        """拼接所有文本内容项的值。"""
        return separator.join(item.text.value for item in self.content if item.text is not None)


class MessagesList(APIObject):
    """消息分页列表。

    每次调用只返回一页，由调用方根据 ``has_more`` 和 ``last_id``/``first_id``
    传入 ``after``/``before`` 继续翻页。
    """

    data: List[Message] = Field(default_factory=list, description="消息列表")
    object: str = Field(default="list", description="对象类型")
    first_id: Optional[str] = Field(default=None, description="本页第一条消息 ID")
    last_id: Optional[str] = Field(default=None, description="本页最后一条消息 ID")
    has_more: bool = Field(default=False, description="是否还有更多数据")

    @field_validator("data", mode="before")
    @classmethod
    def null_data_as_empty(cls, v: Any) -> Any:
        return _null_as_empty_list(v)


class ThreadAttachment(BaseModel):
    """创建消息时附带的文件描述，工具列表保持原样。"""

    model_config = ConfigDict(extra="allow")

    file_id: str = Field(..., description="文件 ID")
    tools: List[Dict[str, Any]] = Field(default_factory=list, description="文件启用的工具")


class MessageRequest(BaseModel):
    """创建消息的请求体。

    与 :class:`Message` 不同，创建接口只接受扁平的文本内容。

    :param role: 消息角色
    :param content: 文本内容
    :param file_ids: 附件文件 ID（兼容旧接口）
    :param metadata: 元数据
    :param attachments: 附件描述列表
    """

    role: str = Field(..., description="消息角色")
    content: str = Field(..., description="文本内容")
    file_ids: Optional[List[str]] = Field(default=None, description="附件文件 ID")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="元数据")
    attachments: Optional[List[ThreadAttachment]] = Field(default=None, description="附件描述列表")

    def to_body(self) -> Dict[str, Any]:
        """构造请求体，空的可选字段不会出现在请求中。"""
        body: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.file_ids:
            body["file_ids"] = list(self.file_ids)
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        if self.attachments:
            body["attachments"] = [a.model_dump() for a in self.attachments]
        return body


class MessageFile(APIObject):
    """消息附件文件的元数据。只读。"""

    id: str = Field(default="", description="文件 ID")
    object: str = Field(default="thread.message.file", description="对象类型")
    created_at: int = Field(default=0, description="创建时间戳（Unix 秒）")
    message_id: str = Field(default="", description="所属消息 ID")


class MessageFilesList(APIObject):
    """消息附件文件列表（不含分页游标）。"""

    data: List[MessageFile] = Field(default_factory=list, description="文件列表")

    @field_validator("data", mode="before")
    @classmethod
    def null_data_as_empty(cls, v: Any) -> Any:
        return _null_as_empty_list(v)


class MessageDeletionStatus(APIObject):
    """删除消息的确认结果。"""

    id: str = Field(default="", description="被删除的消息 ID")
    object: str = Field(default="thread.message.deleted", description="对象类型")
    deleted: bool = Field(default=False, description="是否已删除")
