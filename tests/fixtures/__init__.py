"""测试辅助工具包。"""

from .builders import (
    MessageFileResponseBuilder,
    MessageResponseBuilder,
    MessagesListResponseBuilder,
)

from .mocks import (
    RecordingTransport,
    request_json,
)

__all__ = [
    # Builders
    "MessageFileResponseBuilder",
    "MessageResponseBuilder",
    "MessagesListResponseBuilder",
    # Mocks
    "RecordingTransport",
    "request_json",
]
