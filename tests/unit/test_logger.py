"""日志配置单元测试。"""

import pytest
from loguru import logger

from assistant_messages.exceptions import RequestBuildError
from assistant_messages.logger import configure_logging, get_logger


@pytest.fixture
def restore_logging():
    """测试结束后恢复库默认的静默状态。"""
    yield
    logger.remove()
    logger.disable("assistant_messages")


@pytest.mark.unit
class TestConfigureLogging:
    """configure_logging 函数测试。"""

    def test_get_logger_returns_loguru(self):
        """测试 get_logger 返回全局 loguru logger。"""
        assert get_logger(__name__) is logger

    @pytest.mark.parametrize("verbose", [False, True])
    def test_level_filtering(self, capsys, restore_logging, verbose):
        """测试低于配置级别的日志不输出。"""
        configure_logging("WARNING", use_colors=False, verbose=verbose)
        log = get_logger(__name__)

        log.info("hidden message")
        log.warning("visible message: thread_id={}", "thread_1")

        err = capsys.readouterr().err
        assert "hidden message" not in err
        assert "visible message: thread_id=thread_1" in err

    def test_verbose_includes_line_number(self, capsys, restore_logging):
        """测试详细模式输出函数名和行号。"""
        configure_logging("DEBUG", use_colors=False, verbose=True)

        get_logger(__name__).debug("debug message")

        err = capsys.readouterr().err
        assert "test_verbose_includes_line_number:" in err
        assert "debug message" in err

    def test_silent_until_configured(self, api_client, restore_logging):
        """测试未调用 configure_logging 时库内日志不输出。"""
        records = []
        logger.add(records.append, level="DEBUG")

        with pytest.raises(RequestBuildError):
            api_client.build_request("POST", "https://test.example.com/v1/x", body={"k": object()})

        assert records == []
