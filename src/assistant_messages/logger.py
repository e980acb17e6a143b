"""日志配置模块。

本模块使用loguru记录请求发送、响应状态和解码失败等事件。
作为客户端库，导入时关闭 ``assistant_messages`` 的日志输出，
调用方需要排查问题时再调用 :func:`configure_logging` 开启。
"""

import sys

from loguru import logger

logger.disable("assistant_messages")


def configure_logging(log_level: str = "INFO", use_colors: bool = True, verbose: bool = False) -> None:
    """开启本库的日志输出并设置到 stderr 的处理器。

    会移除 loguru 现有的处理器，适合在脚本或调试会话中使用；
    已经自行配置 loguru 的应用只需 ``logger.enable("assistant_messages")``。

    :param log_level: 日志级别，可选值：DEBUG, INFO, WARNING, ERROR, CRITICAL
    :param use_colors: 是否在输出中使用颜色
    :param verbose: 是否输出完整时间戳和行号，并启用backtrace

    .. note::
       DEBUG 级别记录每个请求的方法、URL 和响应状态；ERROR 级别记录传输失败、
       错误状态码和解码失败。API 密钥不会出现在日志中。
    """
    logger.remove()
    logger.enable("assistant_messages")

    if verbose:
        fmt = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <5} | {name}:{function}:{line} - {message}"
        if use_colors:
            fmt = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <5}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    else:
        fmt = "{time:HH:mm:ss} | {level: <5} | {name}:{function} - {message}"
        if use_colors:
            fmt = "<green>{time:HH:mm:ss}</green> | <level>{level: <5}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"

    logger.add(
        sys.stderr,
        format=fmt,
        level=log_level.upper(),
        colorize=use_colors,
        backtrace=verbose,
        diagnose=False,
    )


def get_logger(name: str | None = None):
    """返回本库各模块共用的 loguru logger。

    :param name: 模块名，仅为调用形式统一，loguru 按记录所在模块自动填充 ``{name}``
    :return: loguru logger
    """
    return logger
