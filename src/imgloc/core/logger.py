"""
日志配置模块
"""
import sys
from pathlib import Path

from loguru import logger

from .config import settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_configured = False


def _console_stream():
    """返回可用的控制台输出流；窗口化进程下可能全部为 None。"""
    for stream in (sys.stdout, sys.__stdout__, sys.stderr, sys.__stderr__):
        if stream is not None:
            return stream
    return None


def setup_logger(force: bool = False):
    """配置日志系统

    重复调用不会重复添加 sink；force=True 时先移除全部 sink 再重建。
    """
    global _configured
    if _configured and not force:
        return logger

    # 移除默认处理器
    logger.remove()

    console_missing = False
    if settings.log_console_enabled:
        stream = _console_stream()
        if stream is None:
            console_missing = True
        else:
            logger.add(stream, level=settings.log_level, format=_CONSOLE_FORMAT)

    if settings.log_file_enabled:
        log_dir = Path(settings.log_path)
        log_dir.mkdir(parents=True, exist_ok=True)

        # 文件输出 - 全局日志
        logger.add(
            log_dir / "app_{time:YYYY-MM-DD}.log",
            level=settings.log_level,
            format=_FILE_FORMAT,
            rotation=settings.log_rotation,
            retention=f"{settings.log_retention_days} days",
            encoding="utf-8",
        )

        # 错误日志单独记录
        logger.add(
            log_dir / "error_{time:YYYY-MM-DD}.log",
            level="ERROR",
            format=_FILE_FORMAT,
            rotation=settings.log_rotation,
            retention=f"{settings.log_retention_days * 2} days",
            encoding="utf-8",
        )

    if console_missing:
        logger.warning("未检测到可用控制台输出流，仅写入文件日志")

    _configured = True
    return logger


# 初始化日志系统
setup_logger()
