"""
日志配置
"""
import sys
from pathlib import Path
from typing import Optional
from loguru import logger
from .config import settings

CONSOLE_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: Optional[str] = None,
    log_to_file: Optional[bool] = None,
    log_dir: Optional[Path] = None
) -> None:
    """
    重新配置日志输出

    Args:
        level: 控制台日志级别, 默认由 settings.DEBUG / settings.LOG_LEVEL 决定
        log_to_file: 是否写入按天滚动的日志文件, 默认 settings.LOG_TO_FILE
        log_dir: 日志目录, 默认 settings.LOG_DIR
    """
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    if log_to_file is None:
        log_to_file = settings.LOG_TO_FILE

    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_to_file:
        log_dir = Path(log_dir or settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "voilut_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="DEBUG",
            format=FILE_FORMAT,
            compression="zip"
        )


setup_logging()

__all__ = ["logger", "setup_logging"]
