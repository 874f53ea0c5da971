"""Core module - 配置, 日志, 异常处理"""
from .config import settings
from .logging import logger, setup_logging
from .exceptions import (
    VOILUTException,
    InvalidInputError,
    PresetNotFoundError
)
