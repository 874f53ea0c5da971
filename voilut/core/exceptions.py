"""
自定义异常类
"""
from typing import Optional


class VOILUTException(Exception):
    """VOI LUT 基础异常, 带错误码"""
    code = "UNKNOWN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class InvalidInputError(VOILUTException):
    """无效输入, field 指出出错的参数"""
    code = "INVALID_INPUT"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class PresetNotFoundError(VOILUTException):
    """窗口预设未找到"""
    code = "PRESET_NOT_FOUND"
