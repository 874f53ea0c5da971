"""
应用配置管理
"""
from pathlib import Path
from typing import Tuple
from pydantic_settings import BaseSettings
from pydantic import model_validator


# 获取项目根目录
_BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """应用配置"""
    
    # 应用基础配置
    APP_NAME: str = "VOI LUT"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    
    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: Path = _BASE_DIR / "logs"
    
    # 窗宽窗位配置
    DEFAULT_WINDOW_PRESET: str = "soft_tissue"
    AUTO_WINDOW_PERCENTILE: Tuple[float, float] = (1.0, 99.0)
    
    model_config = {
        "env_prefix": "VOILUT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }
    
    @model_validator(mode='after')
    def create_directories(self):
        """仅在开启文件日志时创建日志目录"""
        if self.LOG_TO_FILE:
            self.LOG_DIR.mkdir(parents=True, exist_ok=True)
        return self


settings = Settings()
