"""
核心配置模块
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """系统配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="IMGLOC_",
        case_sensitive=False,
        extra="ignore",
    )

    # 匹配
    default_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    default_search_area: str = "70|70|720|540"
    default_polygon: str = "430,70|787,335|430,605|67,333"

    # 线程池（0 = 按 CPU 核数自动计算）
    compute_thread_pool_size: int = 0

    # 日志
    log_level: str = "INFO"
    log_path: str = "./logs"
    log_retention_days: int = 3
    log_console_enabled: bool = True
    log_file_enabled: bool = True
    log_rotation: str = "00:00"


# 全局配置实例
settings = Settings()
