"""
应用配置
从环境变量 / .env 读取配置
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "HotelHub Onboarding"
    DEBUG: bool = False

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./hotelhub.db"
    SQL_ECHO: bool = False

    # 日志配置
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# 全局设置实例
settings = Settings()
