from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """應用程式設定"""

    app_name: str = "員工排班範本"

    # 資料庫設定
    database_url: str = "sqlite:///./schedules.db"
    sql_echo: bool = False

    # 應用程式設定
    debug: bool = False
    log_level: str = "INFO"

    # 舊版基本班表轉換時，單一休息時段使用的名稱
    default_break_name: str = "Descanso"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """取得設定（使用快取）"""
    return Settings()
