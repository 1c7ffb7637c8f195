from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


class Settings(BaseSettings):
    # 数据库配置
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "foodchefDB"
    mongodb_timeout_ms: int = 5000
    # memory: 进程内存储，无需 MongoDB，重启后数据丢失
    store_backend: Literal["mongo", "memory"] = "mongo"

    # JWT配置
    jwt_secret_key: str = "your-secret-key"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 1

    # 支付配置
    stripe_secret_key: Optional[str] = None
    stripe_api_base: str = "https://api.stripe.com"
    payment_currency: str = "usd"
    payment_timeout_seconds: float = 10.0

    # API配置
    api_title: str = "FoodMate API"
    api_version: str = "1.0.0"
    api_prefix: str = ""
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:5000",
    ]

    # 开发模式
    debug: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False


# 全局设置实例
settings = Settings()
