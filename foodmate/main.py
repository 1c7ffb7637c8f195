"""
服务启动入口

    uvicorn foodmate.main:app
    FOODMATE_ENV=development python -m foodmate.main
    STORE_BACKEND=memory uvicorn foodmate.main:app   # 无需 MongoDB
"""

import os

from .app import create_app
from .config.environments.development import DevelopmentSettings
from .config.settings import Settings


def load_settings() -> Settings:
    """FOODMATE_ENV=development 时使用开发配置"""
    if os.getenv("FOODMATE_ENV", "").lower() == "development":
        return DevelopmentSettings()
    return Settings()


# 应用实例
app = create_app(load_settings())


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 5000))
    uvicorn.run(app, host="0.0.0.0", port=port)
