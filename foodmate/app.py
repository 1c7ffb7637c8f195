"""
FoodMate 后端服务 - 应用工厂
提供餐品订购平台的完整后端API服务

主要功能模块：
- JWT凭证签发与角色权限校验
- 用户资料与角色申请/授予
- 餐品发布、搜索和管理
- 订单创建与状态流转
- 支付意图创建与支付记录
- 评价与餐品评分聚合

技术栈：FastAPI + MongoDB + JWT认证
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .config.settings import Settings, settings as default_settings
from .core.database import DocumentStore, MongoStore
from .core.error_handler import register_error_handlers
from .core.exceptions import DatabaseError
from .core.memory_store import InMemoryStore
from .core.security import SecurityManager
from .services.payment_gateway import PaymentGateway, StripePaymentGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    try:
        app.state.store.ping()
        logger.info("Document store reachable")
    except DatabaseError as e:
        # 不让应用启动失败，请求时再报错
        logger.warning("Document store unavailable at startup: %s", e.message)

    yield

    logger.info("Shutting down, closing document store")
    app.state.store.close()


def build_store(settings: Settings) -> DocumentStore:
    """按 store_backend 选择存储实现"""
    if settings.store_backend == "memory":
        logger.warning("Using in-memory document store, data is not persisted")
        return InMemoryStore()
    return MongoStore.from_settings(settings)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    payment_gateway: Optional[PaymentGateway] = None,
) -> FastAPI:
    """创建FastAPI应用，存储和支付网关可注入（测试使用内存实现）"""
    settings = settings or default_settings
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="FoodMate 餐品订购平台API",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store or build_store(settings)
    app.state.payment_gateway = payment_gateway or StripePaymentGateway.from_settings(settings)
    app.state.security = SecurityManager.from_settings(settings)

    # 添加中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # 注册路由
    app.include_router(api_router, prefix=settings.api_prefix)

    # 健康检查
    @app.get("/")
    async def root():
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "message": "FoodMate Server is Running"
        }

    return app
