"""
FastAPI 依赖提供函数
存储、支付网关和安全管理器都挂在 app.state 上，由 create_app 注入
"""

from fastapi import Depends, Request

from .database import DocumentStore
from ..services.meal_service import MealService
from ..services.order_service import OrderService
from ..services.payment_gateway import PaymentGateway
from ..services.payment_service import PaymentService
from ..services.review_service import ReviewService
from ..services.user_service import UserService


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_security_manager(request: Request):
    return request.app.state.security


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway


def get_settings(request: Request):
    return request.app.state.settings


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_meal_service(store: DocumentStore = Depends(get_store)) -> MealService:
    return MealService(store)


def get_order_service(store: DocumentStore = Depends(get_store)) -> OrderService:
    return OrderService(store)


def get_payment_service(
    store: DocumentStore = Depends(get_store),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings=Depends(get_settings),
) -> PaymentService:
    return PaymentService(store, gateway, currency=settings.payment_currency)


def get_review_service(store: DocumentStore = Depends(get_store)) -> ReviewService:
    return ReviewService(store)
