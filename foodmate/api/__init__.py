"""
API routes and endpoints.
"""

from fastapi import APIRouter
from .v1 import auth, meals, orders, payments, reviews, users

api_router = APIRouter()

# 各路由模块使用完整路径，统一无前缀挂载
api_router.include_router(auth.router, tags=["认证"])
api_router.include_router(users.router, tags=["用户"])
api_router.include_router(meals.router, tags=["餐品"])
api_router.include_router(orders.router, tags=["订单"])
api_router.include_router(payments.router, tags=["支付"])
api_router.include_router(reviews.router, tags=["评价"])
