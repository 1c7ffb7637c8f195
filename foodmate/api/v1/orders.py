"""
订单管理路由模块
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query

from ...schemas.order import OrderStatusUpdateRequest
from ...core.database import serialize_document
from ...core.dependencies import get_order_service, get_user_service
from ...core.security import get_current_email, get_self_email
from ...services.order_service import OrderService
from ...services.user_service import UserService

router = APIRouter()


@router.get("/orders")
def list_buyer_orders(email: str = Query(...), service: OrderService = Depends(get_order_service)):
    """买家订单列表（缺失的餐品名称在读取时补齐）"""
    return serialize_document(service.list_for_buyer(email))


@router.get("/orders/chef/{email}")
def list_chef_orders(email: str = Depends(get_self_email), service: OrderService = Depends(get_order_service)):
    """厨师本人收到的订单，最新的在前"""
    return serialize_document(service.list_for_chef(email))


@router.get("/orders/{order_id}")
def get_order(
    order_id: str,
    caller_email: str = Depends(get_current_email),
    service: OrderService = Depends(get_order_service),
):
    return serialize_document(service.get_order(order_id))


@router.post("/orders")
def create_order(order: Dict[str, Any] = Body(...), service: OrderService = Depends(get_order_service)):
    """下单；orderTime 和 orderStatus 由服务端设置"""
    return serialize_document(service.create_order(order))


@router.patch("/orders/status/{order_id}")
def update_order_status(
    order_id: str,
    req: OrderStatusUpdateRequest,
    caller_email: str = Depends(get_current_email),
    service: OrderService = Depends(get_order_service),
):
    """变更订单状态，终态订单返回 400"""
    return service.set_status(order_id, req.status).to_dict()


@router.delete("/orders/{order_id}")
def delete_order(
    order_id: str,
    caller_email: str = Depends(get_current_email),
    service: OrderService = Depends(get_order_service),
    users: UserService = Depends(get_user_service),
):
    """删除订单（买家本人或管理员）"""
    deleted = service.delete_order(order_id, caller_email, users.is_admin(caller_email))
    return {"deletedCount": deleted}
