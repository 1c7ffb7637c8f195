"""
订单服务模块
提供订单相关的核心业务逻辑，包括创建、状态流转、删除和查询

业务规则：
- 下单时间与初始状态 pending 由服务端写入，忽略客户端提交的值
- paid / cancelled 为终态，终态订单不允许再变更状态
- 删除订单不检查终态（与状态变更不对称，保留原有行为）
- 买家订单列表在读取时用餐品数据补齐缺失的名称/图片/价格，不回写数据库
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.database import MEALS, ORDERS, DocumentStore, UpdateResult, parse_object_id
from ..core.exceptions import InvalidTransitionError, OrderNotFoundError, PermissionDeniedError
from ..models.meal import normalize_meal
from ..models.order import OrderStatus, has_display_name, is_terminal
from .meal_service import find_meal_document

logger = logging.getLogger(__name__)


class OrderService:
    """订单服务类，封装所有订单相关的业务逻辑"""

    def __init__(self, store: DocumentStore):
        self.orders = store.collection(ORDERS)
        self.meals = store.collection(MEALS)

    def create_order(self, order: Dict[str, Any]) -> Dict[str, Any]:
        """
        创建新订单

        Args:
            order: 客户端提交的订单，除 orderTime/orderStatus 外原样保存

        Returns:
            dict: {"insertedId": 新订单ID}
        """
        document = dict(order)
        document["orderTime"] = datetime.now(timezone.utc)
        document["orderStatus"] = OrderStatus.PENDING.value
        inserted_id = self.orders.insert_one(document)
        logger.info("Created order %s for %s", inserted_id, document.get("userEmail"))
        return {"insertedId": inserted_id}

    def list_for_buyer(self, email: str) -> List[Dict[str, Any]]:
        """买家订单列表，缺少展示名称的订单在读取时补齐"""
        orders = self.orders.find({"userEmail": email})
        return [self._backfill(order) for order in orders]

    def list_for_chef(self, email: str) -> List[Dict[str, Any]]:
        """厨师收到的订单，按下单时间倒序"""
        return self.orders.find(
            {"$or": [{"chefEmail": email}, {"chefId": email}]},
            sort=[("orderTime", -1)],
        )

    def get_order(self, order_id: str) -> Dict[str, Any]:
        """获取订单，ID格式不合法同样视为不存在"""
        order = self._find(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order not found: {order_id}")
        return order

    def set_status(self, order_id: str, new_status: OrderStatus) -> UpdateResult:
        """
        变更订单状态

        Raises:
            OrderNotFoundError: 订单不存在
            InvalidTransitionError: 当前状态为终态
        """
        order = self.get_order(order_id)
        current = order.get("orderStatus")
        if is_terminal(current):
            raise InvalidTransitionError(
                f"Order {order_id} is {current}; status can no longer change",
                details={"current_status": current, "requested_status": OrderStatus(new_status).value},
            )

        result = self.orders.update_one(
            {"_id": order["_id"]},
            {"$set": {"orderStatus": OrderStatus(new_status).value}},
        )
        logger.info("Order %s status %s -> %s", order_id, current, OrderStatus(new_status).value)
        return result

    def delete_order(self, order_id: str, caller_email: str, caller_is_admin: bool) -> int:
        """
        删除订单（买家本人或管理员），幂等

        不检查终态：已支付订单同样可以删除。
        """
        order = self._find(order_id)
        if order is None:
            return 0
        if not caller_is_admin and order.get("userEmail") != caller_email:
            raise PermissionDeniedError("forbidden access")

        deleted = self.orders.delete_one({"_id": order["_id"]})
        logger.info("Deleted order %s (status=%s) by %s", order_id, order.get("orderStatus"), caller_email)
        return deleted

    def _find(self, order_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(order_id)
        if oid is None:
            return None
        return self.orders.find_one({"_id": oid})

    def _backfill(self, order: Dict[str, Any]) -> Dict[str, Any]:
        """用关联餐品补齐 name，以及缺失的 image/price"""
        if has_display_name(order) or not order.get("mealId"):
            return order

        meal_doc = find_meal_document(self.meals, order["mealId"])
        if meal_doc is None:
            return order

        meal = normalize_meal(meal_doc)
        filled = dict(order)
        if meal.get("title"):
            filled["name"] = meal["title"]
        if not filled.get("image") and meal.get("image"):
            filled["image"] = meal["image"]
        if filled.get("price") in (None, "") and "price" in meal:
            filled["price"] = meal["price"]
        return filled
