"""
订单相关数据模型
"""

from enum import Enum


class OrderStatus(str, Enum):
    """订单状态枚举"""
    PENDING = "pending"        # 待处理
    ACCEPTED = "accepted"      # 厨师已接单
    DELIVERED = "delivered"    # 已送达
    PAID = "paid"              # 已支付（终态）
    CANCELLED = "cancelled"    # 已取消（终态）


TERMINAL_STATUSES = frozenset({OrderStatus.PAID.value, OrderStatus.CANCELLED.value})

# 旧版前端下单时写入的占位名称，视为“缺少名称”
PLACEHOLDER_NAMES = frozenset({"unknown", "unknown meal", "n/a", "untitled"})


def is_terminal(status) -> bool:
    return status in TERMINAL_STATUSES


def has_display_name(order: dict) -> bool:
    name = order.get("name")
    if not isinstance(name, str) or not name.strip():
        return False
    return name.strip().lower() not in PLACEHOLDER_NAMES
