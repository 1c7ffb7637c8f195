"""
订单相关的请求/响应模式
"""

from pydantic import BaseModel, Field

from ..models.order import OrderStatus


class OrderStatusUpdateRequest(BaseModel):
    """订单状态变更请求"""
    status: OrderStatus = Field(..., description="新状态")
