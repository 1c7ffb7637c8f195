"""
支付相关的请求/响应模式
"""

from pydantic import BaseModel, Field
from typing import Optional


class PaymentIntentRequest(BaseModel):
    """支付意图创建请求"""
    price: float = Field(..., gt=0, description="订单金额（主货币单位）")


class PaymentIntentResponse(BaseModel):
    clientSecret: str = Field(..., description="前端确认支付使用的密钥")


class PaymentCreateRequest(BaseModel):
    """支付记录，网关返回的其他字段原样保存"""
    orderId: str = Field(..., description="订单ID")
    email: str = Field(..., description="付款人邮箱")
    amount: Optional[float] = Field(None, ge=0, description="支付金额")
    transactionId: Optional[str] = Field(None, description="网关交易号")

    model_config = {"extra": "allow"}
