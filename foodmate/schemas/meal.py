"""
餐品相关的请求/响应模式
"""

from pydantic import BaseModel, Field
from typing import Optional


class MealUpdateRequest(BaseModel):
    """餐品更新请求，仅允许修改以下字段"""
    title: Optional[str] = Field(None, description="名称")
    category: Optional[str] = Field(None, description="分类")
    price: Optional[float] = Field(None, ge=0, description="价格")
    description: Optional[str] = Field(None, description="描述")
    image: Optional[str] = Field(None, description="图片URL")


class MealCountResponse(BaseModel):
    count: int = Field(..., description="匹配的餐品数量")
