"""
评价相关的请求/响应模式
"""

from pydantic import BaseModel, Field
from typing import Optional

from ..models.review import MAX_RATING, MIN_RATING


class ReviewCreateRequest(BaseModel):
    """评价提交请求"""
    mealId: str = Field(..., min_length=1, description="餐品ID")
    rating: float = Field(..., ge=MIN_RATING, le=MAX_RATING, description="评分")
    text: Optional[str] = Field(None, description="评价内容")
    email: Optional[str] = Field(None, description="评价人邮箱，只能是当前用户，缺省为当前用户")

    model_config = {"extra": "allow"}
