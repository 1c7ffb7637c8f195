"""
评价路由模块
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...schemas.review import ReviewCreateRequest
from ...core.database import serialize_document
from ...core.dependencies import get_review_service
from ...core.security import get_current_email, require_self
from ...services.review_service import ReviewService

router = APIRouter()


@router.get("/reviews")
def list_reviews(email: Optional[str] = None, service: ReviewService = Depends(get_review_service)):
    """全部评价，可按评价人email过滤，最新的在前"""
    return serialize_document(service.list_reviews(email))


@router.post("/reviews")
def submit_review(
    req: ReviewCreateRequest,
    caller_email: str = Depends(get_current_email),
    service: ReviewService = Depends(get_review_service),
):
    """提交评价并重新计算餐品评分，评价人始终为当前用户"""
    if req.email is not None:
        require_self(req.email, caller_email)
    review = req.model_dump(exclude_none=True)
    review["email"] = caller_email
    return serialize_document(service.submit(review))
