"""
评价服务
保存评价后按该餐品全部评价重新计算平均分和评价数（全量重算，不做增量）
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.database import MEALS, REVIEWS, DocumentStore
from ..core.exceptions import MealNotFoundError
from ..models.review import rating_aggregate
from .meal_service import find_meal_document

logger = logging.getLogger(__name__)


class ReviewService:
    """评价服务"""

    def __init__(self, store: DocumentStore):
        self.reviews = store.collection(REVIEWS)
        self.meals = store.collection(MEALS)

    def submit(self, review: Dict[str, Any]) -> Dict[str, Any]:
        """
        提交评价并刷新餐品聚合字段

        每条评价都会让餐品 likes +1，与评分高低无关（沿用原有行为）。

        Raises:
            MealNotFoundError: 评价的餐品不存在
        """
        meal_id = review["mealId"]
        meal = find_meal_document(self.meals, meal_id)
        if meal is None:
            raise MealNotFoundError(f"Meal not found: {meal_id}")

        # 统一按餐品 _id 记录，历史 id 提交的评价与其他评价归入同一组
        canonical_id = str(meal["_id"])
        document = dict(review)
        document["mealId"] = canonical_id
        document.setdefault("date", datetime.now(timezone.utc))
        inserted_id = self.reviews.insert_one(document)

        average, count = rating_aggregate(self.reviews.find({"mealId": canonical_id}))
        self.meals.update_one(
            {"_id": meal["_id"]},
            {"$set": {"rating": average, "reviews_count": count}, "$inc": {"likes": 1}},
        )
        logger.info("Review %s on meal %s: rating=%.2f count=%d", inserted_id, canonical_id, average, count)
        return {"insertedId": inserted_id}

    def list_reviews(self, email: Optional[str] = None) -> List[Dict[str, Any]]:
        """全部评价（可按评价人过滤），按日期倒序"""
        filter_dict = {"email": email} if email else {}
        return self.reviews.find(filter_dict, sort=[("date", -1)])
