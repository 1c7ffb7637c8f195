"""
评价相关数据模型
"""

from typing import Any, Dict, List, Tuple

MIN_RATING = 1
MAX_RATING = 5


def rating_aggregate(reviews: List[Dict[str, Any]]) -> Tuple[float, int]:
    """返回 (平均分, 评价条数)；没有评分的历史评价不参与平均，无评分时平均分为 0"""
    ratings = [float(r["rating"]) for r in reviews if r.get("rating") is not None]
    average = sum(ratings) / len(ratings) if ratings else 0.0
    return average, len(reviews)
