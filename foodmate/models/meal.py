"""
餐品相关数据模型

历史数据中餐品名称、图片、价格字段并不统一，normalize_meal 在存储边界
把原始文档映射为规范结构，其余模块只看规范字段。
"""

import re
from typing import Any, Dict, Optional

# 展示名称的候选字段，按优先级排列
NAME_ALIASES = ("title", "name", "mealName", "foodName")
IMAGE_ALIASES = ("image", "photo", "imageUrl")

# 允许通过 PATCH /meals/{id} 修改的字段
EDITABLE_FIELDS = ("title", "category", "price", "description", "image")

_PRICE_CLEANUP = re.compile(r"[^0-9.\-]")


def _first_present(doc: Dict[str, Any], aliases) -> Optional[Any]:
    for field in aliases:
        value = doc.get(field)
        if value not in (None, ""):
            return value
    return None


def coerce_price(value: Any) -> float:
    """价格转为数值，"$12.50" -> 12.5；无法解析时为 0.0"""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(_PRICE_CLEANUP.sub("", value))
        except ValueError:
            return 0.0
    return 0.0


def normalize_meal(raw: Dict[str, Any]) -> Dict[str, Any]:
    """原始餐品文档 -> 规范餐品（纯函数，不修改入参）"""
    meal = dict(raw)

    display_name = _first_present(raw, NAME_ALIASES)
    if display_name is not None:
        meal["title"] = display_name
        meal["name"] = display_name

    image = _first_present(raw, IMAGE_ALIASES)
    if image is not None:
        meal["image"] = image

    if "price" in raw:
        meal["price"] = coerce_price(raw["price"])

    meal.setdefault("rating", 0)
    meal.setdefault("reviews_count", 0)
    meal.setdefault("likes", 0)
    return meal
