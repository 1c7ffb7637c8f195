"""
餐品服务
处理餐品的CRUD、搜索分页，以及历史ID兼容查找
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional

from ..core.database import MEALS, DocumentCollection, DocumentStore, UpdateResult, parse_object_id
from ..core.exceptions import MealNotFoundError
from ..models.meal import EDITABLE_FIELDS, normalize_meal

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100

# 插入顺序，保证分页稳定
NATURAL_ORDER = [("_id", 1)]


def _by_object_id(meal_id: str) -> Optional[Dict[str, Any]]:
    oid = parse_object_id(meal_id)
    return {"_id": oid} if oid is not None else None


def _by_legacy_string_id(meal_id: str) -> Optional[Dict[str, Any]]:
    return {"id": str(meal_id)}


def _by_legacy_int_id(meal_id: str) -> Optional[Dict[str, Any]]:
    text = str(meal_id).strip()
    return {"id": int(text)} if text.lstrip("-").isdigit() else None


# 兼容迁移前的数据：部分餐品只有字符串或整数形式的 "id" 字段。
# 历史数据补齐 _id 后即可删除后两种策略。
LOOKUP_STRATEGIES: List[Callable[[str], Optional[Dict[str, Any]]]] = [
    _by_object_id,
    _by_legacy_string_id,
    _by_legacy_int_id,
]


def find_meal_document(meals: DocumentCollection, meal_id: str) -> Optional[Dict[str, Any]]:
    """依次尝试各查找策略，返回第一个命中的原始文档"""
    for strategy in LOOKUP_STRATEGIES:
        filter_dict = strategy(meal_id)
        if filter_dict is None:
            continue
        doc = meals.find_one(filter_dict)
        if doc is not None:
            return doc
    return None


def build_search_filter(search: str) -> Dict[str, Any]:
    """名称/分类不区分大小写的子串匹配，空字符串不过滤"""
    if not search:
        return {}
    pattern = re.escape(search)
    return {
        "$or": [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"name": {"$regex": pattern, "$options": "i"}},
            {"category": {"$regex": pattern, "$options": "i"}},
        ]
    }


class MealService:
    """餐品服务"""

    def __init__(self, store: DocumentStore):
        self.meals = store.collection(MEALS)

    def search(self, page: int = 0, limit: int = DEFAULT_PAGE_SIZE, search: str = "") -> List[Dict[str, Any]]:
        skip = max(page, 0) * limit
        docs = self.meals.find(build_search_filter(search), sort=NATURAL_ORDER, skip=skip, limit=limit)
        return [normalize_meal(d) for d in docs]

    def count(self, search: str = "") -> int:
        return self.meals.count(build_search_filter(search))

    def get_meal(self, meal_id: str) -> Dict[str, Any]:
        doc = find_meal_document(self.meals, meal_id)
        if doc is None:
            raise MealNotFoundError(f"Meal not found: {meal_id}")
        return normalize_meal(doc)

    def find_meal(self, meal_id: str) -> Optional[Dict[str, Any]]:
        """与 get_meal 相同，但不存在时返回 None"""
        doc = find_meal_document(self.meals, meal_id)
        return normalize_meal(doc) if doc is not None else None

    def list_by_chef(self, email: str) -> List[Dict[str, Any]]:
        return [normalize_meal(d) for d in self.meals.find({"chefEmail": email}, sort=NATURAL_ORDER)]

    def create_meal(self, meal: Dict[str, Any]) -> Dict[str, Any]:
        """创建餐品；不校验 chefEmail 是否为调用方本人"""
        document = dict(meal)
        document.setdefault("rating", 0)
        document.setdefault("reviews_count", 0)
        document.setdefault("likes", 0)
        inserted_id = self.meals.insert_one(document)
        logger.info("Created meal %s (chef=%s)", inserted_id, document.get("chefEmail"))
        return {"insertedId": inserted_id}

    def update_meal(self, meal_id: str, fields: Dict[str, Any]) -> UpdateResult:
        """只更新允许修改的字段；餐品不存在时抛出 MealNotFoundError"""
        doc = find_meal_document(self.meals, meal_id)
        if doc is None:
            raise MealNotFoundError(f"Meal not found: {meal_id}")

        changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None}
        if not changes:
            return UpdateResult(1, 0)
        result = self.meals.update_one({"_id": doc["_id"]}, {"$set": changes})
        logger.info("Updated meal %s fields=%s", doc["_id"], sorted(changes))
        return result

    def delete_meal(self, meal_id: str) -> int:
        """幂等删除，不存在时返回 0"""
        doc = find_meal_document(self.meals, meal_id)
        if doc is None:
            return 0
        deleted = self.meals.delete_one({"_id": doc["_id"]})
        logger.info("Deleted meal %s", doc["_id"])
        return deleted
