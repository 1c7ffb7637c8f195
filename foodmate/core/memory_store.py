"""In-memory document store.

Dictionary-backed implementation of the DocumentStore interface, used by the
test-suite and for running the API without a MongoDB server.

Supported query subset:
- equality on top-level fields (``None`` also matches a missing field)
- ``$or``, ``$in``, ``$regex`` with ``$options: "i"``
- updates with ``$set`` and ``$inc``

Thread safety: NOT thread-safe.
"""

import re
from copy import deepcopy
from typing import Any, Dict, List, Optional

from bson import ObjectId

from .database import Document, DocumentCollection, DocumentStore, UpdateResult

_MISSING = object()


def _match_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for op, arg in condition.items():
            if op == "$regex":
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(arg, value, flags):
                    return False
            elif op == "$in":
                if value not in arg:
                    return False
            elif op == "$options":
                continue
            else:
                raise ValueError(f"Unsupported query operator: {op}")
        return True
    if value is _MISSING:
        return condition is None
    return value == condition


def matches(document: Document, filter_dict: Optional[Document]) -> bool:
    """判断文档是否满足过滤条件"""
    for key, condition in (filter_dict or {}).items():
        if key == "$or":
            if not any(matches(document, sub) for sub in condition):
                return False
        elif not _match_condition(document.get(key, _MISSING), condition):
            return False
    return True


def _sort_key(field: str):
    def key(doc: Document):
        value = doc.get(field)
        # 缺失字段排在最前（升序时）
        return (value is not None, value if value is not None else 0)
    return key


class InMemoryCollection(DocumentCollection):

    def __init__(self, name: str):
        self.name = name
        # 插入顺序即自然顺序
        self._documents: List[Document] = []

    def find(self, filter_dict=None, sort=None, skip=0, limit=0):
        results = [d for d in self._documents if matches(d, filter_dict)]
        for field, direction in reversed(list(sort or [])):
            results.sort(key=_sort_key(field), reverse=direction < 0)
        if skip:
            results = results[skip:]
        if limit:
            results = results[:limit]
        return deepcopy(results)

    def find_one(self, filter_dict):
        for doc in self._documents:
            if matches(doc, filter_dict):
                return deepcopy(doc)
        return None

    def insert_one(self, document):
        doc = deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self._documents.append(doc)
        return doc["_id"]

    def update_one(self, filter_dict, update):
        for doc in self._documents:
            if not matches(doc, filter_dict):
                continue
            before = deepcopy(doc)
            for field, value in update.get("$set", {}).items():
                doc[field] = deepcopy(value)
            for field, amount in update.get("$inc", {}).items():
                doc[field] = (doc.get(field) or 0) + amount
            return UpdateResult(1, 0 if doc == before else 1)
        return UpdateResult(0, 0)

    def delete_one(self, filter_dict):
        for index, doc in enumerate(self._documents):
            if matches(doc, filter_dict):
                del self._documents[index]
                return 1
        return 0

    def count(self, filter_dict=None):
        return sum(1 for d in self._documents if matches(d, filter_dict))


class InMemoryStore(DocumentStore):
    """内存存储，集合按需创建"""

    def __init__(self) -> None:
        self._collections: Dict[str, InMemoryCollection] = {}

    def collection(self, name: str) -> InMemoryCollection:
        if name not in self._collections:
            self._collections[name] = InMemoryCollection(name)
        return self._collections[name]
