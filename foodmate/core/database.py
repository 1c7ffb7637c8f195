"""
数据库连接和管理模块
提供文档集合存储的统一接口

- DocumentStore / DocumentCollection: 存储接口，服务层只依赖这一层
- MongoStore: 基于 pymongo 的生产实现
- InMemoryStore（core/memory_store.py）: 测试与本地开发使用的内存实现

存储句柄由应用实例持有并显式注入各服务，不使用模块级全局连接。
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .exceptions import DatabaseError

logger = logging.getLogger(__name__)

# 集合名称
USERS = "users"
MEALS = "meals"
ORDERS = "orders"
PAYMENTS = "payments"
REVIEWS = "reviews"

COLLECTION_NAMES = (USERS, MEALS, ORDERS, PAYMENTS, REVIEWS)

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


@dataclass
class UpdateResult:
    matched_count: int
    modified_count: int

    def to_dict(self) -> Dict[str, int]:
        return {"matchedCount": self.matched_count, "modifiedCount": self.modified_count}


class DocumentCollection(ABC):
    """单个文档集合的操作接口，过滤/更新语法采用 MongoDB 子集"""

    name: str

    @abstractmethod
    def find(
        self,
        filter_dict: Optional[Document] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Document]:
        """按条件查询，limit 为 0 表示不限制"""

    @abstractmethod
    def find_one(self, filter_dict: Document) -> Optional[Document]:
        """查询单个文档，不存在返回 None"""

    @abstractmethod
    def insert_one(self, document: Document) -> ObjectId:
        """插入文档，返回新文档 _id；不修改调用方传入的字典"""

    @abstractmethod
    def update_one(self, filter_dict: Document, update: Document) -> UpdateResult:
        """更新第一个匹配文档，支持 $set / $inc"""

    @abstractmethod
    def delete_one(self, filter_dict: Document) -> int:
        """删除第一个匹配文档，返回删除数量（0 或 1）"""

    @abstractmethod
    def count(self, filter_dict: Optional[Document] = None) -> int:
        """统计匹配文档数量"""


class DocumentStore(ABC):
    """文档存储接口"""

    @abstractmethod
    def collection(self, name: str) -> DocumentCollection:
        """获取集合句柄"""

    def ping(self) -> None:
        """检查存储可用性，不可用时抛出 DatabaseError"""

    def close(self) -> None:
        """释放连接"""


class MongoCollection(DocumentCollection):
    """pymongo 集合封装：记录错误日志并转换为 DatabaseError"""

    def __init__(self, collection):
        self._collection = collection
        self.name = collection.name

    def _fail(self, operation: str, error: PyMongoError, filter_dict: Optional[Document] = None):
        logger.error(
            "Error in %s: collection=%s, filter=%s, error=%s",
            operation, self.name, filter_dict, error
        )
        return DatabaseError(f"{operation} failed on {self.name}: {error}")

    def find(self, filter_dict=None, sort=None, skip=0, limit=0):
        try:
            cursor = self._collection.find(filter_dict or {})
            if sort:
                cursor = cursor.sort(list(sort))
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return list(cursor)
        except PyMongoError as e:
            raise self._fail("find", e, filter_dict)

    def find_one(self, filter_dict):
        try:
            return self._collection.find_one(filter_dict)
        except PyMongoError as e:
            raise self._fail("find_one", e, filter_dict)

    def insert_one(self, document):
        try:
            return self._collection.insert_one(dict(document)).inserted_id
        except PyMongoError as e:
            raise self._fail("insert_one", e)

    def update_one(self, filter_dict, update):
        try:
            result = self._collection.update_one(filter_dict, update)
            return UpdateResult(result.matched_count, result.modified_count)
        except PyMongoError as e:
            raise self._fail("update_one", e, filter_dict)

    def delete_one(self, filter_dict):
        try:
            return self._collection.delete_one(filter_dict).deleted_count
        except PyMongoError as e:
            raise self._fail("delete_one", e, filter_dict)

    def count(self, filter_dict=None):
        try:
            return self._collection.count_documents(filter_dict or {})
        except PyMongoError as e:
            raise self._fail("count", e, filter_dict)


class MongoStore(DocumentStore):
    """MongoDB 存储实现"""

    def __init__(self, client: MongoClient, database_name: str):
        self._client = client
        self._db = client[database_name]
        logger.info("Initialized MongoStore for database '%s'", database_name)

    @classmethod
    def from_settings(cls, settings) -> "MongoStore":
        """根据配置创建（MongoClient 延迟连接，创建时不访问网络）"""
        client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            tz_aware=True,
        )
        return cls(client, settings.mongodb_database)

    def collection(self, name: str) -> DocumentCollection:
        return MongoCollection(self._db[name])

    def ping(self) -> None:
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            raise DatabaseError(f"Database unavailable: {e}")

    def close(self) -> None:
        self._client.close()
        logger.info("Closed MongoStore connection")


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """将字符串解析为 ObjectId，格式不合法时返回 None"""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize_document(value: Any) -> Any:
    """递归地将 ObjectId 转为字符串，datetime 转为 ISO 字符串，便于 JSON 输出"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(v) for v in value]
    return value
