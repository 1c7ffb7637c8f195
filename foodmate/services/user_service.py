"""
用户服务
处理用户资料和角色申请/授予流程
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.database import USERS, DocumentStore, UpdateResult, parse_object_id
from ..core.exceptions import ValidationError
from ..models.user import UserRole, UserStatus

logger = logging.getLogger(__name__)


class UserService:
    """用户服务"""

    def __init__(self, store: DocumentStore):
        self.users = store.collection(USERS)

    def list_users(self) -> List[Dict[str, Any]]:
        return self.users.find()

    def get_profile(self, email: str) -> Optional[Dict[str, Any]]:
        """按email查询，不存在时返回 None 而不是报错"""
        return self.users.find_one({"email": email})

    def update_profile(self, email: str, fields: Dict[str, Any]) -> UpdateResult:
        """部分更新：只写入调用方提交的 name/photo/address"""
        allowed = {k: v for k, v in fields.items() if k in ("name", "photo", "address")}
        if not allowed:
            return UpdateResult(0, 0)
        return self.users.update_one({"email": email}, {"$set": allowed})

    def register(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """
        注册用户，按email幂等

        Returns:
            dict: 新用户 {"insertedId": id}；已存在时
                  {"message": "user already exists", "insertedId": None}
        """
        email = user.get("email")
        if not email:
            raise ValidationError("email is required")

        if self.users.find_one({"email": email}):
            return {"message": "user already exists", "insertedId": None}

        # 角色只能经管理员授予，注册时忽略客户端提交的角色字段
        document = {k: v for k, v in user.items() if k not in ("role", "status", "requestedRole", "_id")}
        document["role"] = UserRole.NONE.value
        document["status"] = UserStatus.NONE.value
        inserted_id = self.users.insert_one(document)
        logger.info("Registered user %s", email)
        return {"insertedId": inserted_id}

    def request_role(self, email: str, requested_role: str) -> UpdateResult:
        """记录角色申请，不授予角色"""
        result = self.users.update_one(
            {"email": email},
            {"$set": {"status": UserStatus.REQUESTED.value, "requestedRole": requested_role}},
        )
        logger.info("Role %s requested by %s (matched=%d)", requested_role, email, result.matched_count)
        return result

    def grant_role(self, user_id: str, role: str) -> UpdateResult:
        """授予角色：同一次更新里设置角色、激活状态并清除申请"""
        oid = parse_object_id(user_id)
        if oid is None:
            raise ValidationError(f"Invalid user id: {user_id}")

        result = self.users.update_one(
            {"_id": oid},
            {"$set": {"role": role, "status": UserStatus.ACTIVE.value, "requestedRole": None}},
        )
        logger.info("Granted role %s to user %s (matched=%d)", role, user_id, result.matched_count)
        return result

    def has_role(self, email: str, role: UserRole) -> bool:
        user = self.users.find_one({"email": email})
        return bool(user) and user.get("role") == role.value

    def is_admin(self, email: str) -> bool:
        return self.has_role(email, UserRole.ADMIN)

    def is_chef(self, email: str) -> bool:
        return self.has_role(email, UserRole.CHEF)
