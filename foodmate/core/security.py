"""
安全相关功能
凭证签发/校验，以及“本人访问”和“管理员访问”两种授权策略
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .database import USERS, DocumentStore
from .dependencies import get_security_manager, get_store
from .exceptions import AuthenticationError, PermissionDeniedError, ValidationError

logger = logging.getLogger(__name__)

# 不自动拒绝，缺失 Authorization 头时由 get_current_email 统一返回 401
bearer_scheme = HTTPBearer(auto_error=False)


class SecurityManager:
    """安全管理器"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_hours: int = 1):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_hours = expire_hours

    @classmethod
    def from_settings(cls, settings) -> "SecurityManager":
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, settings.jwt_expire_hours)

    def create_credential(self, claims: Dict[str, Any]) -> str:
        """签发JWT，载荷原样包含调用方提交的声明"""
        if not isinstance(claims, dict):
            raise ValidationError("Credential claims must be an object")

        now = datetime.now(timezone.utc)
        payload = dict(claims)
        payload.update({
            "iat": now,
            "exp": now + timedelta(hours=self.expire_hours),
        })
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_credential(self, token: str) -> Dict[str, Any]:
        """解码JWT"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("unauthorized access: token has expired")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(f"unauthorized access: invalid token ({e})")

    def get_email_from_token(self, token: str) -> str:
        """从token中提取email"""
        payload = self.decode_credential(token)
        email = payload.get("email")
        if not email or not isinstance(email, str):
            raise AuthenticationError("unauthorized access: token missing email")
        return email


def require_self(path_email: str, caller_email: str) -> None:
    """路径中的 email 必须与调用方完全一致"""
    if path_email != caller_email:
        raise PermissionDeniedError("forbidden access")


def require_admin(store: DocumentStore, caller_email: str) -> None:
    """调用方必须是 role=admin 的已注册用户"""
    user = store.collection(USERS).find_one({"email": caller_email})
    if not user or user.get("role") != "admin":
        logger.info("Admin access denied for %s", caller_email)
        raise PermissionDeniedError("forbidden access")


async def get_current_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    security: SecurityManager = Depends(get_security_manager),
) -> str:
    """从Authorization header中提取并验证调用方email"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("unauthorized access")
    return security.get_email_from_token(credentials.credentials)


def get_admin_email(
    email: str = Depends(get_current_email),
    store: DocumentStore = Depends(get_store),
) -> str:
    """管理员权限依赖"""
    require_admin(store, email)
    return email


def get_self_email(
    email: str = Path(...),
    caller_email: str = Depends(get_current_email),
) -> str:
    """本人访问依赖：路径参数 {email} 必须等于调用方"""
    require_self(email, caller_email)
    return email
