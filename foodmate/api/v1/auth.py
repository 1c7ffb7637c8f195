"""
认证路由模块
签发Bearer凭证
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from ...core.dependencies import get_security_manager
from ...core.security import SecurityManager
from ...schemas.auth import TokenResponse

router = APIRouter()


@router.post("/credentials", response_model=TokenResponse)
@router.post("/jwt", response_model=TokenResponse, include_in_schema=False)  # 旧版前端路径
def issue_credential(
    claims: Dict[str, Any] = Body(...),
    security: SecurityManager = Depends(get_security_manager),
):
    """按提交的声明签发JWT（至少应包含 email）"""
    return TokenResponse(token=security.create_credential(claims))
