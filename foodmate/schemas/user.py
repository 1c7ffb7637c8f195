"""
用户相关的请求/响应模式
"""

from pydantic import BaseModel, Field
from typing import Optional

from ..models.user import UserRole


class UserCreateRequest(BaseModel):
    """用户注册请求，除 email 外的字段原样保存"""
    email: str = Field(..., min_length=1, description="邮箱（唯一）")
    name: Optional[str] = Field(None, description="姓名")
    photo: Optional[str] = Field(None, description="头像URL")
    address: Optional[str] = Field(None, description="地址")

    model_config = {"extra": "allow"}


class UserUpdateRequest(BaseModel):
    """用户资料更新请求，只更新提交的字段"""
    name: Optional[str] = Field(None, description="姓名")
    photo: Optional[str] = Field(None, alias="photoURL", description="头像URL")
    address: Optional[str] = Field(None, description="地址")

    model_config = {"populate_by_name": True}


class RoleRequest(BaseModel):
    """角色申请请求"""
    email: str = Field(..., description="申请人邮箱")
    requestedRole: UserRole = Field(..., description="申请的角色")


class RoleGrantRequest(BaseModel):
    """角色授予请求（管理员）"""
    role: UserRole = Field(..., description="授予的角色")


class AdminCheckResponse(BaseModel):
    isAdmin: bool


class ChefCheckResponse(BaseModel):
    isChef: bool
