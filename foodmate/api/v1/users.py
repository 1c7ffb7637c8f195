"""
用户管理路由模块
资料查询/修改、注册、角色申请与授予、角色判断
"""

from fastapi import APIRouter, Depends

from ...schemas.user import (
    AdminCheckResponse,
    ChefCheckResponse,
    RoleGrantRequest,
    RoleRequest,
    UserCreateRequest,
    UserUpdateRequest,
)
from ...core.database import serialize_document
from ...core.dependencies import get_user_service
from ...core.security import get_admin_email, get_current_email, get_self_email, require_self
from ...services.user_service import UserService

router = APIRouter()


@router.get("/users")
def list_users(
    admin_email: str = Depends(get_admin_email),
    service: UserService = Depends(get_user_service),
):
    """全部用户（管理员）"""
    return serialize_document(service.list_users())


@router.post("/users")
def register_user(req: UserCreateRequest, service: UserService = Depends(get_user_service)):
    """注册用户，同一email重复注册不会新增记录"""
    return serialize_document(service.register(req.model_dump(exclude_none=True)))


@router.get("/users/profile/{email}")
def get_profile(email: str, service: UserService = Depends(get_user_service)):
    """公开资料，用户不存在时返回 null"""
    return serialize_document(service.get_profile(email))


@router.patch("/users/profile/{email}")
def update_profile(
    req: UserUpdateRequest,
    email: str = Depends(get_self_email),
    service: UserService = Depends(get_user_service),
):
    """修改本人资料，仅更新提交的字段"""
    return service.update_profile(email, req.model_dump(exclude_unset=True)).to_dict()


@router.post("/users/request-role")
def request_role(
    req: RoleRequest,
    caller_email: str = Depends(get_current_email),
    service: UserService = Depends(get_user_service),
):
    """申请角色（只能为本人申请）"""
    require_self(req.email, caller_email)
    return service.request_role(req.email, req.requestedRole.value).to_dict()


@router.patch("/users/admin/{user_id}")
def grant_role(
    user_id: str,
    req: RoleGrantRequest,
    admin_email: str = Depends(get_admin_email),
    service: UserService = Depends(get_user_service),
):
    """授予角色（管理员）"""
    return service.grant_role(user_id, req.role.value).to_dict()


@router.get("/users/admin/{email}", response_model=AdminCheckResponse)
def check_admin(email: str = Depends(get_self_email), service: UserService = Depends(get_user_service)):
    return AdminCheckResponse(isAdmin=service.is_admin(email))


@router.get("/users/chef/{email}", response_model=ChefCheckResponse)
def check_chef(email: str = Depends(get_self_email), service: UserService = Depends(get_user_service)):
    return ChefCheckResponse(isChef=service.is_chef(email))
