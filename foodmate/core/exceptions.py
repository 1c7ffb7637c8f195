"""
自定义异常类
提供更精确的错误处理和异常信息

error_code 决定 HTTP 状态码，映射见 core/error_handler.py
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """应用基础异常类"""

    default_error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)


class DatabaseError(BaseApplicationError):
    """数据库相关异常"""
    default_error_code = "DATABASE_ERROR"


class PaymentGatewayError(BaseApplicationError):
    """支付服务调用异常"""
    default_error_code = "PAYMENT_GATEWAY_ERROR"


class AuthenticationError(BaseApplicationError):
    """认证相关异常（凭证缺失、无效或过期）"""
    default_error_code = "AUTHENTICATION_REQUIRED"


class PermissionDeniedError(BaseApplicationError):
    """权限拒绝错误（凭证有效但无权访问）"""
    default_error_code = "PERMISSION_DENIED"


class ValidationError(BaseApplicationError):
    """数据验证异常"""
    default_error_code = "VALIDATION_ERROR"


class ResourceNotFoundError(BaseApplicationError):
    """资源不存在"""
    default_error_code = "RESOURCE_NOT_FOUND"


class UserNotFoundError(ResourceNotFoundError):
    default_error_code = "USER_NOT_FOUND"


class MealNotFoundError(ResourceNotFoundError):
    """餐品不存在异常"""
    default_error_code = "MEAL_NOT_FOUND"


class OrderNotFoundError(ResourceNotFoundError):
    """订单不存在异常"""
    default_error_code = "ORDER_NOT_FOUND"


class InvalidTransitionError(ValidationError):
    """订单状态转换非法（终态订单不可再变更）"""
    default_error_code = "ORDER_STATUS_TRANSITION_INVALID"
