"""
统一错误处理模块

所有错误都以同一结构返回：
    {"success": false, "error_code": ..., "message": ..., "details": {...}}

HTTP 状态码由 error_code 决定，见 ErrorHandler.ERROR_CODE_STATUS_MAP
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


@dataclass
class ErrorResponse:
    """标准错误响应"""
    error_code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    http_status: int = 400

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def to_json_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.http_status, content=self.to_dict())


class ErrorHandler:
    """异常 -> ErrorResponse 的转换规则"""

    ERROR_CODE_STATUS_MAP = {
        # 通用
        "VALIDATION_ERROR": 400,
        "AUTHENTICATION_REQUIRED": 401,
        "PERMISSION_DENIED": 403,
        "RESOURCE_NOT_FOUND": 404,

        # 资源
        "USER_NOT_FOUND": 404,
        "MEAL_NOT_FOUND": 404,
        "ORDER_NOT_FOUND": 404,

        # 订单状态
        "ORDER_STATUS_TRANSITION_INVALID": 400,

        # 外部依赖
        "INTERNAL_ERROR": 500,
        "DATABASE_ERROR": 500,
        "PAYMENT_GATEWAY_ERROR": 500,
    }

    @classmethod
    def status_for(cls, error_code: str) -> int:
        """未登记的业务错误码按 400 处理"""
        return cls.ERROR_CODE_STATUS_MAP.get(error_code, 400)

    @classmethod
    def from_application_error(cls, error: BaseApplicationError, path: str) -> ErrorResponse:
        http_status = cls.status_for(error.error_code)
        if http_status >= 500:
            logger.error("%s %s: %s", error.error_code, path, error.message)
        else:
            logger.debug("%s %s: %s", error.error_code, path, error.message)
        return ErrorResponse(error.error_code, error.message, dict(error.details), http_status)

    @classmethod
    def from_http_exception(cls, error: HTTPException) -> ErrorResponse:
        """框架层面的 404/405 等"""
        return ErrorResponse(
            "HTTP_ERROR",
            str(error.detail),
            {"status_code": error.status_code},
            error.status_code,
        )

    @classmethod
    def from_validation_error(cls, error: RequestValidationError) -> ErrorResponse:
        """请求体/参数校验失败统一返回 400，只保留字段位置和原因"""
        problems = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in error.errors()]
        return ErrorResponse("VALIDATION_ERROR", "invalid request", {"validation_errors": problems}, 400)

    @classmethod
    def from_unknown_error(cls, error: Exception, path: str) -> ErrorResponse:
        logger.exception("Unhandled %s on %s", type(error).__name__, path)
        return ErrorResponse(
            "INTERNAL_ERROR",
            str(error) or "internal server error",
            {"error_type": type(error).__name__},
            500,
        )


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    return ErrorHandler.from_application_error(exc, request.url.path).to_json_response()


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return ErrorHandler.from_http_exception(exc).to_json_response()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return ErrorHandler.from_validation_error(exc).to_json_response()


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.from_unknown_error(exc, request.url.path).to_json_response()


def register_error_handlers(app: FastAPI) -> None:
    """在应用上注册全部异常处理器"""
    app.add_exception_handler(BaseApplicationError, application_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
