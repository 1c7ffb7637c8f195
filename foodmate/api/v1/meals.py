"""
餐品管理路由模块
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query

from ...schemas.meal import MealCountResponse, MealUpdateRequest
from ...core.database import serialize_document
from ...core.dependencies import get_meal_service
from ...core.security import get_current_email
from ...services.meal_service import DEFAULT_PAGE_SIZE, MealService

router = APIRouter()


@router.get("/meals")
def search_meals(
    page: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    search: str = "",
    service: MealService = Depends(get_meal_service),
):
    """搜索+分页，skip = page * limit"""
    return serialize_document(service.search(page, limit, search))


@router.get("/mealsCount", response_model=MealCountResponse)
def count_meals(search: str = "", service: MealService = Depends(get_meal_service)):
    """分页用的匹配总数"""
    return MealCountResponse(count=service.count(search))


@router.get("/meals/chef/{email}")
def list_chef_meals(
    email: str,
    caller_email: str = Depends(get_current_email),
    service: MealService = Depends(get_meal_service),
):
    return serialize_document(service.list_by_chef(email))


@router.get("/meals/{meal_id}")
def get_meal(meal_id: str, service: MealService = Depends(get_meal_service)):
    return serialize_document(service.get_meal(meal_id))


@router.post("/meals")
def create_meal(
    meal: Dict[str, Any] = Body(...),
    caller_email: str = Depends(get_current_email),
    service: MealService = Depends(get_meal_service),
):
    """创建餐品，请求体原样保存"""
    return serialize_document(service.create_meal(meal))


@router.patch("/meals/{meal_id}")
def update_meal(
    meal_id: str,
    req: MealUpdateRequest,
    caller_email: str = Depends(get_current_email),
    service: MealService = Depends(get_meal_service),
):
    return service.update_meal(meal_id, req.model_dump(exclude_unset=True)).to_dict()


@router.delete("/meals/{meal_id}")
def delete_meal(
    meal_id: str,
    caller_email: str = Depends(get_current_email),
    service: MealService = Depends(get_meal_service),
):
    return {"deletedCount": service.delete_meal(meal_id)}
