"""
支付路由模块
"""

from fastapi import APIRouter, Depends

from ...schemas.payment import PaymentCreateRequest, PaymentIntentRequest, PaymentIntentResponse
from ...core.database import serialize_document
from ...core.dependencies import get_payment_service
from ...core.security import get_admin_email, get_current_email, get_self_email
from ...services.payment_service import PaymentService

router = APIRouter()


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    req: PaymentIntentRequest,
    caller_email: str = Depends(get_current_email),
    service: PaymentService = Depends(get_payment_service),
):
    return PaymentIntentResponse(clientSecret=service.create_intent(req.price))


@router.post("/payments")
def record_payment(
    req: PaymentCreateRequest,
    caller_email: str = Depends(get_current_email),
    service: PaymentService = Depends(get_payment_service),
):
    """保存支付记录并把订单标记为已支付"""
    return serialize_document(service.record_payment(req.model_dump(exclude_none=True)))


@router.get("/payments/{email}")
def list_user_payments(email: str = Depends(get_self_email), service: PaymentService = Depends(get_payment_service)):
    return serialize_document(service.list_for_user(email))


@router.get("/payments")
def list_all_payments(
    admin_email: str = Depends(get_admin_email),
    service: PaymentService = Depends(get_payment_service),
):
    """全部支付记录（管理员）"""
    return serialize_document(service.list_all())
