"""
支付服务
创建支付意图、保存支付记录，并把关联订单标记为已支付

保存支付记录和更新订单是两次独立写入，不在同一事务中：
第二步失败时支付记录已存在而订单仍为原状态，可由重试修复。
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

from ..core.database import ORDERS, PAYMENTS, DocumentStore, parse_object_id
from ..core.exceptions import ValidationError
from ..models.order import OrderStatus
from .payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


def to_minor_units(price) -> int:
    """主货币单位 -> 最小单位，四舍五入（12.5 -> 1250）"""
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentService:
    """支付服务"""

    def __init__(self, store: DocumentStore, gateway: PaymentGateway, currency: str = "usd"):
        self.payments = store.collection(PAYMENTS)
        self.orders = store.collection(ORDERS)
        self.gateway = gateway
        self.currency = currency

    def create_intent(self, price: float) -> str:
        """不校验金额是否与订单一致，金额以客户端提交为准"""
        return self.gateway.create_payment_intent(to_minor_units(price), self.currency)

    def record_payment(self, payment: Dict[str, Any]) -> Dict[str, Any]:
        """
        保存支付记录并将订单标记为已支付（不检查订单原状态）

        Returns:
            dict: {"paymentResult": {...}, "orderResult": {...}}
        """
        order_oid = parse_object_id(payment.get("orderId"))
        if order_oid is None:
            raise ValidationError(f"Invalid order id: {payment.get('orderId')}")

        document = dict(payment)
        document.setdefault("date", datetime.now(timezone.utc))
        inserted_id = self.payments.insert_one(document)

        order_result = self.orders.update_one(
            {"_id": order_oid},
            {"$set": {
                "paymentStatus": OrderStatus.PAID.value,
                "orderStatus": OrderStatus.PAID.value,
            }},
        )
        if order_result.matched_count == 0:
            logger.warning("Payment %s references missing order %s", inserted_id, order_oid)
        logger.info("Recorded payment %s for order %s", inserted_id, order_oid)

        return {
            "paymentResult": {"insertedId": inserted_id},
            "orderResult": order_result.to_dict(),
        }

    def list_for_user(self, email: str) -> List[Dict[str, Any]]:
        return self.payments.find({"email": email})

    def list_all(self) -> List[Dict[str, Any]]:
        return self.payments.find()
