"""
第三方支付网关适配
只负责按金额和币种创建支付意图并返回前端可用的 client secret
"""

import logging
from abc import ABC, abstractmethod

import requests

from ..core.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


class PaymentGateway(ABC):
    """支付网关接口"""

    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str) -> str:
        """
        创建支付意图

        Args:
            amount: 最小货币单位金额（如美分）
            currency: 币种代码，如 "usd"

        Returns:
            str: client secret
        """


class StripePaymentGateway(PaymentGateway):
    """通过 Stripe REST API 创建 PaymentIntent"""

    def __init__(self, secret_key, api_base: str = "https://api.stripe.com", timeout: float = 10.0):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "StripePaymentGateway":
        return cls(settings.stripe_secret_key, settings.stripe_api_base, settings.payment_timeout_seconds)

    def create_payment_intent(self, amount: int, currency: str) -> str:
        if not self.secret_key:
            raise PaymentGatewayError("Payment processor is not configured")

        try:
            response = requests.post(
                f"{self.api_base}/v1/payment_intents",
                data={
                    "amount": amount,
                    "currency": currency,
                    "payment_method_types[]": "card",
                },
                auth=(self.secret_key, ""),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Payment intent request failed: %s", e)
            raise PaymentGatewayError(f"Payment processor unreachable: {e}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code >= 400:
            message = (data.get("error") or {}).get("message") or f"HTTP {response.status_code}"
            logger.error("Payment intent rejected: %s", message)
            raise PaymentGatewayError(
                f"Payment processor error: {message}",
                details={"status_code": response.status_code},
            )

        client_secret = data.get("client_secret")
        if not client_secret:
            raise PaymentGatewayError("Payment processor response missing client_secret")
        logger.info("Created payment intent %s for %d %s", data.get("id"), amount, currency)
        return client_secret
