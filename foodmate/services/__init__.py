"""
Business logic services.
Contains service layer implementations for core business operations.
"""

from .meal_service import MealService
from .order_service import OrderService
from .payment_gateway import PaymentGateway, StripePaymentGateway
from .payment_service import PaymentService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "MealService",
    "OrderService",
    "PaymentGateway",
    "PaymentService",
    "ReviewService",
    "StripePaymentGateway",
    "UserService",
]
