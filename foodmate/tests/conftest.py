"""
测试配置文件
提供测试所需的fixtures和配置：内存存储、记录调用的支付网关、真实签发的JWT
"""

import pytest
from fastapi.testclient import TestClient

from foodmate.app import create_app
from foodmate.config.settings import Settings
from foodmate.core.database import MEALS, ORDERS, USERS
from foodmate.core.memory_store import InMemoryStore
from foodmate.core.security import SecurityManager
from foodmate.services.payment_gateway import PaymentGateway

BUYER_EMAIL = "buyer@example.com"
CHEF_EMAIL = "chef@example.com"
ADMIN_EMAIL = "admin@example.com"


class FakePaymentGateway(PaymentGateway):
    """记录每次调用的支付网关"""

    def __init__(self):
        self.calls = []

    def create_payment_intent(self, amount, currency):
        self.calls.append((amount, currency))
        return f"pi_test_{len(self.calls)}_secret_abc"


@pytest.fixture
def test_settings():
    """测试配置"""
    return Settings(
        jwt_secret_key="test-secret-key",
        api_title="FoodMate API (Test)",
        api_version="1.0.0-test",
        stripe_secret_key=None,
        debug=True,
    )


@pytest.fixture
def store():
    """内存文档存储"""
    return InMemoryStore()


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture
def app_instance(test_settings, store, payment_gateway):
    """测试应用"""
    return create_app(settings=test_settings, store=store, payment_gateway=payment_gateway)


@pytest.fixture
def client(app_instance):
    """测试客户端"""
    with TestClient(app_instance) as test_client:
        yield test_client


@pytest.fixture
def security(test_settings):
    return SecurityManager.from_settings(test_settings)


@pytest.fixture
def headers_for(security):
    """按email生成认证请求头"""
    def _headers(email):
        token = security.create_credential({"email": email})
        return {"Authorization": f"Bearer {token}"}
    return _headers


def _insert_user(store, email, role, status="none", **extra):
    user = {"email": email, "name": email.split("@")[0], "role": role, "status": status}
    user.update(extra)
    user_id = store.collection(USERS).insert_one(user)
    return dict(user, _id=user_id)


@pytest.fixture
def sample_user(store):
    """普通买家"""
    return _insert_user(store, BUYER_EMAIL, "none", address="1 Main St")


@pytest.fixture
def chef_user(store):
    return _insert_user(store, CHEF_EMAIL, "chef", "active")


@pytest.fixture
def admin_user(store):
    """管理员用户"""
    return _insert_user(store, ADMIN_EMAIL, "admin", "active")


@pytest.fixture
def auth_headers(sample_user, headers_for):
    """买家认证请求头"""
    return headers_for(BUYER_EMAIL)


@pytest.fixture
def chef_headers(chef_user, headers_for):
    return headers_for(CHEF_EMAIL)


@pytest.fixture
def admin_headers(admin_user, headers_for):
    """管理员认证请求头"""
    return headers_for(ADMIN_EMAIL)


@pytest.fixture
def sample_meal(store, chef_user):
    """示例餐品"""
    meal = {
        "title": "Pasta",
        "category": "Italian",
        "price": 12.5,
        "description": "Fresh tagliatelle",
        "image": "https://img.example.com/pasta.jpg",
        "chefEmail": CHEF_EMAIL,
        "rating": 0,
        "reviews_count": 0,
        "likes": 0,
    }
    meal_id = store.collection(MEALS).insert_one(meal)
    return dict(meal, _id=meal_id)


@pytest.fixture
def make_order(store, sample_meal):
    """直接写入订单（绕过接口，便于构造任意状态）"""
    def _make(**fields):
        order = {
            "userEmail": BUYER_EMAIL,
            "chefEmail": CHEF_EMAIL,
            "mealId": str(sample_meal["_id"]),
            "name": "Pasta",
            "price": 12.5,
            "orderStatus": "pending",
        }
        order.update(fields)
        order_id = store.collection(ORDERS).insert_one(order)
        return dict(order, _id=order_id)
    return _make
