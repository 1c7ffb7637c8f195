"""
餐品API集成测试
"""

import pytest

from foodmate.core.database import MEALS

from .conftest import CHEF_EMAIL


@pytest.fixture
def seeded_meals(store):
    """五个餐品：两个名称含 pizza（大小写不同），一个分类为 Pizza"""
    docs = [
        {"title": "Margherita Pizza", "category": "Italian", "price": 10},
        {"title": "Sushi Box", "category": "Japanese", "price": 15},
        {"name": "pepperoni pizza", "category": "Italian", "price": 11},
        {"title": "Calzone", "category": "Pizza", "price": 9},
        {"title": "Ramen", "category": "Japanese", "price": 12},
    ]
    return [store.collection(MEALS).insert_one(d) for d in docs]


class TestMealSearchAPI:
    """搜索与分页"""

    def test_pages_concatenate_without_duplicates(self, client, seeded_meals):
        pages = [client.get("/meals", params={"page": p, "limit": 2}).json() for p in range(3)]

        assert [len(p) for p in pages] == [2, 2, 1]
        ids = [m["_id"] for page in pages for m in page]
        assert ids == [str(i) for i in seeded_meals]

    def test_page_past_end_is_empty(self, client, seeded_meals):
        response = client.get("/meals", params={"page": 10, "limit": 2})

        assert response.status_code == 200
        assert response.json() == []

    def test_search_is_case_insensitive_across_fields(self, client, seeded_meals):
        response = client.get("/meals", params={"search": "PIZZA"})

        titles = sorted(m["title"] for m in response.json())
        assert titles == ["Calzone", "Margherita Pizza", "pepperoni pizza"]
        assert client.get("/mealsCount", params={"search": "PIZZA"}).json() == {"count": 3}

    def test_count_without_search(self, client, seeded_meals):
        assert client.get("/mealsCount").json() == {"count": 5}

    def test_search_treats_regex_characters_literally(self, client, store):
        store.collection(MEALS).insert_one({"title": "Fish (grilled)", "price": 20})
        store.collection(MEALS).insert_one({"title": "Fish grilled", "price": 18})

        response = client.get("/meals", params={"search": "(grilled)"})

        assert [m["title"] for m in response.json()] == ["Fish (grilled)"]

    def test_invalid_paging_rejected(self, client):
        assert client.get("/meals", params={"page": -1}).status_code == 400
        assert client.get("/meals", params={"limit": 0}).status_code == 400


class TestMealLookupAPI:
    """单个餐品查找"""

    def test_get_by_object_id(self, client, sample_meal):
        response = client.get(f"/meals/{sample_meal['_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Pasta"
        assert body["name"] == "Pasta"
        assert body["_id"] == str(sample_meal["_id"])

    def test_get_by_legacy_string_id(self, client, store):
        store.collection(MEALS).insert_one({"id": "legacy-42", "title": "Old Soup"})

        response = client.get("/meals/legacy-42")

        assert response.status_code == 200
        assert response.json()["title"] == "Old Soup"

    def test_get_by_legacy_int_id(self, client, store):
        store.collection(MEALS).insert_one({"id": 7, "mealName": "Dumplings"})

        response = client.get("/meals/7")

        assert response.status_code == 200
        assert response.json()["title"] == "Dumplings"

    def test_missing_meal_returns_404(self, client):
        response = client.get("/meals/000000000000000000000000")

        assert response.status_code == 404
        assert response.json()["error_code"] == "MEAL_NOT_FOUND"

    def test_normalizes_legacy_fields(self, client, store):
        meal_id = store.collection(MEALS).insert_one(
            {"foodName": "Tacos", "photo": "https://img.example.com/t.png", "price": "$8.50"}
        )

        body = client.get(f"/meals/{meal_id}").json()

        assert body["title"] == "Tacos"
        assert body["name"] == "Tacos"
        assert body["image"] == "https://img.example.com/t.png"
        assert body["price"] == 8.5
        assert body["rating"] == 0
        assert body["reviews_count"] == 0
        assert body["likes"] == 0

    def test_list_by_chef(self, client, store, sample_meal, chef_headers):
        store.collection(MEALS).insert_one({"title": "Other", "chefEmail": "someone@example.com"})

        response = client.get(f"/meals/chef/{CHEF_EMAIL}", headers=chef_headers)

        assert response.status_code == 200
        assert [m["title"] for m in response.json()] == ["Pasta"]

    def test_list_by_chef_requires_auth(self, client):
        assert client.get(f"/meals/chef/{CHEF_EMAIL}").status_code == 401


class TestMealWriteAPI:
    """创建、修改、删除"""

    def test_create_requires_auth(self, client):
        response = client.post("/meals", json={"title": "Soup"})
        assert response.status_code == 401

    def test_create_defaults_aggregates(self, client, store, chef_headers):
        response = client.post(
            "/meals",
            headers=chef_headers,
            json={"title": "Soup", "price": 5, "chefEmail": CHEF_EMAIL, "ingredients": ["water"]},
        )

        assert response.status_code == 200
        meal_id = response.json()["insertedId"]
        stored = store.collection(MEALS).find_one({"title": "Soup"})
        assert str(stored["_id"]) == meal_id
        assert stored["ingredients"] == ["water"]
        assert (stored["rating"], stored["reviews_count"], stored["likes"]) == (0, 0, 0)

    def test_update_only_editable_fields(self, client, store, sample_meal, chef_headers):
        response = client.patch(
            f"/meals/{sample_meal['_id']}",
            headers=chef_headers,
            json={"price": 14, "description": "Now with truffle", "likes": 999, "chefEmail": "x@y.z"},
        )

        assert response.status_code == 200
        assert response.json() == {"matchedCount": 1, "modifiedCount": 1}
        stored = store.collection(MEALS).find_one({"_id": sample_meal["_id"]})
        assert stored["price"] == 14
        assert stored["description"] == "Now with truffle"
        assert stored["likes"] == 0
        assert stored["chefEmail"] == CHEF_EMAIL

    def test_update_missing_meal_returns_404(self, client, chef_headers):
        response = client.patch("/meals/000000000000000000000000", headers=chef_headers, json={"price": 3})
        assert response.status_code == 404

    def test_update_rejects_negative_price(self, client, sample_meal, chef_headers):
        response = client.patch(f"/meals/{sample_meal['_id']}", headers=chef_headers, json={"price": -1})
        assert response.status_code == 400

    def test_delete_is_idempotent(self, client, store, sample_meal, chef_headers):
        first = client.delete(f"/meals/{sample_meal['_id']}", headers=chef_headers)
        second = client.delete(f"/meals/{sample_meal['_id']}", headers=chef_headers)

        assert first.json() == {"deletedCount": 1}
        assert second.status_code == 200
        assert second.json() == {"deletedCount": 0}
        assert store.collection(MEALS).count() == 0
