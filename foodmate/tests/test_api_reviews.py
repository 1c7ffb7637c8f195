"""
评价API集成测试
"""

from datetime import datetime, timezone

import pytest

from foodmate.core.database import MEALS, REVIEWS

from .conftest import BUYER_EMAIL


class TestReviewAPI:
    """评价提交与聚合"""

    def test_ratings_are_recomputed(self, client, store, sample_meal, auth_headers):
        meal_id = str(sample_meal["_id"])
        for rating in (5, 4, 2):
            response = client.post(
                "/reviews", headers=auth_headers, json={"mealId": meal_id, "rating": rating, "text": "ok"}
            )
            assert response.status_code == 200

        meal = store.collection(MEALS).find_one({"_id": sample_meal["_id"]})
        assert meal["rating"] == pytest.approx(11 / 3)
        assert meal["reviews_count"] == 3
        assert meal["likes"] == 3

    def test_rating_out_of_range(self, client, store, sample_meal, auth_headers):
        response = client.post(
            "/reviews", headers=auth_headers, json={"mealId": str(sample_meal["_id"]), "rating": 6}
        )

        assert response.status_code == 400
        assert store.collection(REVIEWS).count() == 0

    def test_unknown_meal(self, client, store, auth_headers):
        response = client.post(
            "/reviews", headers=auth_headers, json={"mealId": "000000000000000000000000", "rating": 4}
        )

        assert response.status_code == 404
        assert store.collection(REVIEWS).count() == 0

    def test_requires_auth(self, client, sample_meal):
        response = client.post("/reviews", json={"mealId": str(sample_meal["_id"]), "rating": 4})
        assert response.status_code == 401

    def test_email_defaults_to_caller(self, client, store, sample_meal, auth_headers):
        client.post("/reviews", headers=auth_headers, json={"mealId": str(sample_meal["_id"]), "rating": 3})

        review = store.collection(REVIEWS).find_one({"mealId": str(sample_meal["_id"])})
        assert review["email"] == BUYER_EMAIL
        assert review["date"] is not None

    def test_reviews_through_legacy_id_share_aggregate(self, client, store, auth_headers):
        """同一餐品分别用 _id 和历史 id 评价，聚合覆盖全部评价"""
        meal_id = store.collection(MEALS).insert_one({"id": "7", "title": "Old Soup"})

        client.post("/reviews", headers=auth_headers, json={"mealId": str(meal_id), "rating": 5})
        client.post("/reviews", headers=auth_headers, json={"mealId": "7", "rating": 1})

        meal = store.collection(MEALS).find_one({"_id": meal_id})
        assert meal["reviews_count"] == 2
        assert meal["rating"] == pytest.approx(3.0)
        assert meal["likes"] == 2
        stored_ids = {r["mealId"] for r in store.collection(REVIEWS).find()}
        assert stored_ids == {str(meal_id)}

    def test_cannot_review_as_someone_else(self, client, store, sample_meal, auth_headers):
        response = client.post(
            "/reviews",
            headers=auth_headers,
            json={"mealId": str(sample_meal["_id"]), "rating": 5, "email": "victim@example.com"},
        )

        assert response.status_code == 403
        assert store.collection(REVIEWS).count() == 0

    def test_explicit_own_email_accepted(self, client, store, sample_meal, auth_headers):
        response = client.post(
            "/reviews",
            headers=auth_headers,
            json={"mealId": str(sample_meal["_id"]), "rating": 5, "email": BUYER_EMAIL},
        )

        assert response.status_code == 200
        assert store.collection(REVIEWS).find_one({})["email"] == BUYER_EMAIL

    def test_list_newest_first_and_filter(self, client, store):
        reviews = store.collection(REVIEWS)
        reviews.insert_one({"text": "old", "email": BUYER_EMAIL, "date": datetime(2024, 1, 1, tzinfo=timezone.utc)})
        reviews.insert_one({"text": "new", "email": BUYER_EMAIL, "date": datetime(2024, 3, 1, tzinfo=timezone.utc)})
        reviews.insert_one({"text": "other", "email": "x@example.com", "date": datetime(2024, 2, 1, tzinfo=timezone.utc)})

        all_reviews = client.get("/reviews").json()
        mine = client.get("/reviews", params={"email": BUYER_EMAIL}).json()

        assert [r["text"] for r in all_reviews] == ["new", "other", "old"]
        assert [r["text"] for r in mine] == ["new", "old"]
        assert mine[0]["date"].startswith("2024-03-01")
