"""API tests for category listing and admin category management."""

import unittest

from tests.helpers import ApiTestCase


class TestCategoryApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.make_user("admin@example.com", role="admin", name="관리자")
        self.reporter = self.make_user()

    def _create(self, name: str, slug: str, display_order: int = 0, user=None):
        return self.client.post(
            "/api/admin/categories",
            json={"name": name, "slug": slug, "display_order": display_order},
            headers=self.auth(user or self.admin),
        )

    def test_create_then_list_in_rank_order(self) -> None:
        self._create("경제", "economy", 2)
        self._create("정치", "politics", 1)
        self._create("사회", "society", 2)
        resp = self.client.get("/api/categories")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([c["slug"] for c in resp.json()], ["politics", "economy", "society"])

    def test_create_returns_record(self) -> None:
        resp = self._create("기술", "Technology", 4)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["name"], "기술")
        self.assertEqual(body["slug"], "technology")
        self.assertEqual(body["display_order"], 4)

    def test_duplicate_name_or_slug_conflicts(self) -> None:
        self._create("정치", "politics", 1)
        by_name = self._create("정치", "politics-2")
        by_slug = self._create("정치2", "politics")
        self.assertEqual(by_name.status_code, 409)
        self.assertEqual(by_slug.status_code, 409)
        self.assertEqual(by_slug.json(), {"error": "Category name or slug already exists"})

    def test_blank_fields_and_bad_slug(self) -> None:
        self.assertEqual(self._create(" ", "x").status_code, 400)
        self.assertEqual(self._create("이름", "has space").status_code, 400)
        self.assertEqual(self._create("이름", "a/b").status_code, 400)

    def test_missing_fields_is_400(self) -> None:
        resp = self.client.post(
            "/api/admin/categories", json={"name": "이름"}, headers=self.auth(self.admin)
        )
        self.assertEqual(resp.status_code, 400)

    def test_reporter_cannot_manage(self) -> None:
        self.assertEqual(self._create("정치", "politics", user=self.reporter).status_code, 403)
        category = self.make_category("경제", "economy", 2)
        put = self.client.put(
            f"/api/admin/categories/{category.id}",
            json={"name": "x", "slug": "x"},
            headers=self.auth(self.reporter),
        )
        delete = self.client.delete(f"/api/admin/categories/{category.id}", headers=self.auth(self.reporter))
        self.assertEqual(put.status_code, 403)
        self.assertEqual(delete.status_code, 403)

    def test_update_replaces_fields(self) -> None:
        category = self.make_category("연예", "entertainment", 5)
        resp = self.client.put(
            f"/api/admin/categories/{category.id}",
            json={"name": "문화", "slug": "culture", "display_order": 0},
            headers=self.auth(self.admin),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"id": category.id, "name": "문화", "slug": "culture", "display_order": 0})
        self.assertEqual(self.client.get("/api/categories").json()[0]["slug"], "culture")

    def test_update_keeps_own_slug(self) -> None:
        category = self.make_category("연예", "entertainment", 5)
        resp = self.client.put(
            f"/api/admin/categories/{category.id}",
            json={"name": "연예", "slug": "entertainment", "display_order": 9},
            headers=self.auth(self.admin),
        )
        self.assertEqual(resp.status_code, 200)

    def test_update_and_delete_unknown_id(self) -> None:
        put = self.client.put(
            "/api/admin/categories/999", json={"name": "x", "slug": "x"}, headers=self.auth(self.admin)
        )
        delete = self.client.delete("/api/admin/categories/999", headers=self.auth(self.admin))
        self.assertEqual(put.status_code, 404)
        self.assertEqual(delete.status_code, 404)

    def test_out_of_range_id_is_not_found(self) -> None:
        url = f"/api/admin/categories/{10**20}"
        put = self.client.put(url, json={"name": "x", "slug": "x"}, headers=self.auth(self.admin))
        delete = self.client.delete(url, headers=self.auth(self.admin))
        self.assertEqual(put.status_code, 404)
        self.assertEqual(delete.status_code, 404)
        self.assertEqual(delete.json(), {"error": "Category not found"})

    def test_display_order_out_of_range_is_400(self) -> None:
        resp = self.client.post(
            "/api/admin/categories",
            json={"name": "x", "slug": "x", "display_order": 10**20},
            headers=self.auth(self.admin),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("display_order", resp.json()["error"])

    def test_delete_leaves_articles_uncategorized(self) -> None:
        category = self.make_category("스포츠", "sports", 6)
        article = self.make_article(self.reporter, category_id=category.id)
        resp = self.client.delete(f"/api/admin/categories/{category.id}", headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Category deleted successfully"})
        self.assertEqual(self.client.get("/api/categories").json(), [])
        detail = self.client.get(f"/api/articles/{article.id}").json()
        self.assertIsNone(detail["category_name"])
        self.assertEqual(self.client.get("/api/categories/sports/articles").status_code, 404)

    def test_admin_listing(self) -> None:
        self.make_category("정치", "politics", 1)
        resp = self.client.get("/api/admin/categories", headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 1)


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "OK")
        self.assertEqual(body["database"], "connected")
        self.assertIn("timestamp", body)


if __name__ == "__main__":
    unittest.main()
