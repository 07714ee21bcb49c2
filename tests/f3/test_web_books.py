"""Tests for the book marketplace (F3)."""

from skillup.db.books_repository import get_book_by_id


def _headers(data: dict) -> dict:
    return {"Authorization": f"Bearer {data['token']}"}


class TestListBooks:
    """Tests for GET /api/books."""

    def test_list_newest_first(self, client):
        response = client.get("/api/books")
        assert response.status_code == 200
        books = response.json()
        assert [b["id"] for b in books] == [4, 3, 2, 1]
        assert books[-1]["title"] == "Cracking the Coding Interview"

    def test_list_includes_list_price(self, client):
        books = {b["id"]: b for b in client.get("/api/books").json()}
        assert books[3]["price"] == 300
        assert books[3]["list_price"] == 345

    def test_filter_by_department(self, client):
        books = client.get("/api/books", params={"department": "MBA"}).json()
        assert [b["title"] for b in books] == ["Principles of Management"]


class TestCreateBook:
    """Tests for POST /api/books."""

    def test_create_book_seller_is_caller(self, client, signup):
        user = signup()
        response = client.post(
            "/api/books",
            json={"title": "Signals Notes", "price": 120, "department": "ECE", "stock": 3},
            headers=_headers(user),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["book"]["seller_id"] == user["user"]["id"]
        assert data["book"]["stock"] == 3

    def test_missing_or_zero_stock_defaults_to_one(self, client, auth_headers):
        for body in (
            {"title": "A", "price": 10},
            {"title": "B", "price": 10, "stock": 0},
        ):
            response = client.post("/api/books", json=body, headers=auth_headers)
            assert response.json()["book"]["stock"] == 1

    def test_create_requires_auth(self, client):
        response = client.post("/api/books", json={"title": "A", "price": 10})
        assert response.status_code == 401

    def test_negative_price_rejected(self, client, auth_headers):
        response = client.post(
            "/api/books", json={"title": "A", "price": -5}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_blank_title_rejected(self, client, auth_headers):
        response = client.post(
            "/api/books", json={"title": "   ", "price": 10}, headers=auth_headers
        )
        assert response.status_code == 422
        assert len(client.get("/api/books").json()) == 4

    def test_title_trimmed(self, client, auth_headers):
        response = client.post(
            "/api/books", json={"title": "  Notes  ", "price": 10}, headers=auth_headers
        )
        assert response.json()["book"]["title"] == "Notes"


class TestBuyBook:
    """Tests for POST /api/books/buy."""

    def test_buy_decrements_stock(self, client, auth_headers):
        response = client.post("/api/books/buy", json={"book_id": 1}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "book_id": 1, "stock": 4}
        assert get_book_by_id(1).stock == 4

    def test_buy_out_of_stock(self, client, auth_headers):
        response = client.post("/api/books/buy", json={"book_id": 2}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Out of stock"
        assert get_book_by_id(2).stock == 0

    def test_buy_last_copy_then_sold_out(self, client, auth_headers):
        first = client.post("/api/books/buy", json={"book_id": 4}, headers=auth_headers)
        second = client.post("/api/books/buy", json={"book_id": 4}, headers=auth_headers)
        assert first.status_code == 200
        assert second.status_code == 400
        assert get_book_by_id(4).stock == 0

    def test_buy_missing_book(self, client, auth_headers):
        response = client.post("/api/books/buy", json={"book_id": 999}, headers=auth_headers)
        assert response.status_code == 404

    def test_buy_requires_auth(self, client):
        response = client.post("/api/books/buy", json={"book_id": 1})
        assert response.status_code == 401


class TestDeleteBook:
    """Tests for DELETE /api/books/{id}."""

    def test_owner_deletes(self, client, auth_headers):
        # First user (id 1) is the seller of seeded book 1
        response = client.delete("/api/books/1", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert get_book_by_id(1) is None
        assert get_book_by_id(2) is not None

    def test_non_owner_forbidden(self, client, signup):
        signup(email="first@example.com")
        other = signup(email="other@example.com")

        response = client.delete("/api/books/1", headers=_headers(other))
        assert response.status_code == 403
        assert response.json()["detail"] == "Unauthorized"
        assert get_book_by_id(1) is not None

    def test_delete_missing(self, client, auth_headers):
        response = client.delete("/api/books/999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Book not found"

    def test_delete_own_listing(self, client, signup):
        signup(email="first@example.com")
        seller = signup(email="seller@example.com")
        created = client.post(
            "/api/books", json={"title": "Mine", "price": 50}, headers=_headers(seller)
        ).json()["book"]

        response = client.delete(f"/api/books/{created['id']}", headers=_headers(seller))
        assert response.status_code == 200
        assert get_book_by_id(created["id"]) is None


class TestCheckout:
    """Tests for POST /api/books/checkout."""

    def test_checkout_all_available(self, client, auth_headers):
        response = client.post(
            "/api/books/checkout", json={"book_ids": [1, 3]}, headers=auth_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["purchased_count"] == 2
        assert data["total"] == 750
        assert get_book_by_id(3).stock == 1

    def test_checkout_partial(self, client, auth_headers):
        response = client.post(
            "/api/books/checkout", json={"book_ids": [1, 2, 999]}, headers=auth_headers
        )
        data = response.json()
        assert data["success"] is False
        assert data["purchased_count"] == 1
        assert data["total"] == 450
        messages = {item["book_id"]: item["message"] for item in data["items"]}
        assert messages[2] == "Out of stock"
        assert messages[999] == "Book not found"

    def test_checkout_empty_cart_rejected(self, client, auth_headers):
        response = client.post(
            "/api/books/checkout", json={"book_ids": []}, headers=auth_headers
        )
        assert response.status_code == 422
