"""End-to-end tests for /api/books through the FastAPI app."""

from fastapi.testclient import TestClient


class TestCatalogEndpoints:
    def test_create_then_get(self, client: TestClient):
        response = client.post(
            "/api/books",
            json={
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "quantity": 3,
                "totalQuantity": 5,
            },
        )

        assert response.status_code == 201
        created = response.json()
        assert created["id"] >= 1
        assert response.headers["location"].endswith(f"/api/books/{created['id']}")

        fetched = client.get(f"/api/books/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == {
            "id": created["id"],
            "title": "Dune",
            "author": "Frank Herbert",
            "genre": "Science Fiction",
            "quantity": 3,
            "totalQuantity": 5,
        }

    def test_create_defaults_total_to_quantity(self, client, create_book):
        book = create_book(quantity=4, totalQuantity=None)

        assert book["totalQuantity"] == 4

    def test_create_ignores_client_id(self, client, create_book):
        book = create_book(id=999)

        assert book["id"] != 999

    def test_create_rejects_quantity_above_total(self, client):
        response = client.post(
            "/api/books",
            json={
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "quantity": 6,
                "totalQuantity": 5,
            },
        )

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_create_rejects_missing_fields(self, client):
        response = client.post("/api/books", json={"title": "Dune"})

        assert response.status_code == 400

    def test_list_books(self, client, create_book):
        assert client.get("/api/books").json() == []

        first = create_book(title="Dune")
        second = create_book(title="Emma", author="Jane Austen", genre="Classic")

        books = client.get("/api/books").json()
        assert [book["id"] for book in books] == [first["id"], second["id"]]

    def test_get_missing(self, client):
        response = client.get("/api/books/404")

        assert response.status_code == 404
        assert response.json() == {"detail": "Book not found"}

    def test_get_non_integer_id(self, client):
        assert client.get("/api/books/abc").status_code == 400

    def test_replace(self, client, create_book):
        book = create_book()
        replacement = {
            "id": book["id"],
            "title": "Dune Messiah",
            "author": "Frank Herbert",
            "genre": "Science Fiction",
            "quantity": 1,
            "totalQuantity": 2,
        }

        response = client.put(f"/api/books/{book['id']}", json=replacement)

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/api/books/{book['id']}").json() == replacement

    def test_replace_id_mismatch(self, client, create_book):
        book = create_book()

        response = client.put(
            f"/api/books/{book['id']}",
            json={**book, "id": book["id"] + 1, "title": "Changed"},
        )

        assert response.status_code == 400
        assert client.get(f"/api/books/{book['id']}").json()["title"] == "Dune"

    def test_replace_missing(self, client):
        response = client.put(
            "/api/books/404",
            json={
                "id": 404,
                "title": "Ghost",
                "author": "Nobody",
                "genre": "None",
                "quantity": 0,
                "totalQuantity": 0,
            },
        )

        assert response.status_code == 404

    def test_delete(self, client, create_book):
        book = create_book()

        response = client.delete(f"/api/books/{book['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/books/{book['id']}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/books/404").status_code == 404


class TestSearchEndpoints:
    def test_title_is_case_insensitive_substring(self, client, create_book):
        create_book(title="Dune")
        create_book(title="Children of Dune")
        create_book(title="Emma", author="Jane Austen", genre="Classic")

        response = client.get("/api/books/title/dUNe")

        assert response.status_code == 200
        assert {book["title"] for book in response.json()} == {
            "Dune",
            "Children of Dune",
        }

    def test_author(self, client, create_book):
        create_book(title="Emma", author="Jane Austen", genre="Classic")

        response = client.get("/api/books/author/austen")

        assert [book["title"] for book in response.json()] == ["Emma"]

    def test_genre_exact_match(self, client, create_book):
        create_book(genre="Science Fiction")

        assert client.get("/api/books/genre/science%20fiction").status_code == 200
        assert client.get("/api/books/genre/Science").status_code == 404

    def test_genre_not_found_message(self, client):
        response = client.get("/api/books/genre/Poetry")

        assert response.status_code == 404
        assert response.json() == {"detail": "No books found for genre 'Poetry'."}

    def test_non_ascii_capitals_match_in_any_case(self, client, create_book):
        create_book(title="Émile", author="Ørsted Ålund", genre="Éducation")

        for path in (
            "/api/books/title/Émile",
            "/api/books/title/ÉMILE",
            "/api/books/author/Ørsted",
            "/api/books/author/ørsted",
            "/api/books/genre/Éducation",
            "/api/books/genre/éducation",
        ):
            response = client.get(path)
            assert response.status_code == 200, path
            assert [book["title"] for book in response.json()] == ["Émile"], path

    def test_title_not_found(self, client):
        response = client.get("/api/books/title/Ulysses")

        assert response.status_code == 404
        assert response.json() == {"detail": "No books found for title 'Ulysses'."}


class TestLendReturnEndpoints:
    def test_lend_until_unavailable(self, client, create_book):
        book = create_book(quantity=3, totalQuantity=5)
        lend_url = f"/api/books/{book['id']}/lend"

        quantities = [client.post(lend_url).json()["quantity"] for _ in range(3)]
        assert quantities == [2, 1, 0]

        response = client.post(lend_url)
        assert response.status_code == 400
        assert response.json() == {"detail": "Not available"}
        assert client.get(f"/api/books/{book['id']}").json()["quantity"] == 0

    def test_lend_unknown_book_reads_as_not_available(self, client):
        response = client.post("/api/books/404/lend")

        assert response.status_code == 400
        assert response.json() == {"detail": "Not available"}

    def test_return(self, client, create_book):
        book = create_book(quantity=3, totalQuantity=5)

        response = client.post(f"/api/books/{book['id']}/return")

        assert response.status_code == 200
        assert response.json()["quantity"] == 4
        assert response.json()["totalQuantity"] == 5

    def test_return_when_all_copies_on_shelf(self, client, create_book):
        book = create_book(quantity=5, totalQuantity=5)

        response = client.post(f"/api/books/{book['id']}/return")

        assert response.status_code == 400
        assert response.json() == {"detail": "All copies have already been returned."}
        assert client.get(f"/api/books/{book['id']}").json()["quantity"] == 5

    def test_return_unknown_book(self, client):
        assert client.post("/api/books/404/return").status_code == 404

    def test_lend_then_return_round_trip(self, client, create_book):
        book = create_book(quantity=1, totalQuantity=1)

        assert client.post(f"/api/books/{book['id']}/lend").json()["quantity"] == 0
        assert client.post(f"/api/books/{book['id']}/return").json()["quantity"] == 1


class TestRequestMiddleware:
    def test_request_id_echoed(self, client):
        response = client.get("/api/books", headers={"X-Request-ID": "req-123"})

        assert response.headers["x-request-id"] == "req-123"

    def test_request_id_generated(self, client):
        assert client.get("/api/books").headers["x-request-id"]

    def test_unhandled_error_becomes_500_with_request_id(
        self, client, database_service, monkeypatch
    ):
        def broken_session():
            raise RuntimeError("database exploded")

        monkeypatch.setattr(database_service, "get_session", broken_session)

        response = client.get("/api/books", headers={"X-Request-ID": "req-500"})

        assert response.status_code == 500
        assert response.json() == {
            "detail": "Internal Server Error",
            "request_id": "req-500",
        }
        assert response.headers["x-request-id"] == "req-500"
