"""
Smoke tests for the Movie Catalog API.

These tests verify basic functionality without requiring a live database:
the Supabase client is replaced by an in-memory fake and the OMDb lookup by a stub.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api import deps
from api.main import app
from movie_catalog.models.movies import PLACEHOLDER_POSTER_URL
from movie_catalog.repositories.movies import MovieRepositoryError

STUB_POSTER_URL = "https://m.media-amazon.com/images/M/inception.jpg"

INCEPTION = {"title": "Inception", "genre": "Sci-Fi", "rating": 8.8, "year": 2010}


@pytest.fixture
def poster_titles() -> list[str]:
    return []


@pytest.fixture
def client(fake_db, poster_titles):
    """Create a test client with the fake store and a stub poster lookup."""

    def stub_lookup(title: str) -> str:
        poster_titles.append(title)
        return STUB_POSTER_URL

    app.dependency_overrides[deps.get_supabase_client] = lambda: fake_db
    app.dependency_overrides[deps.get_poster_lookup] = lambda: stub_lookup
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_root_returns_ok(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "movie-catalog"

    def test_health_returns_healthy(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestListMovies:
    def test_list_movies_returns_empty_list(self, client: TestClient):
        response = client.get("/api/movies")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_movies_keeps_insertion_order(self, client: TestClient):
        for title in ("Alien", "Heat", "Up"):
            client.post("/api/movies", json={**INCEPTION, "title": title})

        response = client.get("/api/movies")
        assert [m["title"] for m in response.json()] == ["Alien", "Heat", "Up"]


class TestCreateMovie:
    def test_create_movie_returns_201_with_poster(self, client: TestClient, fake_db, poster_titles):
        response = client.post("/api/movies", json=INCEPTION)

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Inception"
        assert data["genre"] == "Sci-Fi"
        assert data["rating"] == 8.8
        assert data["year"] == 2010
        assert data["posterUrl"] == STUB_POSTER_URL
        assert "poster_url" not in data
        assert data["id"] == fake_db.rows[0]["id"]
        assert poster_titles == ["Inception"]

    @pytest.mark.parametrize("field", ["title", "genre", "rating", "year"])
    def test_create_movie_missing_field_returns_400(self, client: TestClient, fake_db, poster_titles, field: str):
        payload = {k: v for k, v in INCEPTION.items() if k != field}

        response = client.post("/api/movies", json=payload)

        assert response.status_code == 400
        assert "All fields are required" in response.json()["detail"]
        assert field in response.json()["detail"]
        assert fake_db.rows == []
        assert poster_titles == []

    def test_create_movie_blank_title_returns_400(self, client: TestClient, fake_db):
        response = client.post("/api/movies", json={**INCEPTION, "title": "   "})
        assert response.status_code == 400
        assert fake_db.rows == []

    def test_create_movie_non_numeric_rating_returns_400(self, client: TestClient, fake_db):
        response = client.post("/api/movies", json={**INCEPTION, "rating": "great"})
        assert response.status_code == 400
        assert fake_db.rows == []

    def test_create_movie_non_numeric_rating_detail_names_problem_once(self, client: TestClient):
        response = client.post("/api/movies", json={**INCEPTION, "rating": "great"})
        assert response.json()["detail"] == "rating must be a number"

    @pytest.mark.parametrize("rating", ["nan", "inf", "-inf"])
    def test_create_movie_non_finite_rating_returns_400(self, client: TestClient, fake_db, rating: str):
        response = client.post("/api/movies", json={**INCEPTION, "rating": rating})

        assert response.status_code == 400
        assert response.json()["detail"] == "rating must be a finite number"
        assert fake_db.rows == []

    @pytest.mark.parametrize("field", ["rating", "year"])
    def test_create_movie_boolean_number_returns_400(self, client: TestClient, fake_db, field: str):
        response = client.post("/api/movies", json={**INCEPTION, field: True})

        assert response.status_code == 400
        assert field in response.json()["detail"]
        assert fake_db.rows == []

    @pytest.mark.parametrize("year", [99999999999, "99999999999", 10000])
    def test_create_movie_out_of_range_year_returns_400(self, client: TestClient, fake_db, year):  # noqa: ANN001
        response = client.post("/api/movies", json={**INCEPTION, "year": year})

        assert response.status_code == 400
        assert response.json()["detail"] == "year must be between 0 and 9999"
        assert fake_db.rows == []

    def test_create_movie_accepts_zero_rating(self, client: TestClient):
        response = client.post("/api/movies", json={**INCEPTION, "rating": 0})
        assert response.status_code == 201
        assert response.json()["rating"] == 0

    def test_create_movie_with_placeholder_poster(self, client: TestClient):
        app.dependency_overrides[deps.get_poster_lookup] = lambda: (lambda title: PLACEHOLDER_POSTER_URL)

        response = client.post("/api/movies", json=INCEPTION)

        assert response.status_code == 201
        assert response.json()["posterUrl"] == PLACEHOLDER_POSTER_URL


class TestRandomMovie:
    def test_random_movie_returns_null_when_empty(self, client: TestClient):
        response = client.get("/api/movies/random")
        assert response.status_code == 200
        assert response.json() is None

    def test_random_movie_returns_existing_movie(self, client: TestClient):
        ids = {client.post("/api/movies", json={**INCEPTION, "title": t}).json()["id"] for t in ("A", "B")}

        response = client.get("/api/movies/random")

        assert response.status_code == 200
        assert response.json()["id"] in ids


class TestDeleteMovie:
    def test_delete_movie_removes_it(self, client: TestClient):
        movie_id = client.post("/api/movies", json=INCEPTION).json()["id"]

        response = client.delete(f"/api/movies/{movie_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Movie deleted successfully"}
        assert client.get("/api/movies").json() == []

    def test_delete_unknown_movie_returns_404(self, client: TestClient, fake_db):
        client.post("/api/movies", json=INCEPTION)

        response = client.delete("/api/movies/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found"
        assert len(fake_db.rows) == 1

    def test_delete_malformed_id_returns_404(self, client: TestClient):
        response = client.delete("/api/movies/not-a-uuid")
        assert response.status_code == 404


class TestStoreFailures:
    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("GET", "/api/movies", None),
            ("POST", "/api/movies", INCEPTION),
            ("GET", "/api/movies/random", None),
            ("DELETE", "/api/movies/00000000-0000-0000-0000-000000000000", None),
        ],
    )
    def test_store_failure_returns_generic_500(self, client: TestClient, fake_db, method, path, body):
        fake_db.fail_with = MovieRepositoryError("connection refused to db.internal:5432")

        response = client.request(method, path, json=body)

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail.startswith("Server error while")
        assert "db.internal" not in detail


class TestCORSConfiguration:
    def test_cors_headers_present(self, client: TestClient):
        response = client.options(
            "/api/movies",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
