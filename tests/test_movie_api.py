"""Tests for the movie REST endpoints."""
import pytest
from sqlalchemy.exc import OperationalError

from app.application.services.catalog_service import CatalogService
from app.application.services.rating_aggregator import RatingAggregator
from app.core.dependencies import get_catalog_service, get_rating_aggregator

API = "/api/v1/movies"


def create(client, **fields):
    response = client.post(API, json=fields)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestCreateAndFetch:
    """Test POST /movies and GET /movies/{id}."""

    def test_round_trip(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)

        assert isinstance(created["id"], int)
        assert created["average_rating"] == 0.0
        assert created["num_ratings"] == 0

        response = client.get(f"{API}/{created['id']}")
        assert response.status_code == 200
        fetched = response.json()
        for field, value in sample_movie_data.items():
            assert fetched[field] == value
        assert fetched == created

    def test_optional_fields_default_to_null(self, client):
        created = create(client, title="Heat", director="Michael Mann")
        assert created["year"] is None
        assert created["genre"] is None
        assert created["description"] is None
        assert created["poster_url"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"director": "Someone"},
            {"title": "Something"},
            {"title": "   ", "director": "Someone"},
            {"title": "Something", "director": ""},
            {"title": "Something", "director": "Someone", "year": 0},
            {"title": "Something", "director": "Someone", "year": "1999"},
            {"title": "Something", "director": "Someone", "year": 1999.5},
            {"title": "Something", "director": "Someone", "genre": ""},
            {"title": "Something", "director": "Someone", "description": " "},
            {"title": "Something", "director": "Someone", "poster_url": "ftp://x.com/a.jpg"},
            {"title": "Something", "director": "Someone", "poster_url": "https://x.com/a.txt"},
            {"title": 42, "director": "Someone"},
        ],
    )
    def test_invalid_payload_is_400(self, client, payload):
        response = client.post(API, json=payload)
        assert response.status_code == 400
        assert response.json()["detail"]

    def test_validation_message_is_readable(self, client):
        response = client.post(API, json={"title": "Something", "director": "Someone", "year": -5})
        assert response.json()["detail"] == "Year must be a positive integer."

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"director": "Someone"}, "Title is required and must be a non-empty string."),
            ({"title": "Something"}, "Director is required and must be a non-empty string."),
        ],
    )
    def test_missing_required_field_message(self, client, payload, message):
        response = client.post(API, json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == message

    def test_year_beyond_int_column_is_400(self, client):
        response = client.post(API, json={"title": "Something", "director": "Someone", "year": 10**20})
        assert response.status_code == 400
        assert response.json()["detail"] == "Year must be a positive integer."

    def test_poster_url_extension_is_case_insensitive(self, client):
        created = create(client, title="Alien", director="Ridley Scott", poster_url="http://img.example.com/alien.PNG")
        assert created["poster_url"] == "http://img.example.com/alien.PNG"

    def test_duplicate_is_409(self, client, sample_movie_data):
        create(client, **sample_movie_data)
        response = client.post(API, json={"title": sample_movie_data["title"], "director": sample_movie_data["director"]})
        assert response.status_code == 409
        assert response.json()["detail"] == "A movie with this title and director already exists."

    def test_missing_movie_is_404(self, client):
        response = client.get(f"{API}/12345")
        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found."

    @pytest.mark.parametrize("bad_id", ["0", "-1", "abc"])
    def test_invalid_id_is_400(self, client, bad_id):
        response = client.get(f"{API}/{bad_id}")
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid movie ID. Must be a positive number."

    def test_id_beyond_int_column_is_404(self, client):
        response = client.get(f"{API}/99999999999999999999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found."


@pytest.mark.integration
class TestListAndSearch:
    """Test GET /movies and GET /movies/search."""

    def test_list_all(self, client, seeded_catalog):
        response = client.get(API)
        assert response.status_code == 200
        assert [m["title"] for m in response.json()] == [m.title for m in seeded_catalog]

    def test_list_empty_catalog(self, client):
        response = client.get(API)
        assert response.status_code == 200
        assert response.json() == []

    def test_search_without_criteria_is_400(self, client, seeded_catalog):
        response = client.get(f"{API}/search")
        assert response.status_code == 400

    def test_search_with_only_empty_criteria_is_400(self, client, seeded_catalog):
        response = client.get(f"{API}/search", params={"title": "", "year": ""})
        assert response.status_code == 400

    def test_search_by_year(self, client, seeded_catalog):
        response = client.get(f"{API}/search", params={"year": 1994})
        assert response.status_code == 200
        titles = sorted(m["title"] for m in response.json())
        assert titles == ["Pulp Fiction", "The Shawshank Redemption"]

    @pytest.mark.parametrize("year", ["abc", "0", "-1994", "99999999999999999999"])
    def test_search_with_bad_year_is_400(self, client, seeded_catalog, year):
        response = client.get(f"{API}/search", params={"year": year})
        assert response.status_code == 400
        assert response.json()["detail"] == "Search year must be a positive integer."

    def test_search_title_substring_is_case_insensitive(self, client, seeded_catalog):
        response = client.get(f"{API}/search", params={"title": "shawSHANK"})
        assert [m["title"] for m in response.json()] == ["The Shawshank Redemption"]

    def test_search_criteria_are_combined(self, client, seeded_catalog):
        response = client.get(f"{API}/search", params={"year": 1994, "genre": "crime"})
        assert [m["title"] for m in response.json()] == ["Pulp Fiction"]

    def test_search_no_match_is_empty_list(self, client, seeded_catalog):
        response = client.get(f"{API}/search", params={"director": "Kubrick"})
        assert response.status_code == 200
        assert response.json() == []

    def test_search_wildcards_are_literal(self, client, seeded_catalog):
        response = client.get(f"{API}/search", params={"title": "%"})
        assert response.json() == []


@pytest.mark.integration
class TestUpdateAndDelete:
    """Test PUT and DELETE /movies/{id}."""

    def test_partial_update(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)

        response = client.put(f"{API}/{created['id']}", json={"genre": "Thriller", "year": 2011})
        assert response.status_code == 200
        updated = response.json()
        assert updated["genre"] == "Thriller"
        assert updated["year"] == 2011
        assert updated["title"] == sample_movie_data["title"]
        assert updated["description"] == sample_movie_data["description"]

    def test_update_cannot_touch_aggregate(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)
        response = client.put(f"{API}/{created['id']}", json={"average_rating": 5, "num_ratings": 99})
        assert response.status_code == 400
        assert response.json()["detail"] == "No fields provided for update."

    def test_empty_update_is_400(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)
        response = client.put(f"{API}/{created['id']}", json={})
        assert response.status_code == 400

    def test_update_with_null_is_400(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)
        response = client.put(f"{API}/{created['id']}", json={"year": None})
        assert response.status_code == 400

    def test_update_year_beyond_int_column_is_400(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)
        response = client.put(f"{API}/{created['id']}", json={"year": 10**20})
        assert response.status_code == 400
        assert response.json()["detail"] == "Year must be a positive integer."

    def test_update_missing_movie_is_404(self, client):
        response = client.put(f"{API}/777", json={"genre": "Drama"})
        assert response.status_code == 404

    def test_update_to_existing_title_and_director_is_409(self, client, seeded_catalog):
        target = seeded_catalog[2]
        response = client.put(
            f"{API}/{target.id}",
            json={"title": "Inception", "director": "Christopher Nolan"},
        )
        assert response.status_code == 409

    def test_delete(self, client, sample_movie_data):
        created = create(client, **sample_movie_data)

        response = client.delete(f"{API}/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Movie deleted successfully."}

        assert client.get(f"{API}/{created['id']}").status_code == 404
        assert client.delete(f"{API}/{created['id']}").status_code == 404


@pytest.mark.integration
class TestRateEndpoint:
    """Test POST /movies/{id}/rate and GET /movies/{id}/rating."""

    def test_rating_sequence(self, client, sample_movie_data):
        movie_id = create(client, **sample_movie_data)["id"]

        expected = [(4, 4.0, 1), (2, 3.0, 2), (5, 3.67, 3)]
        for rating, average, count in expected:
            response = client.post(f"{API}/{movie_id}/rate", json={"rating": rating})
            assert response.status_code == 200
            body = response.json()
            assert body["message"] == "Movie rated successfully."
            assert body["new_average_rating"] == average
            assert body["new_num_ratings"] == count

        movie = client.get(f"{API}/{movie_id}").json()
        assert movie["average_rating"] == 3.67
        assert movie["num_ratings"] == 3

        aggregate = client.get(f"{API}/{movie_id}/rating").json()
        assert aggregate == {"movie_id": movie_id, "average_rating": 3.67, "num_ratings": 3}

    @pytest.mark.parametrize("body", [{"rating": 0}, {"rating": 6}, {"rating": 2.5}, {"rating": "3"}, {}])
    def test_invalid_rating_is_400(self, client, sample_movie_data, body):
        movie_id = create(client, **sample_movie_data)["id"]

        response = client.post(f"{API}/{movie_id}/rate", json=body)
        assert response.status_code == 400
        assert response.json()["detail"] == "Rating must be an integer between 1 and 5."

        movie = client.get(f"{API}/{movie_id}").json()
        assert movie["num_ratings"] == 0

    def test_rate_missing_movie_is_404(self, client):
        response = client.post(f"{API}/404/rate", json={"rating": 3})
        assert response.status_code == 404

    def test_rate_invalid_id_is_400(self, client):
        response = client.post(f"{API}/0/rate", json={"rating": 3})
        assert response.status_code == 400

    def test_rate_id_beyond_int_column_is_404(self, client):
        response = client.post(f"{API}/99999999999999999999/rate", json={"rating": 3})
        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found."


@pytest.mark.integration
class TestHealth:
    """Test health endpoints."""

    def test_simple_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get("/api/v1/health").json() == {"status": "ok"}

    def test_detailed_health(self, client):
        response = client.get("/api/v1/health/detailed")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["database"]["details"]["backend"] == "sqlite"


def unreachable_store(session):
    raise OperationalError("SELECT", {}, Exception("MySQL server has gone away"))


@pytest.mark.integration
class TestStoreUnavailable:
    """Store failures surface as 500 with a readable message."""

    @pytest.fixture
    def failing_client(self, client, test_database):
        overrides = client.app.dependency_overrides
        overrides[get_catalog_service] = lambda: CatalogService(test_database, unreachable_store)
        overrides[get_rating_aggregator] = lambda: RatingAggregator(test_database, unreachable_store)
        yield client
        overrides.clear()

    @pytest.mark.parametrize(
        "method, path, body",
        [
            ("get", API, None),
            ("get", f"{API}/1", None),
            ("post", f"{API}/1/rate", {"rating": 3}),
        ],
    )
    def test_store_error_is_500(self, failing_client, method, path, body):
        kwargs = {"json": body} if body is not None else {}
        response = getattr(failing_client, method)(path, **kwargs)
        assert response.status_code == 500
        assert response.json() == {"detail": "The movie store is currently unavailable."}
