import pytest
from fastapi.testclient import TestClient

from api import app
from fakes import FakeGeocoder, FakeRepository, make_records
from resource_query import ResourceOrchestrator
from resource_query.core.errors import RepositoryError
from resource_query.resources import JOBS, SITTERS


@pytest.fixture
def repositories():
    return {"jobs": FakeRepository(make_records(12)), "sitters": FakeRepository(make_records(3))}


@pytest.fixture
def client(repositories):
    # No context manager: the lifespan (MongoDB connection) is not started
    app.state.orchestrators = {
        "jobs": ResourceOrchestrator(JOBS, repositories["jobs"], geocoder=FakeGeocoder()),
        "sitters": ResourceOrchestrator(SITTERS, repositories["sitters"]),
    }
    yield TestClient(app)
    del app.state.orchestrators


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "API Running"


def test_list_jobs_with_filters_and_paging(client, repositories):
    response = client.get("/api/jobs?hourlyRate[gte]=15&page=2&sort=-hourlyRate&select=hourlyRate")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 5
    assert body["pagination"] == {"next": {"page": 3, "limit": 5}, "prev": {"page": 1, "limit": 5}}

    call = repositories["jobs"].find_calls[0]
    assert [(c.field, c.operator.value, c.value) for c in call["filters"]] == [("hourlyRate", "gte", 15)]
    assert call["projection"] == ("hourlyRate",)
    assert call["skip"] == 5


def test_list_jobs_near_city(client, repositories):
    response = client.get("/api/jobs?city=Austin&radius=20")

    assert response.status_code == 200
    geo = repositories["jobs"].find_calls[0]["geo"]
    assert geo.center == (-97.7, 30.3)
    assert geo.radius_km == 20


def test_list_sitters_filters_by_city(client, repositories):
    response = client.get("/api/sitters?city=Austin")

    assert response.status_code == 200
    call = repositories["sitters"].find_calls[0]
    assert call["geo"] is None
    assert call["filters"][0].field == "city"


def test_malformed_query_is_400(client):
    response = client.get("/api/jobs?hourlyRate[between]=1")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unknown_city_is_502(client, repositories):
    response = client.get("/api/jobs?city=Nowhereville")

    assert response.status_code == 502
    assert response.json()["success"] is False
    assert repositories["jobs"].find_calls == []


def test_repository_failure_is_500(client, repositories):
    def broken_count():
        raise RepositoryError("connection refused")

    repositories["sitters"].count = broken_count

    response = client.get("/api/sitters")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Server Error"}


def test_get_by_user(client, repositories):
    repositories["jobs"].by_user["u1"] = {"_id": "1", "user": "u1"}

    assert client.get("/api/jobs/user/u1").json() == {"_id": "1", "user": "u1"}

    missing = client.get("/api/sitters/user/u2")
    assert missing.status_code == 400
    assert missing.json() == {"msg": "Sitter profile not found"}


def test_operator_field_name_is_400(client, repositories):
    response = client.get("/api/sitters", params={"$where": "sleep(5000) || true"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert repositories["sitters"].find_calls == []


def test_sitter_hourly_rate_filters_as_text(client, repositories):
    response = client.get("/api/sitters?hourlyRate=20")

    assert response.status_code == 200
    assert repositories["sitters"].find_calls[0]["filters"][0].value == "20"


def test_overflowing_page_falls_back_to_first_page(client, repositories):
    response = client.get("/api/jobs?page=99999999999999999999")

    assert response.status_code == 200
    assert repositories["jobs"].find_calls[0]["skip"] == 0
    assert "prev" not in response.json()["pagination"]
