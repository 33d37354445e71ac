"""Tests for the user HTTP endpoints."""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from user_registry_api.app.api.dependencies import get_user_store
from user_registry_api.app.main import create_app
from user_registry_api.app.schemas.user import User
from user_registry_api.app.services.user_service import (
    InMemoryUserStore,
    UserStore,
    UserStoreError,
)


class FailingStore(UserStore):
    """Store whose writes fail with an error the API does not special-case."""

    def list_users(self) -> List[User]:
        return []

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return None

    def create_user(self, user: User) -> User:
        raise UserStoreError("backend unavailable")

    def upsert_user(self, user: Optional[User]) -> User:
        raise UserStoreError("backend unavailable")

    def delete_user_by_id(self, user_id: str) -> None:
        raise UserStoreError("backend unavailable")


class TestListUsers:
    def test_seeded_store(self, client):
        response = client.get("/users")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 4
        assert {"id": "1", "name": "Mario", "age": 38} in body

    def test_empty_store_returns_empty_array(self):
        with TestClient(create_app(InMemoryUserStore())) as client:
            response = client.get("/users")

        assert response.status_code == 200
        assert response.json() == []


class TestGetUser:
    def test_found(self, client):
        response = client.get("/users/2")

        assert response.status_code == 200
        assert response.json() == {"id": "2", "name": "Luigi", "age": 35}

    def test_not_found(self, client):
        response = client.get("/users/99")

        assert response.status_code == 404
        assert response.json() == {"status": 404, "message": "User not found"}


class TestCreateUser:
    def test_duplicate_name(self, client):
        response = client.post("/user", json={"name": "Mario", "age": 1})

        assert response.status_code == 400
        assert response.json() == {"error": "user with this name already exists"}

    def test_duplicate_id(self, client):
        response = client.post("/user", json={"id": "1", "name": "Bowser", "age": 40})

        assert response.status_code == 400
        assert response.json() == {"error": "user already exists"}

    def test_created_user_is_retrievable(self, client):
        response = client.post("/user", json={"name": "Bowser", "age": 40})

        assert response.status_code == 201
        created = response.json()["data"]
        assert created["name"] == "Bowser"
        assert created["age"] == 40
        assert created["id"]

        fetched = client.get(f"/users/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == created

    def test_caller_assigned_id_is_kept(self, client):
        response = client.post("/user", json={"id": "bowser", "name": "Bowser", "age": 40})

        assert response.status_code == 201
        assert response.json() == {"data": {"id": "bowser", "name": "Bowser", "age": 40}}

    def test_missing_name(self, client):
        response = client.post("/user", json={"age": 40})

        assert response.status_code == 400
        assert response.json() == {"error": "user fields cannot be empty"}

    def test_malformed_json(self, client):
        response = client.post("/user", content="{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_non_json_content_type(self, client):
        response = client.post("/user", content="name=Bowser", headers={"Content-Type": "text/plain"})

        assert response.status_code == 400
        assert response.json() == {"error": "Content-Type must be application/json"}

    @pytest.mark.parametrize("age", ["old", "40", 40.0, True])
    def test_non_integer_age(self, client, age):
        response = client.post("/user", json={"name": "Bowser", "age": age})

        assert response.status_code == 400
        assert "age" in response.json()["error"]
        assert client.get("/users/5").status_code == 404

    def test_numeric_id_is_rejected(self, client):
        response = client.post("/user", json={"id": 5, "name": "Bowser", "age": 40})

        assert response.status_code == 400
        assert "id" in response.json()["error"]

    def test_store_failure_is_a_bad_request(self):
        with TestClient(create_app(FailingStore())) as client:
            response = client.post("/user", json={"name": "Bowser", "age": 40})

        assert response.status_code == 400
        assert response.json() == {"error": "backend unavailable"}


class TestUpsertUser:
    def test_update_existing(self, client):
        response = client.put("/user/1", json={"name": "Super Mario", "age": 39})

        assert response.status_code == 200
        assert response.json() == {}
        assert client.get("/users/1").json() == {"id": "1", "name": "Super Mario", "age": 39}

    def test_path_id_overrides_body_id(self, client):
        response = client.put("/user/3", json={"id": "77", "name": "Princess Peach", "age": 37})

        assert response.status_code == 200
        assert client.get("/users/3").json()["name"] == "Princess Peach"
        assert client.get("/users/77").status_code == 404

    def test_insert_new(self, client):
        response = client.put("/user/5", json={"name": "Bowser", "age": 40})

        assert response.status_code == 200
        assert client.get("/users/5").json() == {"id": "5", "name": "Bowser", "age": 40}

    def test_insert_new_with_taken_name(self, client):
        response = client.put("/user/5", json={"name": "Toad", "age": 40})

        assert response.status_code == 400
        assert response.json() == {"error": "user with this name already exists"}

    def test_update_may_take_another_users_name(self, client):
        response = client.put("/user/1", json={"name": "Luigi", "age": 38})

        assert response.status_code == 200

    def test_empty_name(self, client):
        response = client.put("/user/1", json={"name": "", "age": 38})

        assert response.status_code == 400
        assert response.json() == {"error": "user fields cannot be empty"}

    def test_malformed_body(self, client):
        response = client.put("/user/1", content="{", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request"}

    def test_null_body(self, client):
        response = client.put("/user/1", content="null", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request"}

    @pytest.mark.parametrize("age", ["39", 39.0, True])
    def test_non_integer_age(self, client, age):
        response = client.put("/user/1", json={"name": "Mario", "age": age})

        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request"}
        assert client.get("/users/1").json()["age"] == 38

    def test_missing_path_id_never_reaches_handler(self, client):
        response = client.put("/user", json={"name": "Bowser", "age": 40})

        assert response.status_code in (404, 405)


class TestDeleteUser:
    def test_delete_then_get(self, client):
        response = client.delete("/user/1")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/users/1").status_code == 404

    def test_delete_missing(self, client):
        response = client.delete("/user/99")

        assert response.status_code == 404
        assert response.content == b""

    def test_other_store_errors_are_server_errors(self, app):
        app.dependency_overrides[get_user_store] = FailingStore
        with TestClient(app) as client:
            response = client.delete("/user/1")

        assert response.status_code == 500
        assert response.content == b""
