"""
Integration tests for the HTTP API.
"""

import pytest

API = "/api/v1"


def create_user(client, user_name):
    response = client.post(f"{API}/users", json={"email": f"{user_name}@example.com", "user_name": user_name})
    assert response.status_code == 201, response.text
    return response.json()["id"]


def headers(user_id):
    return {"X-User-Id": user_id}


@pytest.fixture
def alice(client):
    return create_user(client, "alice")


@pytest.fixture
def board(client, alice):
    response = client.post(f"{API}/boards", json={"title": "Roadmap"}, headers=headers(alice))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def column_ids(client, board):
    response = client.get(f"{API}/boards/{board['id']}/columns")
    assert response.status_code == 200
    return [column["id"] for column in response.json()]


class TestHealth:
    """Test cases for service endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_prefixed_health(self, client):
        assert client.get(f"{API}/health").status_code == 200

    def test_unknown_path(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["path"] == "/nowhere"


class TestUsersApi:
    """Test cases for user endpoints."""

    def test_create_and_get(self, client):
        user_id = create_user(client, "bob")

        response = client.get(f"{API}/users/{user_id}")

        assert response.status_code == 200
        assert response.json()["user_name"] == "bob"

    def test_duplicate_user(self, client, alice):
        response = client.post(f"{API}/users", json={"email": "other@example.com", "user_name": "alice"})

        assert response.status_code == 409
        assert response.json()["detail"]["error_code"] == "DUPLICATE_ENTITY"

    def test_invalid_email(self, client):
        response = client.post(f"{API}/users", json={"email": "nope", "user_name": "bob"})

        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "VALIDATION_ERROR"

    def test_unknown_user(self, client):
        response = client.get(f"{API}/users/missing")

        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "ENTITY_NOT_FOUND"


class TestBoardsApi:
    """Test cases for board endpoints."""

    def test_create_board_with_default_columns(self, client, board):
        response = client.get(f"{API}/boards/{board['id']}")

        assert response.status_code == 200
        columns = response.json()["columns"]
        assert [c["title"] for c in columns] == ["To Do", "In Progress", "Done"]
        assert [c["order"] for c in columns] == [0, 1, 2]

    def test_acting_user_required(self, client):
        response = client.post(f"{API}/boards", json={"title": "Roadmap"})

        assert response.status_code == 401
        assert response.json()["detail"]["error_code"] == "MISSING_USER"

    def test_unknown_fields_rejected(self, client, alice):
        response = client.post(f"{API}/boards", json={"title": "Roadmap", "owner_id": "x"}, headers=headers(alice))

        assert response.status_code == 422

    def test_non_member_cannot_update(self, client, board):
        bob = create_user(client, "bob")

        response = client.patch(f"{API}/boards/{board['id']}", json={"title": "Mine"}, headers=headers(bob))

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "BUSINESS_RULE_VIOLATION"

    def test_add_member_and_list(self, client, alice, board):
        bob = create_user(client, "bob")

        response = client.post(
            f"{API}/boards/{board['id']}/members", json={"user_id": bob}, headers=headers(alice)
        )
        assert response.status_code == 201, response.text

        boards = client.get(f"{API}/boards", headers=headers(bob)).json()
        assert [b["id"] for b in boards] == [board["id"]]

    def test_change_member_role(self, client, alice, board):
        bob = create_user(client, "bob")
        client.post(f"{API}/boards/{board['id']}/members", json={"user_id": bob}, headers=headers(alice))

        promoted = client.patch(
            f"{API}/boards/{board['id']}/members/{bob}", json={"role": "admin"}, headers=headers(alice)
        )
        owner_role = client.patch(
            f"{API}/boards/{board['id']}/members/{bob}", json={"role": "owner"}, headers=headers(alice)
        )

        assert promoted.status_code == 200, promoted.text
        assert promoted.json()["role"] == "admin"
        assert owner_role.status_code == 422

    def test_activity_feed(self, client, board):
        response = client.get(f"{API}/boards/{board['id']}/activity", params={"limit": 5})

        assert response.status_code == 200
        assert response.json()[0]["activity_type"] == "board_created"

    def test_delete_board(self, client, alice, board):
        response = client.delete(f"{API}/boards/{board['id']}", headers=headers(alice))

        assert response.status_code == 204
        assert client.get(f"{API}/boards/{board['id']}").status_code == 404


class TestOrderingApi:
    """Test cases for ordering columns and tasks over HTTP."""

    def test_reorder_columns(self, client, alice, board, column_ids):
        todo, doing, done = column_ids

        response = client.put(
            f"{API}/boards/{board['id']}/columns/order",
            json={"column_ids": [done, todo, doing]},
            headers=headers(alice)
        )

        assert response.status_code == 200, response.text
        assert [(c["id"], c["order"]) for c in response.json()] == [(done, 0), (todo, 1), (doing, 2)]

    def test_partial_reorder_rejected(self, client, alice, board, column_ids):
        response = client.put(
            f"{API}/boards/{board['id']}/columns/order",
            json={"column_ids": column_ids[:2]},
            headers=headers(alice)
        )

        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "VALIDATION_ERROR"

    def test_append_and_conflict(self, client, alice, column_ids):
        url = f"{API}/columns/{column_ids[0]}/tasks"

        first = client.post(url, json={"title": "Write docs"}, headers=headers(alice))
        second = client.post(url, json={"title": "Review docs"}, headers=headers(alice))
        clash = client.post(url, json={"title": "Clash", "order": 1}, headers=headers(alice))

        assert first.status_code == 201
        assert [first.json()["order"], second.json()["order"]] == [0, 1]
        assert clash.status_code == 409
        assert clash.json()["detail"]["error_code"] == "ORDER_CONFLICT"

    def test_negative_order_rejected(self, client, alice, column_ids):
        response = client.post(
            f"{API}/columns/{column_ids[0]}/tasks",
            json={"title": "Write docs", "order": -1},
            headers=headers(alice)
        )

        assert response.status_code == 422

    def test_move_task(self, client, alice, column_ids):
        todo, doing, _ = column_ids
        task = client.post(f"{API}/columns/{todo}/tasks", json={"title": "Write docs"}, headers=headers(alice)).json()

        response = client.post(
            f"{API}/tasks/{task['id']}/move", json={"column_id": doing, "order": 2}, headers=headers(alice)
        )

        assert response.status_code == 200, response.text
        assert response.json()["id"] == task["id"]
        assert response.json()["column_id"] == doing
        assert response.json()["order"] == 2
        assert client.get(f"{API}/columns/{todo}/tasks").json() == []

    def test_move_to_unknown_column(self, client, alice, column_ids):
        task = client.post(
            f"{API}/columns/{column_ids[0]}/tasks", json={"title": "Write docs"}, headers=headers(alice)
        ).json()

        response = client.post(
            f"{API}/tasks/{task['id']}/move", json={"column_id": "missing", "order": 0}, headers=headers(alice)
        )

        assert response.status_code == 404

    def test_reorder_tasks(self, client, alice, column_ids):
        url = f"{API}/columns/{column_ids[0]}/tasks"
        ids = [
            client.post(url, json={"title": title}, headers=headers(alice)).json()["id"]
            for title in ("a", "b", "c")
        ]

        response = client.put(f"{url}/order", json={"task_ids": ids[::-1]}, headers=headers(alice))

        assert response.status_code == 200, response.text
        assert [t["title"] for t in response.json()] == ["c", "b", "a"]
        assert [t["order"] for t in response.json()] == [0, 1, 2]
