"""Tests for the user endpoints."""


def test_create_user_echoes_id_and_username(client):
    response = client.post("/api/users", data={"username": "alice"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"_id", "username"}
    assert body["username"] == "alice"
    assert body["_id"]


def test_new_user_starts_with_zero_count(client, create_user):
    user = create_user("alice")

    log = client.get(f"/api/users/{user['_id']}/logs").json()
    assert log["count"] == 0
    assert log["log"] == []


def test_usernames_are_not_unique(create_user):
    first = create_user("alice")
    second = create_user("alice")

    assert first["_id"] != second["_id"]


def test_list_users_hides_count(client, create_user, add_exercise):
    alice = create_user("alice")
    bob = create_user("bob")
    add_exercise(alice["_id"], "run", 30)

    users = client.get("/api/users").json()

    assert users == [
        {"_id": alice["_id"], "username": "alice"},
        {"_id": bob["_id"], "username": "bob"},
    ]


def test_list_users_is_repeatable(client, create_user):
    create_user("alice")
    create_user("bob")

    first = client.get("/api/users").json()
    second = client.get("/api/users").json()

    assert first == second


def test_missing_username_is_reported_as_error_body(client):
    response = client.post("/api/users", data={})

    assert response.status_code == 200
    assert response.json() == {"error": "invalid username: Field required"}


def test_store_failures_are_answered(client):
    client.app.state.database.close()

    created = client.post("/api/users", data={"username": "alice"})
    listed = client.get("/api/users")

    assert created.status_code == 200
    assert created.json() == {"error": "new user save failed"}
    assert listed.json() == {"error": "user list failed"}
