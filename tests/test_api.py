from __future__ import annotations

from sqlalchemy.exc import OperationalError

from habit_api.repositories.sql_repository import SQLRepository

ALICE = {"fullName": "A", "email": "a@x.com", "password": "Abc123!"}


class _BrokenRepository(SQLRepository):
    def get_account_by_email(self, email):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))


def _signup(client, **overrides):
    payload = dict(ALICE, **overrides)
    return client.post("/api/signup", json=payload)


def test_root_welcome(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Welcome to Habit Tracker API"}
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_signup_then_duplicate(client):
    resp = _signup(client)
    assert resp.status_code == 201
    assert resp.json() == {"message": "Signup successful"}

    again = _signup(client)
    assert again.status_code == 400
    assert again.json() == {"message": "Email already exists"}


def test_signup_with_weak_password(client):
    resp = _signup(client, password="abc")
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "Password must be at least 6 characters long, "
        "Password must contain at least one uppercase letter, "
        "Password must contain at least one special character"
    )


def test_malformed_body_is_a_400(client):
    resp = client.post("/api/signup", json={"fullName": "A", "email": ["a@x.com"], "password": "Abc123!"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request body"


def test_login_returns_profile_and_seeded_habit(client):
    _signup(client)
    resp = client.post("/api/login", json={"email": "a@x.com", "password": "Abc123!"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {"fullName": "A", "email": "a@x.com"}
    assert len(body["habits"]) == 1
    assert body["habits"][0]["text"] == "Morning Exercise"
    assert "password" not in body["user"]

    second = client.post("/api/login", json={"email": "a@x.com", "password": "Abc123!"})
    assert len(second.json()["habits"]) == 1


def test_login_failures_share_status_and_body(client):
    _signup(client)
    unknown = client.post("/api/login", json={"email": "nobody@x.com", "password": "Abc123!"})
    wrong = client.post("/api/login", json={"email": "a@x.com", "password": "Nope123!"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"message": "Invalid email or password"}


def test_create_and_list_habits(client):
    _signup(client)
    _signup(client, fullName="B", email="b@x.com")

    resp = client.post(
        "/api/habits",
        json={"habit": {"text": "Read", "category": "mind", "streak": 2}, "userEmail": "A@X.com"},
    )
    assert resp.status_code == 201
    record = resp.json()
    assert record["text"] == "Read"
    assert record["description"] == ""
    assert record["streak"] == 2
    assert record["completed"] is False
    assert record["userEmail"] == "a@x.com"
    assert "id" in record

    client.post("/api/habits", json={"habit": {"text": "Walk", "category": "health"}, "userEmail": "b@x.com"})

    listed = client.get("/api/habits", params={"userEmail": "a@x.com"})
    assert listed.status_code == 200
    assert [h["text"] for h in listed.json()] == ["Read"]


def test_create_habit_errors(client):
    _signup(client)
    missing_text = client.post("/api/habits", json={"habit": {"category": "mind"}, "userEmail": "a@x.com"})
    assert missing_text.status_code == 400
    assert missing_text.json() == {"message": "Habit text is required"}

    missing_category = client.post("/api/habits", json={"habit": {"text": "Read"}, "userEmail": "a@x.com"})
    assert missing_category.status_code == 400
    assert missing_category.json() == {"message": "Category is required"}

    unknown = client.post(
        "/api/habits", json={"habit": {"text": "Read", "category": "mind"}, "userEmail": "ghost@x.com"}
    )
    assert unknown.status_code == 404
    assert unknown.json() == {"message": "User not found"}


def test_list_habits_errors(client):
    assert client.get("/api/habits", params={"userEmail": "ghost@x.com"}).status_code == 404
    assert client.get("/api/habits").status_code == 400


def test_store_failure_is_reported_as_500(make_client):
    client = make_client(repository=_BrokenRepository())
    resp = client.get("/api/habits", params={"userEmail": "a@x.com"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["message"] == "Error fetching habits"
    assert "database is down" in body["error"]

    resp = client.post("/api/login", json={"email": "a@x.com", "password": "Abc123!"})
    assert resp.status_code == 500
    assert resp.json()["message"] == "Something went wrong"


def test_signup_is_rate_limited(make_client):
    client = make_client(signup_rate_limit=1)
    assert _signup(client).status_code == 201
    limited = _signup(client, email="other@x.com")
    assert limited.status_code == 429
    assert limited.json() == {"message": "Too many requests. Try again shortly."}


def test_oversized_streak_is_a_400(client):
    _signup(client)
    resp = client.post(
        "/api/habits",
        json={"habit": {"text": "Run", "category": "health", "streak": 10**30}, "userEmail": "a@x.com"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "Streak must be a non-negative integer"}


def test_non_store_failure_on_create_is_structured(make_client):
    class _ExplodingRepository(SQLRepository):
        def create_habit(self, account_id, **kwargs):
            raise OverflowError("Python int too large to convert to SQLite INTEGER")

    client = make_client(repository=_ExplodingRepository())
    _signup(client)
    resp = client.post(
        "/api/habits", json={"habit": {"text": "Run", "category": "health"}, "userEmail": "a@x.com"}
    )
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {
        "message": "Error saving habit",
        "error": "Python int too large to convert to SQLite INTEGER",
    }


def test_seeding_failure_fails_the_whole_login(make_client):
    class _SeedFailingRepository(SQLRepository):
        def create_habits(self, account_id, items):
            raise RuntimeError("seed insert failed")

    client = make_client(repository=_SeedFailingRepository())
    _signup(client)
    resp = client.post("/api/login", json={"email": "a@x.com", "password": "Abc123!"})
    assert resp.status_code == 500
    assert resp.json() == {"message": "Something went wrong", "error": "seed insert failed"}
    assert "habits" not in resp.json()

    account = SQLRepository().get_account_by_email("a@x.com")
    assert SQLRepository().get_habits_for_account(account.id) == []
