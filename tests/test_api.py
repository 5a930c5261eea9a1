import os

from dependencies import get_password_hasher
from services.exceptions import HashingError


def _signup(client, name, email, password="s3cret!"):
    response = client.post(
        "/api/users/signup",
        data={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _login(client, email, password="s3cret!"):
    response = client.post("/api/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def _create_place(client, token, title="Cafe", address="1 Main St"):
    return client.post(
        "/api/places",
        data={"title": title, "description": "Nice coffee shop downtown", "address": address},
        files={"image": ("cafe.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")},
        headers=_auth(token),
    )


def test_alice_and_bob_scenario(client):
    alice = _signup(client, "alice", "a@x.com")
    bob = _signup(client, "bob", "b@x.com")
    alice_token = _login(client, "a@x.com")["token"]

    created = _create_place(client, alice_token)
    assert created.status_code == 201, created.text
    cafe = created.json()["place"]
    assert cafe["creator_id"] == alice["userId"]
    assert os.path.exists(cafe["image"])

    listed = client.get(f"/api/places/user/{alice['userId']}")
    assert len(listed.json()["places"]) == 1

    bobs = _create_place(client, bob["token"], title="Bakery")
    assert bobs.status_code == 201

    forbidden = client.delete(f"/api/places/{cafe['id']}", headers=_auth(bob["token"]))
    assert forbidden.status_code == 403

    deleted = client.delete(f"/api/places/{cafe['id']}", headers=_auth(alice_token))
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Deleted place."}

    listed = client.get(f"/api/places/user/{alice['userId']}")
    assert listed.json() == {"places": []}
    assert not os.path.exists(cafe["image"])

    users = client.get("/api/users").json()["users"]
    by_email = {u["email"]: u for u in users}
    assert by_email["a@x.com"]["places"] == []
    assert by_email["b@x.com"]["places"] == [bobs.json()["place"]["id"]]
    assert all("password" not in u for u in users)


def test_place_reads(client):
    alice = _signup(client, "alice", "a@x.com")
    cafe = _create_place(client, alice["token"]).json()["place"]

    found = client.get(f"/api/places/{cafe['id']}")
    assert found.status_code == 200
    assert found.json()["place"]["location"] == {"lat": 40.7484405, "lng": -73.9878584}

    missing = client.get("/api/places/9999")
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Could not find a place for the provided id."}

    assert client.get("/api/places/user/9999").json() == {"places": []}


def test_update_place(client):
    alice = _signup(client, "alice", "a@x.com")
    bob = _signup(client, "bob", "b@x.com")
    cafe = _create_place(client, alice["token"]).json()["place"]
    body = {"title": "Corner Cafe", "description": "Still nice coffee"}

    assert client.patch(f"/api/places/{cafe['id']}", json=body, headers=_auth(bob["token"])).status_code == 403
    assert client.patch("/api/places/9999", json=body, headers=_auth(bob["token"])).status_code == 404
    assert client.patch(f"/api/places/{cafe['id']}", json={"title": "", "description": "x"},
                        headers=_auth(alice["token"])).status_code == 422

    updated = client.patch(f"/api/places/{cafe['id']}", json=body, headers=_auth(alice["token"]))
    assert updated.status_code == 200
    assert updated.json()["place"]["title"] == "Corner Cafe"


def test_mutations_require_authentication(client):
    alice = _signup(client, "alice", "a@x.com")
    cafe = _create_place(client, alice["token"]).json()["place"]

    no_header = client.delete(f"/api/places/{cafe['id']}")
    bad_token = client.delete(f"/api/places/{cafe['id']}", headers=_auth("not-a-token"))

    assert no_header.status_code == bad_token.status_code == 401
    assert no_header.json() == bad_token.json() == {"detail": "Authentication failed!"}
    assert client.get(f"/api/places/{cafe['id']}").status_code == 200


def test_unknown_address_is_reported_and_upload_cleaned_up(client, asset_store):
    alice = _signup(client, "alice", "a@x.com")

    response = _create_place(client, alice["token"], address="nowhere")

    assert response.status_code == 422
    assert response.json() == {"detail": "Could not find location for the specified address."}
    assert os.listdir(asset_store.upload_dir) == []
    assert client.get(f"/api/places/user/{alice['userId']}").json() == {"places": []}


def test_signup_and_login_errors(client):
    _signup(client, "alice", "a@x.com")

    duplicate = client.post("/api/users/signup", data={"name": "alice", "email": "a@x.com", "password": "s3cret!"})
    assert duplicate.status_code == 422
    assert duplicate.json() == {"detail": "User already exists, please login instead."}

    short_password = client.post("/api/users/signup", data={"name": "carol", "email": "c@x.com", "password": "123"})
    assert short_password.status_code == 422

    wrong = client.post("/api/users/login", json={"email": "a@x.com", "password": "nope!!"})
    unknown = client.post("/api/users/login", json={"email": "z@x.com", "password": "s3cret!"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_unknown_route(client):
    response = client.get("/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_signup_hashing_failure_is_a_server_error(client):
    from main import app

    class BrokenHasher:
        def hash(self, plain):
            raise HashingError()

    app.dependency_overrides[get_password_hasher] = lambda: BrokenHasher()

    response = client.post("/api/users/signup", data={"name": "alice", "email": "a@x.com", "password": "s3cret!"})

    assert response.status_code == 500
    assert response.json() == {"detail": HashingError.default_message}
    assert client.get("/api/users").json()["users"] == []


def test_health_check(client, monkeypatch):
    import main

    assert client.get("/health").json() == {"status": "ok", "database": "connected"}

    monkeypatch.setattr(main, "check_connection", lambda: False)
    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "disconnected"}
