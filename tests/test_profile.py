def test_get_profile_matches_me(client, signup):
    headers = signup()

    profile = client.get("/api/users/profile", headers=headers).json()
    me = client.get("/api/auth/me", headers=headers).json()
    assert profile == me


def test_updating_bio_only_leaves_other_fields_untouched(client, signup):
    headers = signup(name="Ann")
    client.put(
        "/api/users/profile",
        headers=headers,
        json={"avatar": "https://cdn.example.com/ann.png"},
    )

    response = client.put("/api/users/profile", headers=headers, json={"bio": "Ships things"})

    assert response.status_code == 200
    user = response.json()
    assert user["bio"] == "Ships things"
    assert user["name"] == "Ann"
    assert user["avatar"] == "https://cdn.example.com/ann.png"


def test_explicit_null_clears_optional_field(client, signup):
    headers = signup()
    client.put("/api/users/profile", headers=headers, json={"bio": "temp"})

    response = client.put("/api/users/profile", headers=headers, json={"bio": None})
    assert response.json()["bio"] is None


def test_profile_constraints(client, signup):
    headers = signup()

    cases = [
        {"name": ""},
        {"name": None},
        {"name": "x" * 51},
        {"bio": "x" * 501},
        {"avatar": "not a url"},
    ]
    for body in cases:
        response = client.put("/api/users/profile", headers=headers, json=body)
        assert response.status_code == 400, body

    assert client.get("/api/auth/me", headers=headers).json()["name"] == "Ann"


def test_email_cannot_be_changed_through_profile(client, signup):
    headers = signup(email="a@x.com")

    response = client.put("/api/users/profile", headers=headers, json={"email": "b@x.com"})
    assert response.status_code == 200
    assert response.json()["email"] == "a@x.com"


def test_update_password(client, signup):
    headers = signup(email="a@x.com", password="secret1")

    response = client.put(
        "/api/users/password",
        headers=headers,
        json={"current_password": "secret1", "new_password": "secret2"},
    )
    assert response.status_code == 200
    assert response.json()["success"] is True

    old = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    new = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret2"})
    assert old.status_code == 401
    assert new.status_code == 200

    # Tokens issued before the change stay valid.
    assert client.get("/api/auth/me", headers=headers).status_code == 200


def test_update_password_with_wrong_current_password(client, signup):
    headers = signup(email="a@x.com", password="secret1")

    response = client.put(
        "/api/users/password",
        headers=headers,
        json={"current_password": "nope", "new_password": "secret2"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "authentication_error"

    login = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert login.status_code == 200


def test_update_password_requires_minimum_length(client, signup):
    headers = signup()

    response = client.put(
        "/api/users/password",
        headers=headers,
        json={"current_password": "secret1", "new_password": "123"},
    )
    assert response.status_code == 400


def test_update_password_accepts_camel_case_keys(client, signup):
    headers = signup(email="a@x.com", password="secret1")

    response = client.put(
        "/api/users/password",
        headers=headers,
        json={"currentPassword": "secret1", "newPassword": "secret2"},
    )
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret2"})
    assert login.status_code == 200


def test_avatar_is_stored_exactly_as_sent(client, signup):
    headers = signup()

    response = client.put("/api/users/profile", headers=headers, json={"avatar": "https://example.com"})

    assert response.status_code == 200
    assert response.json()["avatar"] == "https://example.com"


def test_password_limit_counts_bytes_not_characters(client, signup):
    # "é" is two bytes in UTF-8: 36 of them fill bcrypt's 72 bytes exactly.
    too_long = client.post(
        "/api/auth/register",
        json={"email": "long@x.com", "password": "é" * 37, "name": "Long"},
    )
    assert too_long.status_code == 400

    headers = signup(email="fits@x.com", password="é" * 36)
    response = client.put(
        "/api/users/password",
        headers=headers,
        json={"currentPassword": "é" * 36, "newPassword": "é" * 37},
    )
    assert response.status_code == 400
