"""Registration, login, token handling and profile endpoints."""

from jose import jwt

from conftest import TEST_PASSWORD, register


class TestRegister:
    def test_register_returns_user_and_token(self, client):
        resp = client.post(
            "/api/auth/register",
            json={"name": " Ann ", "email": "Ann@Example.com ", "password": TEST_PASSWORD},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["user"]["name"] == "Ann"
        assert body["user"]["email"] == "ann@example.com"
        assert body["token"]
        assert "token" in resp.cookies

    def test_password_is_stored_hashed(self, client, db):
        register(client, "Ann", "ann@example.com")
        stored = db["users"].find_one({"email": "ann@example.com"})
        assert stored["password"] != TEST_PASSWORD
        assert stored["password"].startswith("$pbkdf2-sha256$")

    def test_duplicate_email_is_rejected_case_insensitively(self, client):
        register(client, "Ann", "ann@example.com")
        resp = client.post(
            "/api/auth/register",
            json={"name": "Other", "email": "ANN@example.com", "password": TEST_PASSWORD},
        )
        assert resp.status_code == 400
        assert resp.json() == {"message": "User already exists"}

    def test_invalid_payload(self, client):
        resp = client.post("/api/auth/register", json={"name": "Ann", "email": "ann@example.com", "password": "123"})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid data"}

    def test_register_token_expiry_matches_login(self, client):
        reg = client.post(
            "/api/auth/register",
            json={"name": "Ann", "email": "ann@example.com", "password": TEST_PASSWORD},
        ).json()
        login = client.post("/api/auth/login", json={"email": "ann@example.com", "password": TEST_PASSWORD}).json()
        reg_claims = jwt.get_unverified_claims(reg["token"])
        login_claims = jwt.get_unverified_claims(login["token"])
        assert reg_claims["exp"] - reg_claims["iat"] == login_claims["exp"] - login_claims["iat"] == 7 * 24 * 3600


class TestLogin:
    def test_login_token_resolves_to_same_profile(self, client):
        user_id, _ = register(client, "Ann", "ann@example.com")
        client.cookies.clear()
        resp = client.post("/api/auth/login", json={"email": "ann@example.com", "password": TEST_PASSWORD})
        assert resp.status_code == 200
        body = resp.json()
        assert body["user"]["id"] == user_id
        assert body["user"]["notificationRadius"] == 5

        client.cookies.clear()
        profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {body['token']}"})
        assert profile.status_code == 200
        assert profile.json()["id"] == user_id
        assert "password" not in profile.json()

    def test_wrong_password(self, client):
        register(client, "Ann", "ann@example.com")
        resp = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "nope-nope"})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid credentials"}

    def test_unknown_email(self, client):
        resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD})
        assert resp.status_code == 400


class TestTokens:
    def test_missing_token_is_401(self, client):
        assert client.get("/api/auth/profile").status_code == 401

    def test_invalid_token_is_403(self, client):
        resp = client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.token"})
        assert resp.status_code == 403

    def test_expired_token_is_403(self, client):
        user_id, _ = register(client, "Ann", "ann@example.com")
        client.cookies.clear()
        expired = jwt.encode({"sub": user_id, "iat": 0, "exp": 1}, "test-secret-key", algorithm="HS256")
        resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {expired}"})
        assert resp.status_code == 403

    def test_cookie_authenticates(self, client):
        user_id, _ = register(client, "Ann", "ann@example.com")
        resp = client.get("/api/auth/profile")
        assert resp.status_code == 200
        assert resp.json()["id"] == user_id

    def test_logout_clears_cookie(self, client):
        register(client, "Ann", "ann@example.com")
        assert client.post("/api/auth/logout").status_code == 200
        assert client.get("/api/auth/profile").status_code == 401

    def test_deleted_user_profile_is_404(self, client, db):
        _, headers = register(client, "Ann", "ann@example.com")
        db["users"].delete_many({})
        assert client.get("/api/auth/profile", headers=headers).status_code == 404


class TestProfile:
    def test_update_only_sent_fields(self, client):
        _, headers = register(client, "Ann", "ann@example.com")
        client.put("/api/auth/profile", headers=headers, json={"bio": "Block captain"})
        resp = client.put(
            "/api/auth/profile",
            headers=headers,
            json={"phoneNumber": "555-0100", "defaultLocation": {"lat": 40.0, "lng": -74.0}},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["bio"] == "Block captain"
        assert body["phoneNumber"] == "555-0100"
        assert body["defaultLocation"] == {"lat": 40.0, "lng": -74.0}
        assert body["name"] == "Ann"

    def test_null_radius_keeps_the_account_usable(self, client):
        _, headers = register(client, "Ann", "ann@example.com")
        resp = client.put("/api/auth/profile", headers=headers, json={"notificationRadius": None, "name": None})
        assert resp.status_code == 200
        assert resp.json()["notificationRadius"] == 5
        assert resp.json()["name"] == "Ann"

        assert client.get("/api/auth/profile", headers=headers).status_code == 200
        login = client.post("/api/auth/login", json={"email": "ann@example.com", "password": TEST_PASSWORD})
        assert login.status_code == 200

    def test_stored_null_radius_reads_as_default(self, client, db):
        _, headers = register(client, "Ann", "ann@example.com")
        db["users"].update_many({}, {"$set": {"notificationRadius": None}})
        resp = client.get("/api/auth/profile", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["notificationRadius"] == 5

    def test_created_at_carries_utc_offset(self, client):
        _, headers = register(client, "Ann", "ann@example.com")
        created = client.get("/api/auth/profile", headers=headers).json()["createdAt"]
        assert created.endswith(("Z", "+00:00"))

    def test_update_rejects_bad_radius(self, client):
        _, headers = register(client, "Ann", "ann@example.com")
        resp = client.put("/api/auth/profile", headers=headers, json={"notificationRadius": -1})
        assert resp.status_code == 400


class TestChangePassword:
    def test_change_password(self, client):
        _, headers = register(client, "Ann", "ann@example.com")
        resp = client.put(
            "/api/auth/change-password",
            headers=headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "better-secret"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"message": "Password updated successfully"}

        old = client.post("/api/auth/login", json={"email": "ann@example.com", "password": TEST_PASSWORD})
        new = client.post("/api/auth/login", json={"email": "ann@example.com", "password": "better-secret"})
        assert old.status_code == 400
        assert new.status_code == 200

    def test_wrong_current_password(self, client):
        _, headers = register(client, "Ann", "ann@example.com")
        resp = client.put(
            "/api/auth/change-password",
            headers=headers,
            json={"currentPassword": "wrong-one", "newPassword": "better-secret"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"message": "Current password is incorrect"}
