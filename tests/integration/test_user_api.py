"""End-to-end tests for user registration, listing and login."""


class TestWhenThereIsInitiallyOneUser:
    async def test_creation_succeeds_with_a_fresh_username(self, async_client, root_user, helpers, test_db):
        users_at_start = await helpers.users_in_db(test_db)
        new_user = {"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"}

        response = await async_client.post("/api/users", json=new_user)
        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "mluukkai"
        assert body["notes"] == []
        assert "password" not in body and "password_hash" not in body

        users_at_end = await helpers.users_in_db(test_db)
        assert len(users_at_end) == len(users_at_start) + 1
        assert "mluukkai" in [u.username for u in users_at_end]

    async def test_creation_fails_if_username_already_taken(self, async_client, root_user, helpers, test_db):
        users_at_start = await helpers.users_in_db(test_db)

        response = await async_client.post(
            "/api/users", json={"username": "root", "name": "Superuser", "password": "salainen"}
        )
        assert response.status_code == 400
        assert "expected `username` to be unique" in response.json()["error"]

        assert len(await helpers.users_in_db(test_db)) == len(users_at_start)

    async def test_creation_fails_with_short_password(self, async_client, root_user, helpers, test_db):
        response = await async_client.post("/api/users", json={"username": "shorty", "password": "pw"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("password")
        assert len(await helpers.users_in_db(test_db)) == 1

    async def test_creation_fails_with_short_username(self, async_client, root_user):
        response = await async_client.post("/api/users", json={"username": "ab", "password": "secret"})
        assert response.status_code == 400

    async def test_users_list_shows_owned_notes(self, async_client, seeded_notes, root_user):
        response = await async_client.get("/api/users")
        assert response.status_code == 200
        users = response.json()
        assert len(users) == 1
        assert users[0]["username"] == "root"
        assert users[0]["notes"] == [str(n.id) for n in seeded_notes]
        assert "password_hash" not in users[0]


class TestLogin:
    async def test_login_returns_token_and_profile(self, async_client, root_user):
        response = await async_client.post("/api/login", json={"username": "root", "password": "sekret"})
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "root"
        assert body["name"] == "Superuser"
        assert body["token"]

    async def test_login_with_wrong_password(self, async_client, root_user):
        response = await async_client.post("/api/login", json={"username": "root", "password": "nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "invalid username or password"}
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_login_with_unknown_user(self, async_client):
        response = await async_client.post("/api/login", json={"username": "ghost", "password": "sekret"})
        assert response.status_code == 401


class TestTestingReset:
    async def test_reset_empties_the_store(self, async_client, seeded_notes, helpers, test_db):
        response = await async_client.post("/api/testing/reset")
        assert response.status_code == 204
        assert await helpers.notes_in_db(test_db) == []
        assert await helpers.users_in_db(test_db) == []
