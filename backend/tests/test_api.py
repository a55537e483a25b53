import pytest

from conftest import login_headers, TEST_PASSWORD

ARTHAS = {"name": "Arthas", "level": 10, "factionId": 1, "raceId": 1, "classId": 1, "realmId": 1}


async def test_root(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.json() == {"message": "Welcome to Character Manager API"}


# --- auth ---

async def test_register_returns_normalized_user(client):
    res = await client.post("/api/auth/register", json={"username": " TestUser ", "password": TEST_PASSWORD})

    assert res.status_code == 200
    body = res.json()
    assert body["username"] == "testuser"
    assert body["role"] == "user"
    assert "id" in body and "createdAt" in body
    assert "passwordHash" not in body


async def test_register_duplicate_is_bad_request(client):
    await client.post("/api/auth/register", json={"username": "testuser", "password": TEST_PASSWORD})
    res = await client.post("/api/auth/register", json={"username": "TESTUSER", "password": TEST_PASSWORD})

    assert res.status_code == 400
    assert res.json()["detail"] == "Username already exists."


async def test_login_with_wrong_password_is_unauthorized(client):
    await client.post("/api/auth/register", json={"username": "testuser", "password": TEST_PASSWORD})
    res = await client.post("/api/auth/login", json={"username": "testuser", "password": "Nope1234"})

    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid username or password."


async def test_refresh_and_logout_flow(client):
    reg = await client.post("/api/auth/register", json={"username": "testuser", "password": TEST_PASSWORD})
    user_id = reg.json()["id"]
    login = (await client.post("/api/auth/login", json={"username": "testuser", "password": TEST_PASSWORD})).json()

    refreshed = await client.post(
        "/api/auth/refresh-token", json={"userId": user_id, "refreshToken": login["refreshToken"]},
    )
    assert refreshed.status_code == 200
    new_tokens = refreshed.json()
    assert new_tokens["refreshToken"] != login["refreshToken"]

    # 회전된 이전 토큰은 거부됨
    stale = await client.post(
        "/api/auth/refresh-token", json={"userId": user_id, "refreshToken": login["refreshToken"]},
    )
    assert stale.status_code == 401
    assert stale.json()["detail"] == "Refresh token is invalid or expired."

    logout = await client.post("/api/auth/logout", json={"refreshToken": new_tokens["refreshToken"]})
    assert logout.status_code == 200
    assert logout.json() is True

    after = await client.post(
        "/api/auth/refresh-token", json={"userId": user_id, "refreshToken": new_tokens["refreshToken"]},
    )
    assert after.status_code == 401


async def test_logout_unknown_token_is_bad_request(client):
    res = await client.post("/api/auth/logout", json={"refreshToken": "missing"})

    assert res.status_code == 400
    assert res.json()["detail"] == "User with this refresh token not found."


async def test_new_access_token_works(client):
    reg = await client.post("/api/auth/register", json={"username": "testuser", "password": TEST_PASSWORD})
    login = (await client.post("/api/auth/login", json={"username": "testuser", "password": TEST_PASSWORD})).json()
    refreshed = (await client.post(
        "/api/auth/refresh-token", json={"userId": reg.json()["id"], "refreshToken": login["refreshToken"]},
    )).json()

    res = await client.get("/api/character", headers={"Authorization": f"Bearer {refreshed['accessToken']}"})
    assert res.status_code == 200


# --- characters ---

@pytest.mark.parametrize("method, path", [
    ("GET", "/api/character"),
    ("GET", "/api/character/1"),
    ("POST", "/api/character"),
    ("PUT", "/api/character/1"),
    ("DELETE", "/api/character/1"),
])
async def test_character_endpoints_require_token(client, method, path):
    res = await client.request(method, path, json=ARTHAS if method in ("POST", "PUT") else None)
    assert res.status_code == 401


async def test_character_endpoints_reject_garbage_token(client):
    res = await client.get("/api/character", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401


async def test_create_returns_location_and_camel_case_body(client):
    headers = await login_headers(client)

    res = await client.post("/api/character", json=ARTHAS, headers=headers)

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "arthas"
    assert body["factionId"] == 1 and body["realmId"] == 1
    assert res.headers["location"].endswith(f"/api/character/{body['id']}")

    fetched = await client.get(res.headers["location"], headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]


async def test_create_validation_failure_is_bad_request(client):
    headers = await login_headers(client)

    res = await client.post("/api/character", json={**ARTHAS, "raceId": 4}, headers=headers)

    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid faction-race-class combination."


async def test_list_includes_display_names(client):
    headers = await login_headers(client)
    await client.post("/api/character", json=ARTHAS, headers=headers)

    res = await client.get("/api/character", headers=headers)

    assert res.status_code == 200
    [character] = res.json()
    assert character["factionName"] == "Light Side"
    assert character["raceName"] == "Human"
    assert character["className"] == "Warrior"
    assert character["realmName"] == "Frostgard"


async def test_update_returns_no_content(client):
    headers = await login_headers(client)
    created = (await client.post("/api/character", json=ARTHAS, headers=headers)).json()

    res = await client.put(f"/api/character/{created['id']}", json={"level": 42}, headers=headers)

    assert res.status_code == 204
    assert res.content == b""
    fetched = (await client.get(f"/api/character/{created['id']}", headers=headers)).json()
    assert fetched["level"] == 42
    assert fetched["name"] == "arthas"


async def test_update_validation_failure_is_bad_request(client):
    headers = await login_headers(client)
    created = (await client.post("/api/character", json=ARTHAS, headers=headers)).json()

    res = await client.put(f"/api/character/{created['id']}", json={"level": 99}, headers=headers)

    assert res.status_code == 400
    assert res.json()["detail"] == "Level must be between 1 and 50."


async def test_other_users_character_is_not_found(client):
    owner = await login_headers(client, "owner")
    stranger = await login_headers(client, "stranger")
    created = (await client.post("/api/character", json=ARTHAS, headers=owner)).json()
    path = f"/api/character/{created['id']}"

    assert (await client.get(path, headers=stranger)).status_code == 404
    assert (await client.put(path, json={"level": 2}, headers=stranger)).status_code == 404
    deleted = await client.delete(path, headers=stranger)
    assert deleted.status_code == 404
    assert deleted.json()["detail"] == "Character not found or access denied."

    assert (await client.get("/api/character", headers=stranger)).json() == []


async def test_delete_returns_deleted_id(client):
    headers = await login_headers(client)
    created = (await client.post("/api/character", json=ARTHAS, headers=headers)).json()

    res = await client.delete(f"/api/character/{created['id']}", headers=headers)

    assert res.status_code == 200
    assert res.json() == {"deletedId": created["id"]}
    assert (await client.get(f"/api/character/{created['id']}", headers=headers)).status_code == 404


# --- metadata ---

@pytest.mark.parametrize("path, count", [
    ("/api/charactermetadata/factiontypes", 2),
    ("/api/charactermetadata/racetypes", 6),
    ("/api/charactermetadata/classtypes", 6),
    ("/api/charactermetadata/charactermappings", 28),
    ("/api/charactermetadata/realms", 5),
])
async def test_metadata_endpoints_are_public(client, path, count):
    res = await client.get(path)

    assert res.status_code == 200
    assert len(res.json()) == count


async def test_mapping_fields_are_camel_case(client):
    first = (await client.get("/api/charactermetadata/charactermappings")).json()[0]
    assert first == {"id": 1, "factionId": 1, "raceId": 1, "classId": 1}


async def test_lookup_data(client):
    res = await client.get("/api/lookupdata")

    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"raceTypes", "classTypes", "factionTypes", "realms"}
    assert body["realms"][0] == {"id": 1, "name": "Frostgard", "type": "Neutral"}
