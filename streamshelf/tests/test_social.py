# streamshelf/tests/test_social.py
import pytest


@pytest.fixture
async def bo(signup):
    return await signup("Bo", "bo@x.com", "pw123456")


@pytest.mark.asyncio
async def test_create_and_list_public_lists(client, auth, make_item):
    a = await make_item("Dark", "show")
    b = await make_item("Inception", "movie")
    r = await client.post(
        "/api/social/lists",
        json={"name": "  Mind benders ", "description": "twisty", "items": [a["id"], b["id"], a["id"]]},
        headers=auth["headers"],
    )
    assert r.status_code == 201
    created = r.json()
    assert created["name"] == "Mind benders"
    assert created["items"] == [a["id"], b["id"]]
    assert created["creator"] == {"id": auth["id"], "name": "Ana", "avatar": ""}
    assert "creatorId" not in created

    r = await client.get("/api/social/lists")
    assert [l["id"] for l in r.json()] == [created["id"]]


@pytest.mark.asyncio
async def test_list_validation(client, auth):
    r = await client.post("/api/social/lists", json={"name": " "}, headers=auth["headers"])
    assert r.status_code == 400
    r = await client.post("/api/social/lists", json={"name": "x", "items": ["ghost"]}, headers=auth["headers"])
    assert r.status_code == 404
    r = await client.post("/api/social/lists", json={"name": "x"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_private_lists_only_visible_to_creator(client, auth, bo):
    r = await client.post("/api/social/lists", json={"name": "Secret", "isPublic": False}, headers=auth["headers"])
    list_id = r.json()["id"]

    assert (await client.get("/api/social/lists")).json() == []
    assert len((await client.get("/api/social/lists", headers=auth["headers"])).json()) == 1
    assert (await client.get(f"/api/social/lists/{list_id}", headers=bo["headers"])).status_code == 404
    assert (await client.get(f"/api/social/lists/{list_id}", headers=auth["headers"])).status_code == 200


@pytest.mark.asyncio
async def test_add_and_remove_items(client, auth, make_item):
    item = await make_item("Dark", "show")
    r = await client.post("/api/social/lists", json={"name": "Watch"}, headers=auth["headers"])
    list_id = r.json()["id"]

    r = await client.post(f"/api/social/lists/{list_id}/items", json={"itemId": item["id"]}, headers=auth["headers"])
    assert r.status_code == 200
    assert "Dark" in r.json()["message"]
    assert r.json()["list"]["items"] == [item["id"]]

    r = await client.post(f"/api/social/lists/{list_id}/items", json={"itemId": item["id"]}, headers=auth["headers"])
    assert r.status_code == 409

    r = await client.delete(f"/api/social/lists/{list_id}/items/{item['id']}", headers=auth["headers"])
    assert r.status_code == 200
    assert r.json()["list"]["items"] == []

    r = await client.delete(f"/api/social/lists/{list_id}/items/{item['id']}", headers=auth["headers"])
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_only_creator_changes_list(client, auth, bo, make_item):
    item = await make_item()
    list_id = (await client.post("/api/social/lists", json={"name": "Mine"}, headers=auth["headers"])).json()["id"]

    r = await client.post(f"/api/social/lists/{list_id}/items", json={"itemId": item["id"]}, headers=bo["headers"])
    assert r.status_code == 403
    r = await client.put(f"/api/social/lists/{list_id}", json={"name": "Stolen"}, headers=bo["headers"])
    assert r.status_code == 403
    r = await client.delete(f"/api/social/lists/{list_id}", headers=bo["headers"])
    assert r.status_code == 403

    r = await client.put(f"/api/social/lists/{list_id}", json={"name": "Renamed", "isPublic": False}, headers=auth["headers"])
    assert r.status_code == 200
    assert r.json()["name"] == "Renamed" and r.json()["isPublic"] is False

    r = await client.delete(f"/api/social/lists/{list_id}", headers=auth["headers"])
    assert r.status_code == 204
    assert (await client.get(f"/api/social/lists/{list_id}", headers=auth["headers"])).status_code == 404


@pytest.mark.asyncio
async def test_follow_and_profile_stats(client, auth, bo, make_item):
    item = await make_item()
    await client.post("/api/favorites", json={"itemId": item["id"]}, headers=bo["headers"])
    await client.post("/api/social/lists", json={"name": "Bo's"}, headers=bo["headers"])

    r = await client.post(f"/api/social/follow/{bo['id']}", headers=auth["headers"])
    assert r.status_code == 200 and r.json()["following"] is True
    r = await client.post(f"/api/social/follow/{bo['id']}", headers=auth["headers"])
    assert r.json()["created"] is False

    profile = (await client.get(f"/api/social/profiles/{bo['id']}")).json()
    assert profile["name"] == "Bo"
    assert profile["username"] == "bo"
    assert profile["followers"] == [auth["id"]]
    assert profile["favorites"] == [item["id"]]
    assert profile["stats"] == {"totalWatched": 1, "totalLists": 1, "totalFollowers": 1, "totalFollowing": 0}
    assert "passwordHash" not in profile and "email" not in profile

    r = await client.delete(f"/api/social/follow/{bo['id']}", headers=auth["headers"])
    assert r.status_code == 200
    r = await client.delete(f"/api/social/follow/{bo['id']}", headers=auth["headers"])
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_follow_rules(client, auth):
    r = await client.post(f"/api/social/follow/{auth['id']}", headers=auth["headers"])
    assert r.status_code == 400
    r = await client.post("/api/social/follow/ghost", headers=auth["headers"])
    assert r.status_code == 404
    r = await client.get("/api/social/profiles/ghost")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_own_profile(client, auth):
    r = await client.put("/api/social/profiles/me", json={"bio": "cinéfila", "avatar": "🐱"}, headers=auth["headers"])
    assert r.status_code == 200
    assert r.json()["bio"] == "cinéfila" and r.json()["avatar"] == "🐱"
    r = await client.put("/api/social/profiles/me", json={"name": ""}, headers=auth["headers"])
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_share(client, auth, make_item, data_dir):
    item = await make_item()
    r = await client.post("/api/social/share", json={"itemId": item["id"], "message": "Watch this"}, headers=auth["headers"])
    assert r.status_code == 201
    assert r.json()["userId"] == auth["id"] and r.json()["message"] == "Watch this"
    r = await client.post("/api/social/share", json={"itemId": "ghost"}, headers=auth["headers"])
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_rankings(client, auth, bo, make_item):
    dark = await make_item("Dark", "show")
    inception = await make_item("Inception", "movie")
    await make_item("Unloved", "movie")
    for user in (auth, bo):
        await client.post("/api/favorites", json={"itemId": dark["id"]}, headers=user["headers"])
    await client.post("/api/favorites", json={"itemId": inception["id"]}, headers=auth["headers"])

    r = await client.get("/api/social/rankings")
    assert r.status_code == 200
    data = r.json()
    assert [(i["title"], i["favoriteCount"]) for i in data["mostFavorited"]] == [("Dark", 2), ("Inception", 1)]
    assert [u["name"] for u in data["topUsers"]] == ["Ana", "Bo"]
    assert data["topUsers"][0]["totalFavorites"] == 2

    r = await client.get("/api/social/rankings", params={"limit": 1})
    assert len(r.json()["mostFavorited"]) == 1


@pytest.mark.asyncio
async def test_deleted_item_leaves_profile_and_rankings(client, auth, bo, make_item):
    item = await make_item()
    await client.post("/api/favorites", json={"itemId": item["id"]}, headers=bo["headers"])
    await client.delete(f"/api/catalog/{item['id']}", headers=auth["headers"])

    profile = (await client.get(f"/api/social/profiles/{bo['id']}")).json()
    assert profile["favorites"] == []
    assert profile["stats"]["totalWatched"] == 0

    data = (await client.get("/api/social/rankings")).json()
    assert data["mostFavorited"] == []
    assert all(u["id"] != bo["id"] for u in data["topUsers"])
