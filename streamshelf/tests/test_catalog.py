# streamshelf/tests/test_catalog.py
import pytest

from streamshelf.errors import AuthError, NotFoundError, ValidationError
from streamshelf.security import Identity
from streamshelf.services import CatalogService
from streamshelf.store import MemoryStore, read_json

ACTOR = Identity(id="u1", email="a@x.com", name="Ana")


@pytest.mark.asyncio
async def test_catalog_is_public_and_empty_on_fresh_store(client):
    r = await client.get("/api/catalog")
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.asyncio
async def test_create_requires_token(client):
    r = await client.post("/api/catalog", json={"title": "Dark", "type": "show"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_create_applies_defaults(client, auth):
    r = await client.post("/api/catalog", json={"title": "Dark", "type": "show"}, headers=auth["headers"])
    assert r.status_code == 201
    item = r.json()
    assert item["id"] and item["createdAt"].endswith("Z")
    assert item["description"] == "" and item["coverUrl"] == "" and item["videoUrl"] == ""
    assert item["showId"] is None and item["season"] is None and item["episodeNumber"] is None


@pytest.mark.asyncio
async def test_create_keeps_episode_fields_and_extra_keys(client, make_item):
    show = await make_item("Dark", "show", year=2017, genres=["Sci-Fi"])
    assert show["year"] == 2017 and show["genres"] == ["Sci-Fi"]
    ep = await make_item("Secrets", "episode", showId=show["id"], season=1, episodeNumber=1)
    assert ep["showId"] == show["id"] and ep["season"] == 1 and ep["episodeNumber"] == 1


@pytest.mark.asyncio
async def test_create_without_title_is_400_and_leaves_file_unchanged(client, auth, make_item, data_dir):
    await make_item()
    before = read_json("shows.json", data_dir)

    r = await client.post("/api/catalog", json={"type": "movie"}, headers=auth["headers"])
    assert r.status_code == 400
    assert r.json() == {"error": "title and type are required"}

    r = await client.post("/api/catalog", json={"title": "X", "type": "podcast"}, headers=auth["headers"])
    assert r.status_code == 400

    assert read_json("shows.json", data_dir) == before
    assert len(before) == 1


@pytest.mark.asyncio
async def test_get_by_id_and_filters(client, make_item):
    movie = await make_item("Inception", "movie")
    await make_item("Dark", "show")
    r = await client.get(f"/api/catalog/{movie['id']}")
    assert r.status_code == 200 and r.json()["title"] == "Inception"

    r = await client.get("/api/catalog", params={"type": "show"})
    assert [i["title"] for i in r.json()] == ["Dark"]

    r = await client.get("/api/catalog", params={"q": "INCEP"})
    assert [i["id"] for i in r.json()] == [movie["id"]]

    r = await client.get("/api/catalog/missing")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_merges_and_keeps_id(client, auth, make_item):
    item = await make_item("Inception", "movie", description="old")
    r = await client.put(
        f"/api/catalog/{item['id']}",
        json={"description": "Dream heist", "id": "hijack"},
        headers=auth["headers"],
    )
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == item["id"]
    assert body["description"] == "Dream heist"
    assert body["title"] == "Inception"
    assert body["createdAt"] == item["createdAt"]


@pytest.mark.asyncio
async def test_update_missing_id_is_404_and_file_unchanged(client, auth, make_item, data_dir):
    await make_item()
    before = read_json("shows.json", data_dir)
    r = await client.put("/api/catalog/nope", json={"title": "X"}, headers=auth["headers"])
    assert r.status_code == 404
    assert r.json() == {"error": "Item not found"}
    assert read_json("shows.json", data_dir) == before


@pytest.mark.asyncio
async def test_delete_then_404(client, auth, make_item, data_dir):
    item = await make_item()
    r = await client.delete(f"/api/catalog/{item['id']}", headers=auth["headers"])
    assert r.status_code == 204
    assert r.content == b""
    assert read_json("shows.json", data_dir) == []

    r = await client.delete(f"/api/catalog/{item['id']}", headers=auth["headers"])
    assert r.status_code == 404


def test_service_contract_with_memory_store():
    svc = CatalogService(MemoryStore())
    with pytest.raises(AuthError):
        svc.create({"title": "Dark", "type": "show"}, None)
    with pytest.raises(ValidationError):
        svc.create({"type": "show"}, ACTOR)
    item = svc.create({"title": "Dark", "type": "show"}, ACTOR)
    with pytest.raises(ValidationError):
        svc.update(item["id"], {"type": "podcast"}, ACTOR)
    with pytest.raises(NotFoundError):
        svc.update("missing", {"title": "x"}, ACTOR)
    assert svc.update(item["id"], {"season": 2}, ACTOR)["season"] == 2
    svc.delete(item["id"], ACTOR)
    assert svc.list() == []


@pytest.mark.asyncio
async def test_update_with_null_optional_fields_falls_back_to_defaults(client, auth, make_item, data_dir):
    item = await make_item("Inception", "movie", description="Dreams", coverUrl="c.jpg", season=1)
    r = await client.put(
        f"/api/catalog/{item['id']}",
        json={"description": None, "coverUrl": "", "videoUrl": None, "season": None},
        headers=auth["headers"],
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["description"] == "" and body["coverUrl"] == "" and body["videoUrl"] == ""
    assert body["season"] is None and body["title"] == "Inception"

    saved = read_json("shows.json", data_dir)[0]
    assert saved["description"] == ""

    r = await client.get("/api/catalog")
    assert r.status_code == 200
    assert [i["id"] for i in r.json()] == [item["id"]]
