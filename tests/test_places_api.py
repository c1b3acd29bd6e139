import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

from borne_api.models.place import PlaceAddress


ADDRESS = {
    "street": "12 rue de la Roquette",
    "postal_code": "75011",
    "city": "Paris",
    "country": "France",
}

STATION_PAYLOAD = {
    "name": "Borne Bastille",
    "latitude": 48.8532,
    "longitude": 2.3692,
    "power_kw": 22.0,
}


@pytest.mark.asyncio
async def test_create_and_get_place_with_address(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        created = await ac.post("/places", json={"instructions": "Code 1234", "address": ADDRESS})
        assert created.status_code == 201, created.text
        place_id = created.json()["id"]

        r = await ac.get(f"/places/{place_id}")

    assert r.status_code == 200
    data = r.json()
    assert data["instructions"] == "Code 1234"
    assert data["owner_id"] is None
    assert data["address"]["city"] == "Paris"
    assert data["address"]["complement"] is None
    assert isinstance(data["address"]["id"], int)


@pytest.mark.asyncio
async def test_place_owner_must_exist(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/places", json={"owner_id": 999, "address": ADDRESS})

    assert r.status_code == 404
    assert r.json()["detail"] == "Owner not found"


@pytest.mark.asyncio
async def test_list_places_by_owner(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        owner = await ac.post(
            "/users",
            json={
                "last_name": "Durand",
                "first_name": "Luc",
                "username": "ldurand",
                "email": "luc.durand@electricitybusiness.fr",
                "role": "OWNER",
            },
        )
        owner_id = owner.json()["id"]
        await ac.post("/places", json={"owner_id": owner_id, "address": ADDRESS})
        await ac.post("/places", json={"instructions": "Sans proprietaire"})

        everything = await ac.get("/places")
        owned = await ac.get(f"/places?owner_id={owner_id}")

    assert everything.json()["total"] == 2
    assert owned.json()["total"] == 1
    assert owned.json()["items"][0]["owner_id"] == owner_id


@pytest.mark.asyncio
async def test_station_is_attached_to_place(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        place_id = (await ac.post("/places", json={"address": ADDRESS})).json()["id"]

        station = await ac.post("/stations", json={**STATION_PAYLOAD, "place_id": place_id})
        unknown = await ac.post("/stations", json={**STATION_PAYLOAD, "place_id": 999})
        hosted = await ac.get(f"/places/{place_id}/stations")
        missing = await ac.get("/places/999/stations")

    assert station.status_code == 201, station.text
    assert station.json()["place_id"] == place_id

    assert unknown.status_code == 404
    assert unknown.json()["detail"] == "Place not found"

    assert [s["id"] for s in hosted.json()] == [station.json()["id"]]
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_place_replaces_and_removes_address(test_app, db_session):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        place_id = (await ac.post("/places", json={"address": ADDRESS})).json()["id"]

        moved = await ac.put(
            f"/places/{place_id}",
            json={"instructions": "Portail bleu", "address": {**ADDRESS, "city": "Lyon"}},
        )
        cleared = await ac.put(f"/places/{place_id}", json={"instructions": "Portail bleu"})

    assert moved.status_code == 200, moved.text
    assert moved.json()["address"]["city"] == "Lyon"

    assert cleared.status_code == 200
    assert cleared.json()["address"] is None
    assert (await db_session.execute(select(func.count(PlaceAddress.id)))).scalar_one() == 0


@pytest.mark.asyncio
async def test_delete_place_detaches_stations(test_app, db_session):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        place_id = (await ac.post("/places", json={"address": ADDRESS})).json()["id"]
        station_id = (await ac.post("/stations", json={**STATION_PAYLOAD, "place_id": place_id})).json()["id"]

        deleted = await ac.delete(f"/places/{place_id}")
        missing = await ac.get(f"/places/{place_id}")
        station = await ac.get(f"/stations/{station_id}")

    assert deleted.status_code == 204
    assert missing.status_code == 404

    assert station.status_code == 200
    assert station.json()["place_id"] is None
    assert (await db_session.execute(select(func.count(PlaceAddress.id)))).scalar_one() == 0
