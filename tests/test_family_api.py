import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_family_with_required_fields_uses_default_measurements(
    client: AsyncClient,
) -> None:
    response = await client.post(
        "/api/family",
        json={"babyName": "Baby A", "birthDate": "2024-01-01", "gender": "girl"},
    )
    assert response.status_code == 201
    payload = response.json()
    assert payload["name"] == "Baby A"
    family_id = payload["familyId"]
    assert family_id

    profile_res = await client.get("/api/profile", headers={"X-Family-ID": family_id})
    assert profile_res.status_code == 200
    profile = profile_res.json()
    assert profile["family_id"] == family_id
    assert profile["name"] == "Baby A"
    assert profile["birth_date"] == "2024-01-01"
    assert profile["gender"] == "girl"
    assert profile["photo_url"] is None
    assert profile["current_height"] == 50.0
    assert profile["current_weight"] == 3.3


@pytest.mark.asyncio
async def test_create_family_without_gender_and_with_iso_datetime_birth_date(
    client: AsyncClient,
) -> None:
    response = await client.post(
        "/api/family",
        json={"babyName": "  Little   Bean ", "birthDate": "2024-05-02T00:00:00.000Z"},
    )
    assert response.status_code == 201
    family_id = response.json()["familyId"]
    assert response.json()["name"] == "Little Bean"

    profile = (await client.get("/api/profile", headers={"X-Family-ID": family_id})).json()
    assert profile["birth_date"] == "2024-05-02"
    assert profile["gender"] is None


@pytest.mark.asyncio
async def test_each_family_gets_a_fresh_identifier(client: AsyncClient) -> None:
    ids = set()
    for index in range(5):
        response = await client.post(
            "/api/family",
            json={"babyName": f"Baby {index}", "birthDate": "2024-01-01"},
        )
        assert response.status_code == 201
        ids.add(response.json()["familyId"])
    assert len(ids) == 5


@pytest.mark.asyncio
async def test_create_family_requires_non_blank_name(client: AsyncClient) -> None:
    missing = await client.post("/api/family", json={"birthDate": "2024-01-01"})
    assert missing.status_code == 422

    blank = await client.post("/api/family", json={"babyName": "   ", "birthDate": "2024-01-01"})
    assert blank.status_code == 422


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
