"""Tests for the global-settings taxonomy endpoints."""

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.db.models import Language, Profile

BASE = "/api/admin/global-settings"


async def _create(client: httpx.AsyncClient, headers: dict, path: str, key: str, **body) -> dict:
    r = await client.post(f"{BASE}/{path}", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()[key]


async def test_requires_super_admin(client: httpx.AsyncClient, user_headers: dict) -> None:
    r = await client.get(f"{BASE}/sects", headers=user_headers)
    assert r.status_code == 403
    assert r.json() == {"error": "Unauthorized"}

    r = await client.get(f"{BASE}/sects")
    assert r.status_code == 401


async def test_create_appends_and_reorder_writes_contiguous_order(
    client: httpx.AsyncClient, admin_headers: dict
) -> None:
    ids = [(await _create(client, admin_headers, "sects", "sect", slug=s, label=s.title()))["id"] for s in ("a", "b", "c")]

    r = await client.get(f"{BASE}/sects", headers=admin_headers)
    assert [s["sortOrder"] for s in r.json()["sects"]] == [0, 1, 2]

    new_order = [ids[2], ids[0], ids[1]]
    r = await client.post(
        f"{BASE}/sects/reorder", json={"type": "sects", "orderedIds": new_order}, headers=admin_headers
    )
    assert r.json() == {"success": True}

    sects = (await client.get(f"{BASE}/sects", headers=admin_headers)).json()["sects"]
    assert [s["id"] for s in sects] == new_order
    assert [s["sortOrder"] for s in sects] == [0, 1, 2]


async def test_reorder_rejects_bad_payloads(client: httpx.AsyncClient, admin_headers: dict) -> None:
    origin = await _create(client, admin_headers, "origins", "origin", slug="south-asian", label="South Asian")
    other = await _create(client, admin_headers, "origins", "origin", slug="arab", label="Arab")
    e1 = await _create(client, admin_headers, "origins/ethnicities", "ethnicity", originId=origin["id"], slug="punjabi", label="Punjabi")
    e2 = await _create(client, admin_headers, "origins/ethnicities", "ethnicity", originId=origin["id"], slug="sindhi", label="Sindhi")
    e3 = await _create(client, admin_headers, "origins/ethnicities", "ethnicity", originId=other["id"], slug="gulf", label="Gulf")

    async def reorder(body: dict) -> httpx.Response:
        return await client.post(f"{BASE}/origins/reorder", json=body, headers=admin_headers)

    r = await reorder({"type": "ethnicities", "orderedIds": [e1["id"], e3["id"]]})
    assert r.status_code == 400
    assert r.json()["error"] == "orderedIds must belong to a single parent"

    r = await reorder({"type": "ethnicities", "orderedIds": [e2["id"]]})
    assert r.json()["error"] == "orderedIds must list every item in the scope"

    r = await reorder({"type": "ethnicities", "orderedIds": [e1["id"], e1["id"]]})
    assert r.json()["error"] == "orderedIds contains duplicates"

    r = await reorder({"type": "maslaks", "orderedIds": [e1["id"]]})
    assert r.json()["error"] == "Type must be one of: origins, ethnicities, castes"

    r = await reorder({"type": "ethnicities", "orderedIds": [e2["id"], e1["id"]]})
    assert r.status_code == 200


async def test_child_list_requires_parent(client: httpx.AsyncClient, admin_headers: dict) -> None:
    r = await client.get(f"{BASE}/locations/states", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "countryId is required"


async def test_validation_errors_render_as_error_string(client: httpx.AsyncClient, admin_headers: dict) -> None:
    r = await client.post(f"{BASE}/sects", json={"slug": "x"}, headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["error"].startswith("label:")


async def test_duplicate_slug_rejected(client: httpx.AsyncClient, admin_headers: dict) -> None:
    await _create(client, admin_headers, "education/fields", "field", slug="medicine", label="Medicine")
    r = await client.post(f"{BASE}/education/fields", json={"slug": "Medicine", "label": "Med"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Education field with this slug already exists"


async def test_delete_country_removes_states_and_cities(client: httpx.AsyncClient, admin_headers: dict) -> None:
    country = await _create(client, admin_headers, "locations/countries", "country", code="pk", name="Pakistan")
    state = await _create(client, admin_headers, "locations/states", "state", countryId=country["id"], name="Punjab")
    await _create(client, admin_headers, "locations/cities", "city", stateProvinceId=state["id"], name="Lahore")

    r = await client.delete(f"{BASE}/locations/countries/{country['id']}", headers=admin_headers)
    assert r.json() == {"success": True}

    r = await client.get(f"{BASE}/locations/states/{state['id']}", headers=admin_headers)
    assert r.status_code == 404
    r = await client.get(f"{BASE}/locations/cities", params={"stateId": state["id"]}, headers=admin_headers)
    assert r.json()["cities"] == []


async def test_delete_referenced_node_refused(
    client: httpx.AsyncClient, admin_headers: dict, db: AsyncSession, make_user
) -> None:
    sect = await _create(client, admin_headers, "sects", "sect", slug="sunni", label="Sunni")
    user, _ = await make_user()
    db.add(Profile(user_id=user.id, sect_id=sect["id"]))
    await db.commit()

    r = await client.delete(f"{BASE}/sects/{sect['id']}", headers=admin_headers)

    assert r.status_code == 400
    assert r.json()["error"] == "Cannot delete sect that is in use by profiles. Consider deactivating it instead."
    listed = (await client.get(f"{BASE}/sects", headers=admin_headers)).json()["sects"]
    assert listed[0]["profileCount"] == 1


async def test_system_language_cannot_be_deleted(
    client: httpx.AsyncClient, admin_headers: dict, db: AsyncSession
) -> None:
    other = Language(slug="other_language", label="Other", is_system=True)
    db.add(other)
    await db.commit()

    r = await client.delete(f"{BASE}/languages/{other.id}", headers=admin_headers)

    assert r.status_code == 400
    assert r.json()["error"] == "Cannot delete a system language"
    languages = (await client.get(f"{BASE}/languages", headers=admin_headers)).json()["languages"]
    assert languages[0]["isSystem"] is True


async def test_update_leaves_omitted_fields(client: httpx.AsyncClient, admin_headers: dict) -> None:
    origin = await _create(
        client, admin_headers, "origins", "origin", slug="arab", label="Arab", level1Label="Tribe", level2Enabled=True
    )

    r = await client.patch(f"{BASE}/origins/{origin['id']}", json={"level2Enabled": False}, headers=admin_headers)

    updated = r.json()["origin"]
    assert updated["level2Enabled"] is False
    assert updated["level1Label"] == "Tribe"
    assert updated["slug"] == "arab"


async def test_country_language_order_scoped_to_country(client: httpx.AsyncClient, admin_headers: dict) -> None:
    country = await _create(client, admin_headers, "locations/countries", "country", code="PK", name="Pakistan")
    urdu = await _create(client, admin_headers, "languages", "language", slug="urdu", label="Urdu")
    punjabi = await _create(client, admin_headers, "languages", "language", slug="punjabi", label="Punjabi")
    path = f"{BASE}/languages/countries/{country['id']}"
    for lang in (urdu, punjabi):
        r = await client.post(path, json={"languageId": lang["id"]}, headers=admin_headers)
        assert r.status_code == 201

    r = await client.post(path, json={"languageId": urdu["id"]}, headers=admin_headers)
    assert r.json()["error"] == "This language is already associated with this country"

    r = await client.post(
        f"{BASE}/languages/reorder",
        json={"orderedIds": [punjabi["id"]], "countryId": country["id"]},
        headers=admin_headers,
    )
    assert r.status_code == 400

    r = await client.post(
        f"{BASE}/languages/reorder",
        json={"orderedIds": [punjabi["id"], urdu["id"]], "countryId": country["id"]},
        headers=admin_headers,
    )
    assert r.status_code == 200
    body = (await client.get(path, headers=admin_headers)).json()
    assert [lang["slug"] for lang in body["languages"]] == ["punjabi", "urdu"]
    assert body["availableLanguages"] == []

    # Global language order is untouched
    languages = (await client.get(f"{BASE}/languages", headers=admin_headers)).json()["languages"]
    assert [lang["slug"] for lang in languages] == ["urdu", "punjabi"]
