"""Tests for the public wizard lookup endpoint."""

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from nikah_api.db.models import Country, CountryLanguage, Ethnicity, IncomeRange, Language, Origin

LOOKUP = "/api/lookup"


async def test_unknown_table_rejected(client: httpx.AsyncClient) -> None:
    r = await client.get(LOOKUP, params={"table": "users"})

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid table name"}


async def test_children_filtered_by_parent_and_active(client: httpx.AsyncClient, db: AsyncSession) -> None:
    south_asian = Origin(slug="south-asian", label="South Asian", level2_enabled=False)
    arab = Origin(slug="arab", label="Arab", level1_label="Tribe", level1_label_plural="Tribes", sort_order=1)
    south_asian.ethnicities = [
        Ethnicity(slug="sindhi", label="Sindhi", sort_order=1),
        Ethnicity(slug="punjabi", label="Punjabi", sort_order=0),
        Ethnicity(slug="hidden", label="Hidden", is_active=False),
    ]
    arab.ethnicities = [Ethnicity(slug="qahtani", label="Qahtani")]
    db.add_all([south_asian, arab])
    await db.commit()

    origins = (await client.get(LOOKUP, params={"table": "origin"})).json()["data"]
    assert [o["name"] for o in origins] == ["South Asian", "Arab"]
    assert origins[0]["level2Enabled"] is False
    assert origins[1]["level1Label"] == "Tribe"

    r = await client.get(LOOKUP, params={"table": "ethnicity", "parentId": south_asian.id})
    data = r.json()["data"]
    assert [e["name"] for e in data] == ["Punjabi", "Sindhi"]
    assert set(data[0]) == {"id", "name", "originId"}


async def test_languages_for_country_then_global(client: httpx.AsyncClient, db: AsyncSession) -> None:
    pakistan = Country(code="PK", name="Pakistan")
    urdu = Language(slug="urdu", label="Urdu", sort_order=0)
    punjabi = Language(slug="punjabi", label="Punjabi", sort_order=1)
    english = Language(slug="english", label="English", is_global=True, sort_order=2)
    other = Language(slug="other_language", label="Other", is_global=True, is_system=True, sort_order=3)
    db.add_all([pakistan, urdu, punjabi, english, other])
    await db.flush()
    db.add_all(
        [
            CountryLanguage(country_id=pakistan.id, language_id=punjabi.id, sort_order=0),
            CountryLanguage(country_id=pakistan.id, language_id=urdu.id, sort_order=1),
            CountryLanguage(country_id=pakistan.id, language_id=english.id, sort_order=2),
        ]
    )
    await db.commit()

    r = await client.get(LOOKUP, params={"table": "language", "parentId": pakistan.id})

    data = r.json()["data"]
    assert [lang["name"] for lang in data] == ["Punjabi", "Urdu", "English", "Other"]
    assert data[-1]["isOther"] is True


async def test_income_ranges_fall_back_to_global(client: httpx.AsyncClient, db: AsyncSession) -> None:
    uae = Country(code="AE", name="UAE")
    pakistan = Country(code="PK", name="Pakistan")
    db.add_all([uae, pakistan])
    await db.flush()
    db.add_all(
        [
            IncomeRange(label="Any", currency="USD"),
            IncomeRange(country_id=pakistan.id, label="50k-100k PKR", currency="PKR"),
        ]
    )
    await db.commit()

    pk = (await client.get(LOOKUP, params={"table": "incomeRange", "parentId": pakistan.id})).json()["data"]
    ae = (await client.get(LOOKUP, params={"table": "incomeRange", "parentId": uae.id})).json()["data"]

    assert [r["display"] for r in pk] == ["50k-100k PKR"]
    assert [(r["display"], r["currency"]) for r in ae] == [("Any", "USD")]
