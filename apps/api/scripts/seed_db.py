"""
Seed the taxonomy (education, languages, locations, origins, sects), lookup tables and a super admin.
Idempotent: existing rows are matched by their natural key and updated in place.
Run from apps/api: python scripts/seed_db.py
"""
import asyncio
import logging
import os
import sys
from pathlib import Path

# Ensure nikah_api is importable when run from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)

from sqlalchemy import select

from nikah_api.core import hash_password
from nikah_api.core.constants import SUPER_ADMIN
from nikah_api.db.session import async_session
from nikah_api.db.models import (
    User,
    EducationLevel,
    EducationField,
    Language,
    CountryLanguage,
    Country,
    StateProvince,
    City,
    Origin,
    Ethnicity,
    Caste,
    Sect,
    Maslak,
    Height,
    IncomeRange,
)

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@nikahfirst.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "ChangeMe123")

EDUCATION_LEVELS = [
    ("below_matric", "Below Matriculation", 1, 8),
    ("matric", "Matriculation (10th)", 2, 10),
    ("intermediate", "Intermediate (12th / FSc / FA)", 3, 12),
    ("diploma", "Diploma / Certificate", 4, 13),
    ("bachelors", "Bachelor's Degree", 5, 16),
    ("masters", "Master's Degree", 6, 18),
    ("mphil", "M.Phil / MS", 7, 18),
    ("phd", "PhD / Doctorate", 8, 21),
    ("islamic_scholar", "Islamic Scholar (Aalim/Mufti)", 5, 16),
    ("hafiz", "Hafiz-e-Quran", 3, 12),
]
RELIGIOUS_LEVELS = {"islamic_scholar", "hafiz"}

EDUCATION_FIELDS = {
    "Engineering & Technology": [
        ("computer_science", "Computer Science / IT"),
        ("software_engineering", "Software Engineering"),
        ("electrical_engineering", "Electrical Engineering"),
        ("civil_engineering", "Civil Engineering"),
    ],
    "Medical & Health": [
        ("medicine_mbbs", "Medicine (MBBS)"),
        ("dentistry", "Dentistry (BDS)"),
        ("pharmacy", "Pharmacy"),
        ("nursing", "Nursing"),
    ],
    "Business & Commerce": [
        ("business_admin", "Business Administration (BBA/MBA)"),
        ("accounting", "Accounting / Finance"),
        ("economics", "Economics"),
    ],
    "Law & Social Sciences": [("law", "Law (LLB/LLM)"), ("political_science", "Political Science")],
    "Islamic Studies": [("islamic_studies", "Islamic Studies"), ("fiqh", "Fiqh (Islamic Jurisprudence)")],
    "Other": [("education", "Education / Teaching"), ("architecture", "Architecture"), ("other_field", "Other")],
}

# (code, slug, label, native, global)
LANGUAGES = [
    ("ur", "urdu", "Urdu", "اردو", False),
    ("en", "english", "English", "English", True),
    ("pa", "punjabi", "Punjabi", "پنجابی", False),
    ("ps", "pashto", "Pashto", "پښتو", False),
    ("sd", "sindhi", "Sindhi", "سنڌي", False),
    ("bal", "balochi", "Balochi", "بلوچی", False),
    ("skr", "saraiki", "Saraiki", "سرائیکی", False),
    ("ar", "arabic", "Arabic", "العربية", True),
    ("hi", "hindi", "Hindi", "हिन्दी", False),
    ("bn", "bengali", "Bengali", "বাংলা", False),
]

# (code, name, phone code, currency, {state: [cities]}, [language slugs])
COUNTRIES = [
    (
        "PK", "Pakistan", "+92", "PKR",
        {
            "Islamabad Capital Territory": ["Islamabad"],
            "Punjab": ["Lahore", "Faisalabad", "Rawalpindi", "Multan", "Gujranwala", "Sialkot"],
            "Sindh": ["Karachi", "Hyderabad", "Sukkur", "Larkana"],
            "Khyber Pakhtunkhwa": ["Peshawar", "Mardan", "Abbottabad", "Swat"],
            "Balochistan": ["Quetta", "Gwadar", "Turbat"],
            "Gilgit-Baltistan": ["Gilgit", "Skardu", "Hunza"],
            "Azad Kashmir": ["Muzaffarabad", "Mirpur", "Kotli"],
        },
        ["urdu", "punjabi", "pashto", "sindhi", "balochi", "saraiki"],
    ),
    (
        "AE", "United Arab Emirates", "+971", "AED",
        {"Dubai": ["Dubai"], "Abu Dhabi": ["Abu Dhabi"], "Sharjah": ["Sharjah"]},
        ["urdu"],
    ),
    (
        "SA", "Saudi Arabia", "+966", "SAR",
        {"Riyadh Region": ["Riyadh"], "Makkah Region": ["Makkah", "Jeddah"], "Eastern Province": ["Dammam", "Khobar"]},
        [],
    ),
    (
        "GB", "United Kingdom", "+44", "GBP",
        {"England": ["London", "Birmingham", "Manchester", "Bradford"], "Scotland": ["Glasgow", "Edinburgh"]},
        ["urdu", "punjabi"],
    ),
    (
        "US", "United States", "+1", "USD",
        {"California": ["Los Angeles", "San Francisco"], "Texas": ["Houston", "Dallas"], "New York": ["New York City"]},
        ["urdu"],
    ),
    (
        "CA", "Canada", "+1", "CAD",
        {"Ontario": ["Toronto", "Mississauga", "Ottawa"], "British Columbia": ["Vancouver", "Surrey"]},
        ["urdu", "punjabi"],
    ),
    ("IN", "India", "+91", "INR", {}, ["hindi", "urdu"]),
    ("BD", "Bangladesh", "+880", "BDT", {}, ["bengali"]),
]

# (slug, label, native, emoji, {ethnicity slug: (label, [castes])}, terminology overrides)
ORIGINS = [
    (
        "pakistani", "Pakistani", "پاکستانی", "🇵🇰",
        {
            "punjabi": ("Punjabi", ["Jatt", "Arain", "Rajput", "Gujjar", "Awan"]),
            "sindhi": ("Sindhi", ["Syed", "Soomro", "Memon"]),
            "pashtun": ("Pashtun/Pathan", ["Yousafzai", "Afridi", "Khattak"]),
            "balochi": ("Balochi", []),
            "muhajir": ("Muhajir/Urdu Speaking", ["Syed", "Siddiqui", "Qureshi"]),
            "kashmiri": ("Kashmiri", ["Butt", "Dar", "Mir"]),
            "other_pakistani": ("Other", []),
        },
        {},
    ),
    (
        "indian", "Indian", "भारतीय", "🇮🇳",
        {"indian_gujarati": ("Gujarati", []), "indian_hyderabadi": ("Hyderabadi", []), "indian_other": ("Other", [])},
        {},
    ),
    ("bangladeshi", "Bangladeshi", "বাংলাদেশী", "🇧🇩", {"bengali": ("Bengali", [])}, {}),
    (
        "arab", "Arab", None, "🌍",
        {"arab_default": ("Arab", [])},
        {"level1_label": "Tribe", "level1_label_plural": "Tribes", "level2_enabled": False},
    ),
    ("afghan", "Afghan", None, "🇦🇫", {"afghan_default": ("Afghan", [])}, {}),
    ("other", "Other", None, "🌐", {"other_default": ("Other", [])}, {"level2_enabled": False}),
]

SECTS = [
    (
        "sunni", "Sunni",
        [
            ("hanafi", "Hanafi"),
            ("barelvi", "Barelvi"),
            ("deobandi", "Deobandi"),
            ("ahle_hadith", "Ahle Hadith / Salafi"),
            ("shafii", "Shafi'i"),
            ("sunni_other", "Other Sunni"),
        ],
    ),
    (
        "shia", "Shia",
        [("twelver", "Twelver (Ithna Ashari)"), ("ismaili", "Ismaili"), ("bohra", "Bohra"), ("shia_other", "Other Shia")],
    ),
    ("just_muslim", "Just Muslim", [("just_muslim_default", "Just Muslim")]),
    ("other_sect", "Other", [("other_sect_default", "Other")]),
]

INCOME_RANGES_USD = [
    "Under $25,000",
    "$25,000 - $50,000",
    "$50,000 - $75,000",
    "$75,000 - $100,000",
    "$100,000 - $150,000",
    "$150,000+",
    "Prefer not to say",
]
INCOME_RANGES_PKR = [
    "Under Rs. 50,000",
    "Rs. 50,000 - Rs. 100,000",
    "Rs. 100,000 - Rs. 200,000",
    "Rs. 200,000 - Rs. 500,000",
    "Rs. 500,000+",
    "Prefer not to say",
]


async def upsert(db, model, lookup: dict, **values):
    """Find by ``lookup`` columns; update ``values`` in place or insert a new row."""
    result = await db.execute(select(model).filter_by(**lookup))
    row = result.scalar_one_or_none()
    if row is None:
        row = model(**lookup, **values)
        db.add(row)
    else:
        for key, value in values.items():
            setattr(row, key, value)
    await db.flush()
    return row


async def seed_education(db) -> None:
    for i, (slug, label, level, years) in enumerate(EDUCATION_LEVELS):
        tags = ["islamic", "religious"] if slug in RELIGIOUS_LEVELS else []
        await upsert(
            db, EducationLevel, {"slug": slug},
            label=label, level=level, years_of_education=years, tags=tags, sort_order=i, is_active=True,
        )
    order = 0
    for category, fields in EDUCATION_FIELDS.items():
        for slug, label in fields:
            await upsert(db, EducationField, {"slug": slug}, label=label, category=category, sort_order=order)
            order += 1
    logger.info("Seeded %d education levels, %d fields", len(EDUCATION_LEVELS), order)


async def seed_languages(db) -> dict[str, Language]:
    languages = {}
    for i, (code, slug, label, native, is_global) in enumerate(LANGUAGES):
        languages[slug] = await upsert(
            db, Language, {"slug": slug},
            code=code, label=label, label_native=native, is_global=is_global, sort_order=i, is_active=True,
        )
    # The wizard's "Other" mother tongue option; the server refuses to delete it
    languages["other_language"] = await upsert(
        db, Language, {"slug": "other_language"},
        code="other", label="Other", is_system=True, is_global=True, sort_order=99, is_active=True,
    )
    logger.info("Seeded %d languages", len(languages))
    return languages


async def seed_locations(db, languages: dict[str, Language]) -> None:
    for i, (code, name, phone_code, currency, states, language_slugs) in enumerate(COUNTRIES):
        country = await upsert(
            db, Country, {"code": code},
            name=name, phone_code=phone_code, currency=currency, sort_order=i, is_active=True,
        )
        for s_order, (state_name, cities) in enumerate(states.items()):
            state = await upsert(
                db, StateProvince, {"country_id": country.id, "name": state_name}, sort_order=s_order, is_active=True
            )
            for c_order, city_name in enumerate(cities):
                await upsert(
                    db, City, {"state_province_id": state.id, "name": city_name},
                    sort_order=c_order, is_popular=c_order < 3, is_active=True,
                )
        for l_order, slug in enumerate(language_slugs):
            await upsert(
                db, CountryLanguage, {"country_id": country.id, "language_id": languages[slug].id},
                sort_order=l_order, is_primary=l_order == 0,
            )
        if code == "PK":
            for r_order, label in enumerate(INCOME_RANGES_PKR):
                await upsert(
                    db, IncomeRange, {"country_id": country.id, "label": label},
                    currency="PKR", period="MONTHLY", sort_order=r_order, is_active=True,
                )
    logger.info("Seeded %d countries", len(COUNTRIES))


async def seed_origins(db) -> None:
    for i, (slug, label, native, emoji, ethnicities, terminology) in enumerate(ORIGINS):
        origin = await upsert(
            db, Origin, {"slug": slug},
            label=label, label_native=native, emoji=emoji, sort_order=i, is_active=True, **terminology,
        )
        for e_order, (eth_slug, (eth_label, castes)) in enumerate(ethnicities.items()):
            ethnicity = await upsert(
                db, Ethnicity, {"origin_id": origin.id, "slug": eth_slug}, label=eth_label, sort_order=e_order
            )
            for c_order, caste_label in enumerate(castes):
                await upsert(
                    db, Caste, {"ethnicity_id": ethnicity.id, "slug": caste_label.lower().replace(" ", "_")},
                    label=caste_label, sort_order=c_order, is_popular=c_order < 3,
                )
    logger.info("Seeded %d origins", len(ORIGINS))


async def seed_sects(db) -> None:
    for i, (slug, label, maslaks) in enumerate(SECTS):
        sect = await upsert(db, Sect, {"slug": slug}, label=label, sort_order=i, is_active=True)
        for m_order, (m_slug, m_label) in enumerate(maslaks):
            await upsert(db, Maslak, {"sect_id": sect.id, "slug": m_slug}, label=m_label, sort_order=m_order)
    logger.info("Seeded %d sects", len(SECTS))


async def seed_lookups(db) -> None:
    order = 0
    for feet in range(4, 7):
        start = 6 if feet == 4 else 0
        stop = 8 if feet == 6 else 11
        for inches in range(start, stop + 1):
            cm = round((feet * 12 + inches) * 2.54)
            await upsert(
                db, Height, {"centimeters": cm},
                label_imperial=f"{feet}'{inches}\"", label_metric=f"{cm} cm", sort_order=order, is_active=True,
            )
            order += 1
    for r_order, label in enumerate(INCOME_RANGES_USD):
        await upsert(
            db, IncomeRange, {"country_id": None, "label": label},
            currency="USD", period="ANNUAL", sort_order=r_order, is_active=True,
        )
    logger.info("Seeded %d heights, %d global income ranges", order, len(INCOME_RANGES_USD))


async def seed_admin(db) -> None:
    result = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
    if result.scalar_one_or_none():
        logger.info("Super admin %s already exists", ADMIN_EMAIL)
        return
    db.add(
        User(
            name="Super Admin",
            email=ADMIN_EMAIL,
            hashed_password=hash_password(ADMIN_PASSWORD),
            role=SUPER_ADMIN,
            email_verified=True,
        )
    )
    await db.flush()
    logger.info("Created super admin %s", ADMIN_EMAIL)


async def main() -> None:
    async with async_session() as db:
        await seed_education(db)
        languages = await seed_languages(db)
        await seed_locations(db, languages)
        await seed_origins(db)
        await seed_sects(db)
        await seed_lookups(db)
        await seed_admin(db)
        await db.commit()
    logger.info("Seed complete.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    asyncio.run(main())
