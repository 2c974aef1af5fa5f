import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    Index,
    JSON,
    func,
)
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


# JSONB on Postgres, plain JSON elsewhere (tests run on SQLite)
JsonType = JSON().with_variant(JSONB(), "postgresql")


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True, index=True)
    phone_verified = Column(Boolean, default=False, nullable=False)
    phone_changed_at = Column(DateTime(timezone=True), nullable=True)
    email_verified = Column(Boolean, default=False, nullable=False)
    role = Column(String(30), default="USER", nullable=False)
    status = Column(String(30), default="ACTIVE", nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    profiles = relationship("Profile", back_populates="user", foreign_keys="Profile.user_id")
    phone_verifications = relationship(
        "PhoneVerification",
        back_populates="user",
        foreign_keys="PhoneVerification.user_id",
        cascade="all, delete-orphan",
    )


class PhoneVerification(Base):
    """Phone OTP request. The code is relayed to admins, who call the user."""

    __tablename__ = "phone_verifications"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    phone = Column(String(50), nullable=False)
    otp = Column(String(6), nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    verified_by = Column(UUID(as_uuid=False), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    requested_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)

    user = relationship("User", back_populates="phone_verifications", foreign_keys=[user_id])

    __table_args__ = (Index("ix_phone_verifications_user_pending", "user_id", "verified"),)


class FieldSuggestion(Base):
    """Free-text value a user typed because the taxonomy lacked an option."""

    __tablename__ = "field_suggestions"

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DUPLICATE = "DUPLICATE"
    MERGED = "MERGED"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    field_type = Column(String(50), nullable=False)  # MOTHER_TONGUE, LOCATION, CASTE
    suggested_value = Column(String(255), nullable=False)
    suggested_label = Column(String(255), nullable=True)
    status = Column(String(20), default="PENDING", nullable=False)
    reviewed_by_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    review_note = Column(Text, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)

    user = relationship("User", foreign_keys=[user_id])
    reviewed_by = relationship("User", foreign_keys=[reviewed_by_id])

    __table_args__ = (Index("ix_field_suggestions_user_type", "user_id", "field_type"),)


# ---------------------------------------------------------------------------
# Taxonomy: education
# ---------------------------------------------------------------------------


class EducationLevel(Base):
    __tablename__ = "education_levels"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    slug = Column(String(100), unique=True, nullable=False)
    label = Column(String(255), nullable=False)
    level = Column(Integer, default=1, nullable=False)
    years_of_education = Column(Integer, default=0, nullable=False)
    tags = Column(JsonType, default=list)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)


class EducationField(Base):
    __tablename__ = "education_fields"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    slug = Column(String(100), unique=True, nullable=False)
    label = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)


# ---------------------------------------------------------------------------
# Taxonomy: languages
# ---------------------------------------------------------------------------


class Language(Base):
    __tablename__ = "languages"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    code = Column(String(20), nullable=True)
    slug = Column(String(100), unique=True, nullable=False)
    label = Column(String(255), nullable=False)
    label_native = Column(String(255), nullable=True)
    is_global = Column(Boolean, default=False, nullable=False)  # offered for every country
    is_system = Column(Boolean, default=False, nullable=False)  # cannot be deleted
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    country_links = relationship("CountryLanguage", back_populates="language", cascade="all, delete-orphan")


class CountryLanguage(Base):
    __tablename__ = "country_languages"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    country_id = Column(UUID(as_uuid=False), ForeignKey("countries.id", ondelete="CASCADE"), nullable=False)
    language_id = Column(UUID(as_uuid=False), ForeignKey("languages.id", ondelete="CASCADE"), nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)

    country = relationship("Country", back_populates="language_links")
    language = relationship("Language", back_populates="country_links")

    __table_args__ = (Index("uq_country_language", "country_id", "language_id", unique=True),)


# ---------------------------------------------------------------------------
# Taxonomy: locations (country -> state/province -> city)
# ---------------------------------------------------------------------------


class Country(Base):
    __tablename__ = "countries"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    code = Column(String(10), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    name_native = Column(String(255), nullable=True)
    phone_code = Column(String(10), nullable=True)
    currency = Column(String(10), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    states = relationship("StateProvince", back_populates="country", cascade="all, delete-orphan")
    language_links = relationship("CountryLanguage", back_populates="country", cascade="all, delete-orphan")


class StateProvince(Base):
    __tablename__ = "state_provinces"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    country_id = Column(UUID(as_uuid=False), ForeignKey("countries.id", ondelete="CASCADE"), nullable=False)
    code = Column(String(20), nullable=True)
    name = Column(String(255), nullable=False)
    name_native = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    country = relationship("Country", back_populates="states")
    cities = relationship("City", back_populates="state_province", cascade="all, delete-orphan")

    __table_args__ = (Index("uq_state_country_name", "country_id", "name", unique=True),)


class City(Base):
    __tablename__ = "cities"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    state_province_id = Column(
        UUID(as_uuid=False), ForeignKey("state_provinces.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(255), nullable=False)
    name_native = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_popular = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    state_province = relationship("StateProvince", back_populates="cities")

    __table_args__ = (Index("uq_city_state_name", "state_province_id", "name", unique=True),)


# ---------------------------------------------------------------------------
# Taxonomy: origins (origin -> ethnicity -> caste)
# ---------------------------------------------------------------------------


class Origin(Base):
    __tablename__ = "origins"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    slug = Column(String(100), unique=True, nullable=False)
    label = Column(String(255), nullable=False)
    label_native = Column(String(255), nullable=True)
    emoji = Column(String(16), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Terminology is data: e.g. "Tribe"/"Sub-tribe" instead of "Ethnicity"/"Caste"
    level1_label = Column(String(100), default="Ethnicity", nullable=False)
    level1_label_plural = Column(String(100), default="Ethnicities", nullable=False)
    level2_label = Column(String(100), default="Caste", nullable=False)
    level2_label_plural = Column(String(100), default="Castes", nullable=False)
    level2_enabled = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    ethnicities = relationship("Ethnicity", back_populates="origin", cascade="all, delete-orphan")


class Ethnicity(Base):
    __tablename__ = "ethnicities"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    origin_id = Column(UUID(as_uuid=False), ForeignKey("origins.id", ondelete="CASCADE"), nullable=False)
    slug = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False)
    label_native = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    origin = relationship("Origin", back_populates="ethnicities")
    castes = relationship("Caste", back_populates="ethnicity", cascade="all, delete-orphan")

    __table_args__ = (Index("uq_ethnicity_origin_slug", "origin_id", "slug", unique=True),)


class Caste(Base):
    __tablename__ = "castes"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    ethnicity_id = Column(UUID(as_uuid=False), ForeignKey("ethnicities.id", ondelete="CASCADE"), nullable=False)
    slug = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False)
    label_native = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_popular = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    ethnicity = relationship("Ethnicity", back_populates="castes")

    __table_args__ = (Index("uq_caste_ethnicity_slug", "ethnicity_id", "slug", unique=True),)


# ---------------------------------------------------------------------------
# Taxonomy: sects (sect -> maslak)
# ---------------------------------------------------------------------------


class Sect(Base):
    __tablename__ = "sects"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    slug = Column(String(100), unique=True, nullable=False)
    label = Column(String(255), nullable=False)
    label_native = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    maslaks = relationship("Maslak", back_populates="sect", cascade="all, delete-orphan")


class Maslak(Base):
    __tablename__ = "maslaks"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    sect_id = Column(UUID(as_uuid=False), ForeignKey("sects.id", ondelete="CASCADE"), nullable=False)
    slug = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False)
    label_native = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=_utcnow)

    sect = relationship("Sect", back_populates="maslaks")

    __table_args__ = (Index("uq_maslak_sect_slug", "sect_id", "slug", unique=True),)


# ---------------------------------------------------------------------------
# Lookup-only tables
# ---------------------------------------------------------------------------


class Height(Base):
    __tablename__ = "heights"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    centimeters = Column(Integer, nullable=False, unique=True)
    label_imperial = Column(String(20), nullable=False)
    label_metric = Column(String(20), nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class IncomeRange(Base):
    __tablename__ = "income_ranges"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    country_id = Column(UUID(as_uuid=False), ForeignKey("countries.id", ondelete="CASCADE"), nullable=True)
    label = Column(String(255), nullable=False)
    currency = Column(String(10), nullable=False, default="PKR")
    period = Column(String(20), nullable=False, default="MONTHLY")
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


def _ref(table: str):
    return Column(UUID(as_uuid=False), ForeignKey(f"{table}.id", ondelete="SET NULL"), nullable=True)


class Profile(Base):
    """A matrimonial profile; a user may manage several (self, son, daughter...)."""

    __tablename__ = "profiles"

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    BANNED = "BANNED"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    user_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Step 1: basic info
    profile_for = Column(String(20), nullable=True)
    gender = Column(String(10), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    marital_status = Column(String(30), nullable=True)
    number_of_children = Column(Integer, default=0, nullable=False)
    children_living_with = Column(String(30), nullable=True)

    # Step 2: origin & background
    origin_id = _ref("origins")
    ethnicity_id = _ref("ethnicities")
    caste_id = _ref("castes")
    custom_caste = Column(String(255), nullable=True)

    # Step 3: location
    country_of_origin_id = _ref("countries")
    country_living_in_id = _ref("countries")
    state_province_id = _ref("state_provinces")
    city_id = _ref("cities")
    visa_status = Column(String(50), nullable=True)
    suggested_location = Column(String(255), nullable=True)

    # Step 4: religion & family
    sect_id = _ref("sects")
    maslak_id = _ref("maslaks")
    religious_belonging = Column(String(50), nullable=True)
    social_status = Column(String(50), nullable=True)
    number_of_brothers = Column(Integer, default=0, nullable=False)
    number_of_sisters = Column(Integer, default=0, nullable=False)
    married_brothers = Column(Integer, default=0, nullable=False)
    married_sisters = Column(Integer, default=0, nullable=False)
    father_occupation = Column(String(255), nullable=True)
    property_ownership = Column(String(50), nullable=True)

    # Step 5: physical attributes
    height_id = _ref("heights")
    complexion = Column(String(30), nullable=True)
    has_disability = Column(Boolean, default=False, nullable=False)
    disability_details = Column(Text, nullable=True)

    # Step 6: education & career
    education_level_id = _ref("education_levels")
    education_field_id = _ref("education_fields")
    education_details = Column(Text, nullable=True)
    occupation_type = Column(String(50), nullable=True)
    occupation_details = Column(Text, nullable=True)
    income_range_id = _ref("income_ranges")
    mother_tongue_id = _ref("languages")
    other_mother_tongue = Column(String(255), nullable=True)

    # Step 7: bio & visibility
    bio = Column(Text, nullable=True)
    origin_audience = Column(String(20), default="SAME_ORIGIN", nullable=False)

    profile_completion = Column(Integer, default=0, nullable=False)

    # Moderation
    moderation_status = Column(String(20), default=PENDING, nullable=False, index=True)
    moderated_at = Column(DateTime(timezone=True), nullable=True)
    moderated_by = Column(UUID(as_uuid=False), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    banned_at = Column(DateTime(timezone=True), nullable=True)
    banned_by = Column(UUID(as_uuid=False), nullable=True)
    ban_reason = Column(Text, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user = relationship("User", back_populates="profiles", foreign_keys=[user_id])
    photos = relationship(
        "Photo", back_populates="profile", cascade="all, delete-orphan", order_by="Photo.sort_order"
    )

    origin = relationship("Origin", foreign_keys=[origin_id])
    ethnicity = relationship("Ethnicity", foreign_keys=[ethnicity_id])
    caste = relationship("Caste", foreign_keys=[caste_id])
    country_of_origin = relationship("Country", foreign_keys=[country_of_origin_id])
    country_living_in = relationship("Country", foreign_keys=[country_living_in_id])
    state_province = relationship("StateProvince", foreign_keys=[state_province_id])
    city = relationship("City", foreign_keys=[city_id])
    sect = relationship("Sect", foreign_keys=[sect_id])
    maslak = relationship("Maslak", foreign_keys=[maslak_id])
    height = relationship("Height", foreign_keys=[height_id])
    education_level = relationship("EducationLevel", foreign_keys=[education_level_id])
    education_field = relationship("EducationField", foreign_keys=[education_field_id])
    income_range = relationship("IncomeRange", foreign_keys=[income_range_id])
    mother_tongue = relationship("Language", foreign_keys=[mother_tongue_id])


class Photo(Base):
    __tablename__ = "photos"

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    id = Column(UUID(as_uuid=False), primary_key=True, default=uuid4_str)
    profile_id = Column(UUID(as_uuid=False), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    url = Column(String(1000), nullable=False)
    thumbnail_url = Column(String(1000), nullable=True)
    is_primary = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default=PENDING, nullable=False)
    rejection_reason = Column(Text, nullable=True)
    moderated_at = Column(DateTime(timezone=True), nullable=True)
    moderated_by = Column(UUID(as_uuid=False), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), default=_utcnow)

    profile = relationship("Profile", back_populates="photos")

    __table_args__ = (Index("ix_photos_profile_id", "profile_id"),)
