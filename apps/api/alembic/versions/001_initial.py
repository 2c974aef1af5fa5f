"""Initial schema: users, phone verification, taxonomy trees, lookups, profiles, photos.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.UUID(), primary_key=True)


def _fk(name: str, table: str, ondelete: str = "CASCADE", nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.UUID(), sa.ForeignKey(f"{table}.id", ondelete=ondelete), nullable=nullable)


def _ordering() -> list[sa.Column]:
    return [
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    ]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("phone_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("phone_changed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role", sa.String(30), nullable=False, server_default="USER"),
        sa.Column("status", sa.String(30), nullable=False, server_default="ACTIVE"),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_phone", "users", ["phone"])

    op.create_table(
        "phone_verifications",
        _id(),
        _fk("user_id", "users"),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("otp", sa.String(6), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verified_by", sa.UUID(), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_phone_verifications_user_pending", "phone_verifications", ["user_id", "verified"])

    op.create_table(
        "field_suggestions",
        _id(),
        _fk("user_id", "users"),
        sa.Column("field_type", sa.String(50), nullable=False),
        sa.Column("suggested_value", sa.String(255), nullable=False),
        sa.Column("suggested_label", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        _fk("reviewed_by_id", "users", ondelete="SET NULL", nullable=True),
        sa.Column("review_note", sa.Text(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_field_suggestions_user_type", "field_suggestions", ["user_id", "field_type"])

    # Education
    op.create_table(
        "education_levels",
        _id(),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("years_of_education", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("tags", postgresql.JSONB(), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_table(
        "education_fields",
        _id(),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        *_ordering(),
        *_timestamps(),
    )

    # Locations
    op.create_table(
        "countries",
        _id(),
        sa.Column("code", sa.String(10), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_native", sa.String(255), nullable=True),
        sa.Column("phone_code", sa.String(10), nullable=True),
        sa.Column("currency", sa.String(10), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_table(
        "state_provinces",
        _id(),
        _fk("country_id", "countries"),
        sa.Column("code", sa.String(20), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_native", sa.String(255), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_index("uq_state_country_name", "state_provinces", ["country_id", "name"], unique=True)
    op.create_table(
        "cities",
        _id(),
        _fk("state_province_id", "state_provinces"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_native", sa.String(255), nullable=True),
        sa.Column("is_popular", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_ordering(),
        *_timestamps(),
    )
    op.create_index("uq_city_state_name", "cities", ["state_province_id", "name"], unique=True)

    # Languages
    op.create_table(
        "languages",
        _id(),
        sa.Column("code", sa.String(20), nullable=True),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("label_native", sa.String(255), nullable=True),
        sa.Column("is_global", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_ordering(),
        *_timestamps(),
    )
    op.create_table(
        "country_languages",
        _id(),
        _fk("country_id", "countries"),
        _fk("language_id", "languages"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("uq_country_language", "country_languages", ["country_id", "language_id"], unique=True)

    # Origins
    op.create_table(
        "origins",
        _id(),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("label_native", sa.String(255), nullable=True),
        sa.Column("emoji", sa.String(16), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("level1_label", sa.String(100), nullable=False, server_default="Ethnicity"),
        sa.Column("level1_label_plural", sa.String(100), nullable=False, server_default="Ethnicities"),
        sa.Column("level2_label", sa.String(100), nullable=False, server_default="Caste"),
        sa.Column("level2_label_plural", sa.String(100), nullable=False, server_default="Castes"),
        sa.Column("level2_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_ordering(),
        *_timestamps(),
    )
    op.create_table(
        "ethnicities",
        _id(),
        _fk("origin_id", "origins"),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("label_native", sa.String(255), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_index("uq_ethnicity_origin_slug", "ethnicities", ["origin_id", "slug"], unique=True)
    op.create_table(
        "castes",
        _id(),
        _fk("ethnicity_id", "ethnicities"),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("label_native", sa.String(255), nullable=True),
        sa.Column("is_popular", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_ordering(),
        *_timestamps(),
    )
    op.create_index("uq_caste_ethnicity_slug", "castes", ["ethnicity_id", "slug"], unique=True)

    # Sects
    op.create_table(
        "sects",
        _id(),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("label_native", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_table(
        "maslaks",
        _id(),
        _fk("sect_id", "sects"),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("label_native", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_index("uq_maslak_sect_slug", "maslaks", ["sect_id", "slug"], unique=True)

    # Lookup-only
    op.create_table(
        "heights",
        _id(),
        sa.Column("centimeters", sa.Integer(), nullable=False, unique=True),
        sa.Column("label_imperial", sa.String(20), nullable=False),
        sa.Column("label_metric", sa.String(20), nullable=False),
        *_ordering(),
    )
    op.create_table(
        "income_ranges",
        _id(),
        _fk("country_id", "countries", nullable=True),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False, server_default="PKR"),
        sa.Column("period", sa.String(20), nullable=False, server_default="MONTHLY"),
        *_ordering(),
    )

    # Profiles
    op.create_table(
        "profiles",
        _id(),
        _fk("user_id", "users"),
        sa.Column("profile_for", sa.String(20), nullable=True),
        sa.Column("gender", sa.String(10), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("marital_status", sa.String(30), nullable=True),
        sa.Column("number_of_children", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("children_living_with", sa.String(30), nullable=True),
        _fk("origin_id", "origins", "SET NULL", True),
        _fk("ethnicity_id", "ethnicities", "SET NULL", True),
        _fk("caste_id", "castes", "SET NULL", True),
        sa.Column("custom_caste", sa.String(255), nullable=True),
        _fk("country_of_origin_id", "countries", "SET NULL", True),
        _fk("country_living_in_id", "countries", "SET NULL", True),
        _fk("state_province_id", "state_provinces", "SET NULL", True),
        _fk("city_id", "cities", "SET NULL", True),
        sa.Column("visa_status", sa.String(50), nullable=True),
        sa.Column("suggested_location", sa.String(255), nullable=True),
        _fk("sect_id", "sects", "SET NULL", True),
        _fk("maslak_id", "maslaks", "SET NULL", True),
        sa.Column("religious_belonging", sa.String(50), nullable=True),
        sa.Column("social_status", sa.String(50), nullable=True),
        sa.Column("number_of_brothers", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("number_of_sisters", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("married_brothers", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("married_sisters", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("father_occupation", sa.String(255), nullable=True),
        sa.Column("property_ownership", sa.String(50), nullable=True),
        _fk("height_id", "heights", "SET NULL", True),
        sa.Column("complexion", sa.String(30), nullable=True),
        sa.Column("has_disability", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("disability_details", sa.Text(), nullable=True),
        _fk("education_level_id", "education_levels", "SET NULL", True),
        _fk("education_field_id", "education_fields", "SET NULL", True),
        sa.Column("education_details", sa.Text(), nullable=True),
        sa.Column("occupation_type", sa.String(50), nullable=True),
        sa.Column("occupation_details", sa.Text(), nullable=True),
        _fk("income_range_id", "income_ranges", "SET NULL", True),
        _fk("mother_tongue_id", "languages", "SET NULL", True),
        sa.Column("other_mother_tongue", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("origin_audience", sa.String(20), nullable=False, server_default="SAME_ORIGIN"),
        sa.Column("profile_completion", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("moderation_status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("moderated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("moderated_by", sa.UUID(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("banned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("banned_by", sa.UUID(), nullable=True),
        sa.Column("ban_reason", sa.Text(), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_profiles_moderation_status", "profiles", ["moderation_status"])
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"])

    op.create_table(
        "photos",
        _id(),
        _fk("profile_id", "profiles"),
        sa.Column("url", sa.String(1000), nullable=False),
        sa.Column("thumbnail_url", sa.String(1000), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("moderated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("moderated_by", sa.UUID(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_photos_profile_id", "photos", ["profile_id"])


def downgrade() -> None:
    for table in (
        "photos",
        "profiles",
        "income_ranges",
        "heights",
        "maslaks",
        "sects",
        "castes",
        "ethnicities",
        "origins",
        "country_languages",
        "languages",
        "cities",
        "state_provinces",
        "countries",
        "education_fields",
        "education_levels",
        "field_suggestions",
        "phone_verifications",
        "users",
    ):
        op.drop_table(table)
