"""Taxonomy domains as data: record kinds, their form fields and how levels nest."""

from dataclasses import dataclass, field
from typing import Any, Mapping

BASE = "/api/admin/global-settings"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str = "text"  # text | textarea | number | bool | select
    required: bool = False
    min: int | None = None
    max: int | None = None
    default: Any = ""
    options: tuple[str, ...] = ()
    # Shown only while this boolean field is true
    visible_when: str | None = None


@dataclass(frozen=True)
class RecordSchema:
    """One record kind: endpoint, response keys and the fields its form edits."""

    kind: str
    display: str
    plural: str
    path: str
    fields: tuple[FieldSpec, ...]
    label_field: str = "label"
    # Create payload key carrying the parent id (child kinds only)
    parent_field: str | None = None
    # Query param for listing children of one parent
    parent_query: str | None = None

    @property
    def endpoint(self) -> str:
        return f"{BASE}/{self.path}"

    @property
    def list_key(self) -> str:
        return self.plural

    def empty(self) -> dict[str, Any]:
        return {f.name: f.default for f in self.fields}

    def values_from(self, record: Mapping[str, Any]) -> dict[str, Any]:
        values = self.empty()
        for f in self.fields:
            if record.get(f.name) is not None:
                values[f.name] = record[f.name]
        return values

    def label_of(self, record: Mapping[str, Any]) -> str:
        return str(record.get(self.label_field) or "")


@dataclass(frozen=True)
class LevelSpec:
    schema: RecordSchema
    reorder_type: str | None
    # (ancestor level, boolean field) that must be true on the selected
    # ancestor for this level to be reachable
    requires: tuple[int, str] | None = None


@dataclass(frozen=True)
class DomainSpec:
    key: str
    title: str
    levels: tuple[LevelSpec, ...]
    # Flat domains show independent lists (education); hierarchical ones nest
    hierarchical: bool = True

    @property
    def reorder_endpoint(self) -> str:
        return f"{BASE}/{self.key}/reorder"

    def level(self, index: int) -> LevelSpec:
        return self.levels[index]

    def descendant_labels(self, level: int, record: Mapping[str, Any], ancestors: list[Mapping | None]) -> list[str]:
        """Lowercased plural names of the kinds a delete at ``level`` removes too."""
        if not self.hierarchical:
            return []
        if self.key == "origins":
            return _origin_descendants(level, record, ancestors)
        return [spec.schema.plural for spec in self.levels[level + 1 :]]


def _origin_descendants(level: int, record: Mapping[str, Any], ancestors: list[Mapping | None]) -> list[str]:
    if level == 0:
        labels = [str(record.get("level1LabelPlural") or "ethnicities").lower()]
        if record.get("level2Enabled", True):
            labels.append(str(record.get("level2LabelPlural") or "castes").lower())
        return labels
    if level == 1:
        origin = ancestors[0] if ancestors else None
        if origin and origin.get("level2Enabled", True):
            return [str(origin.get("level2LabelPlural") or "castes").lower()]
    return []


def _text(name: str, label: str, required: bool = False, **kw) -> FieldSpec:
    return FieldSpec(name, label, required=required, **kw)


def _number(name: str, label: str, min: int | None = 0, max: int | None = None, default: int = 0) -> FieldSpec:
    return FieldSpec(name, label, kind="number", min=min, max=max, default=default)


def _flag(name: str, label: str, default: bool = False, **kw) -> FieldSpec:
    return FieldSpec(name, label, kind="bool", default=default, **kw)


SORT_ORDER = _number("sortOrder", "Sort order")
IS_ACTIVE = _flag("isActive", "Active", default=True)
SLUG = _text("slug", "Slug", required=True)
LABEL = _text("label", "Label", required=True)
LABEL_NATIVE = _text("labelNative", "Native label")
NAME = _text("name", "Name", required=True)
NAME_NATIVE = _text("nameNative", "Native name")


EDUCATION_LEVEL = RecordSchema(
    kind="level",
    display="Education level",
    plural="levels",
    path="education/levels",
    fields=(
        SLUG,
        LABEL,
        _number("level", "Level", min=1, max=20, default=1),
        _number("yearsOfEducation", "Years of education", min=0, max=30),
        SORT_ORDER,
        IS_ACTIVE,
    ),
)

EDUCATION_FIELD = RecordSchema(
    kind="field",
    display="Education field",
    plural="fields",
    path="education/fields",
    fields=(SLUG, LABEL, _text("category", "Category"), SORT_ORDER, IS_ACTIVE),
)

LANGUAGE = RecordSchema(
    kind="language",
    display="Language",
    plural="languages",
    path="languages",
    fields=(
        _text("code", "ISO code"),
        SLUG,
        LABEL,
        LABEL_NATIVE,
        _flag("isGlobal", "Global"),
        SORT_ORDER,
        IS_ACTIVE,
    ),
)

COUNTRY = RecordSchema(
    kind="country",
    display="Country",
    plural="countries",
    path="locations/countries",
    label_field="name",
    fields=(
        _text("code", "Code", required=True),
        NAME,
        NAME_NATIVE,
        _text("phoneCode", "Phone code"),
        _text("currency", "Currency"),
        SORT_ORDER,
        IS_ACTIVE,
    ),
)

STATE = RecordSchema(
    kind="state",
    display="State",
    plural="states",
    path="locations/states",
    label_field="name",
    parent_field="countryId",
    parent_query="countryId",
    fields=(_text("code", "Code"), NAME, NAME_NATIVE, SORT_ORDER, IS_ACTIVE),
)

CITY = RecordSchema(
    kind="city",
    display="City",
    plural="cities",
    path="locations/cities",
    label_field="name",
    parent_field="stateProvinceId",
    parent_query="stateId",
    fields=(NAME, NAME_NATIVE, _flag("isPopular", "Popular"), SORT_ORDER, IS_ACTIVE),
)

ORIGIN = RecordSchema(
    kind="origin",
    display="Origin",
    plural="origins",
    path="origins",
    fields=(
        SLUG,
        LABEL,
        LABEL_NATIVE,
        _text("emoji", "Emoji"),
        _text("description", "Description", kind="textarea"),
        _text("level1Label", "Level 1 label", required=True, default="Ethnicity"),
        _text("level1LabelPlural", "Level 1 plural", required=True, default="Ethnicities"),
        _flag("level2Enabled", "Enable level 2", default=True),
        _text("level2Label", "Level 2 label", default="Caste", visible_when="level2Enabled"),
        _text("level2LabelPlural", "Level 2 plural", default="Castes", visible_when="level2Enabled"),
        SORT_ORDER,
        IS_ACTIVE,
    ),
)

ETHNICITY = RecordSchema(
    kind="ethnicity",
    display="Ethnicity",
    plural="ethnicities",
    path="origins/ethnicities",
    parent_field="originId",
    parent_query="originId",
    fields=(SLUG, LABEL, LABEL_NATIVE, SORT_ORDER, IS_ACTIVE),
)

CASTE = RecordSchema(
    kind="caste",
    display="Caste",
    plural="castes",
    path="origins/castes",
    parent_field="ethnicityId",
    parent_query="ethnicityId",
    fields=(SLUG, LABEL, LABEL_NATIVE, _flag("isPopular", "Popular"), SORT_ORDER, IS_ACTIVE),
)

SECT = RecordSchema(
    kind="sect",
    display="Sect",
    plural="sects",
    path="sects",
    fields=(SLUG, LABEL, LABEL_NATIVE, _text("description", "Description", kind="textarea"), SORT_ORDER, IS_ACTIVE),
)

MASLAK = RecordSchema(
    kind="maslak",
    display="Maslak",
    plural="maslaks",
    path="sects/maslaks",
    parent_field="sectId",
    parent_query="sectId",
    fields=(SLUG, LABEL, LABEL_NATIVE, _text("description", "Description", kind="textarea"), SORT_ORDER, IS_ACTIVE),
)


EDUCATION = DomainSpec(
    key="education",
    title="Education",
    hierarchical=False,
    levels=(LevelSpec(EDUCATION_LEVEL, "levels"), LevelSpec(EDUCATION_FIELD, "fields")),
)

LANGUAGES = DomainSpec(key="languages", title="Languages", levels=(LevelSpec(LANGUAGE, None),))

LOCATIONS = DomainSpec(
    key="locations",
    title="Locations",
    levels=(LevelSpec(COUNTRY, "countries"), LevelSpec(STATE, "states"), LevelSpec(CITY, "cities")),
)

ORIGINS = DomainSpec(
    key="origins",
    title="Origins",
    levels=(
        LevelSpec(ORIGIN, "origins"),
        LevelSpec(ETHNICITY, "ethnicities"),
        LevelSpec(CASTE, "castes", requires=(0, "level2Enabled")),
    ),
)

SECTS = DomainSpec(key="sects", title="Sects", levels=(LevelSpec(SECT, "sects"), LevelSpec(MASLAK, "maslaks")))

DOMAINS: dict[str, DomainSpec] = {d.key: d for d in (EDUCATION, LANGUAGES, LOCATIONS, ORIGINS, SECTS)}
