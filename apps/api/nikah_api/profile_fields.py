"""Profile wizard steps and the fields each step requires.

Field names are the camelCase wire names. The API computes completion from
these; the console wizard uses them to gate Save & Continue. Keep this module
free of third-party imports so both sides can load it.
"""

from typing import Any, Mapping

WIZARD_STEPS = (
    "Basic Info",
    "Origin & Background",
    "Location",
    "Religion & Family",
    "Physical Attributes",
    "Education & Career",
    "About Me",
)

STEP_REQUIRED_FIELDS: dict[int, tuple[str, ...]] = {
    1: ("profileFor", "gender", "dateOfBirth", "maritalStatus"),
    2: ("originId", "ethnicityId"),
    3: ("countryOfOriginId", "countryLivingInId", "stateProvinceId", "cityId"),
    4: ("sectId", "religiousBelonging", "socialStatus"),
    5: ("heightId", "complexion"),
    6: ("educationLevelId", "educationFieldId", "occupationType", "incomeRangeId"),
    7: ("bio",),
}

COMPLETION_FIELDS: tuple[str, ...] = tuple(
    name for step in sorted(STEP_REQUIRED_FIELDS) for name in STEP_REQUIRED_FIELDS[step]
)

# Step 1 creates the profile; the server starts it at this completion.
INITIAL_COMPLETION = 15

# Fields a moderator may remap on the profile edit screen.
ADMIN_EDITABLE_FIELDS = (
    "countryOfOriginId",
    "countryLivingInId",
    "stateProvinceId",
    "cityId",
    "visaStatus",
    "suggestedLocation",
    "originId",
    "ethnicityId",
    "casteId",
    "customCaste",
    "educationLevelId",
    "educationFieldId",
    "educationDetails",
    "motherTongueId",
    "otherMotherTongue",
)


def is_filled(value: Any) -> bool:
    return value is not None and value != ""


def missing_fields(step: int, values: Mapping[str, Any]) -> list[str]:
    return [name for name in STEP_REQUIRED_FIELDS[step] if not is_filled(values.get(name))]


def completion_percent(values: Mapping[str, Any]) -> int:
    filled = sum(1 for name in COMPLETION_FIELDS if is_filled(values.get(name)))
    return round(filled * 100 / len(COMPLETION_FIELDS))


def first_incomplete_step(values: Mapping[str, Any]) -> int:
    """Step to resume at: the first with a missing required field, else the last."""
    for step in sorted(STEP_REQUIRED_FIELDS):
        if missing_fields(step, values):
            return step
    return len(WIZARD_STEPS)
