"""The 7-step profile creation wizard."""

import logging
from typing import Any

from nikah_api.profile_fields import WIZARD_STEPS, first_incomplete_step, missing_fields

from nikah_console.client import ApiClient, ApiError
from nikah_console.lookups import Lookups

logger = logging.getLogger(__name__)

PROFILE_PATH = "/api/profile"

STEP_FIELDS: dict[int, tuple[str, ...]] = {
    1: ("profileFor", "gender", "dateOfBirth", "maritalStatus", "numberOfChildren", "childrenLivingWith"),
    2: ("originId", "ethnicityId", "casteId", "customCaste"),
    3: ("countryOfOriginId", "countryLivingInId", "stateProvinceId", "cityId", "visaStatus", "suggestedLocation"),
    4: (
        "sectId",
        "maslakId",
        "religiousBelonging",
        "socialStatus",
        "numberOfBrothers",
        "numberOfSisters",
        "marriedBrothers",
        "marriedSisters",
        "fatherOccupation",
        "propertyOwnership",
    ),
    5: ("heightId", "complexion", "hasDisability", "disabilityDetails"),
    6: (
        "educationLevelId",
        "educationFieldId",
        "educationDetails",
        "occupationType",
        "occupationDetails",
        "incomeRangeId",
        "motherTongueId",
        "otherMotherTongue",
    ),
    7: ("bio", "originAudience"),
}

ALL_FIELDS = tuple(name for step in sorted(STEP_FIELDS) for name in STEP_FIELDS[step])
LAST_STEP = len(WIZARD_STEPS)


class ProfileWizard:
    def __init__(self, client: ApiClient):
        self.client = client
        self.lookups = Lookups(client)
        self.values: dict[str, Any] = {name: None for name in ALL_FIELDS}
        self.step = 1
        self.profile_id: str | None = None
        self.completion = 0
        self.saving = False
        self.loading = False
        self.error: str | None = None
        self.message: str | None = None
        self.finished = False

    @property
    def step_title(self) -> str:
        return WIZARD_STEPS[self.step - 1]

    @property
    def missing(self) -> list[str]:
        return missing_fields(self.step, self.values)

    @property
    def can_continue(self) -> bool:
        return not self.saving and not self.missing

    async def start(self) -> None:
        self.loading = True
        try:
            await self.lookups.load_roots()
        finally:
            self.loading = False

    async def resume(self) -> bool:
        """Pick up the latest unfinished profile, at its first incomplete step."""
        await self.start()
        try:
            body = await self.client.get(PROFILE_PATH)
        except ApiError as e:
            self.error = e.message
            return False
        profile = body.get("profile")
        if not profile:
            return False
        self.profile_id = profile["id"]
        self.completion = profile.get("profileCompletion", 0)
        for name in ALL_FIELDS:
            self.values[name] = profile.get(name)
        await self.lookups.load_dependents(self.values)
        self.step = first_incomplete_step(self.values)
        return True

    async def set_field(self, name: str, value: Any) -> list[str]:
        if name not in self.values:
            raise KeyError(name)
        previous = self.values[name]
        self.values[name] = value
        if value == previous:
            return []
        return await self.lookups.on_change(name, self.values)

    def back(self) -> None:
        if self.step > 1:
            self.step -= 1
            self.error = None

    def payload(self) -> dict[str, Any]:
        if self.profile_id is None:
            return {name: self.values[name] for name in STEP_FIELDS[1]}
        return {"profileId": self.profile_id, "step": self.step, **self.values}

    async def save_and_continue(self) -> bool:
        if not self.can_continue:
            return False
        self.saving = True
        self.error = None
        try:
            if self.profile_id is None:
                body = await self.client.post(PROFILE_PATH, json=self.payload())
            else:
                body = await self.client.patch(PROFILE_PATH, json=self.payload())
        except ApiError as e:
            logger.warning("Saving wizard step %s failed: %s", self.step, e.message)
            self.error = e.message
            return False
        finally:
            self.saving = False

        self.profile_id = body.get("profileId", self.profile_id)
        self.completion = body.get("profileCompletion", self.completion)
        self.message = body.get("message")
        if self.step < LAST_STEP:
            self.step += 1
        else:
            self.finished = True
        return True
