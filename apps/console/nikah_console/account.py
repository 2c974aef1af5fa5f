"""Self-service account screens: profile details, password change and phone verification."""

import logging
import re
from typing import Any

from nikah_console.client import ApiClient, ApiError

logger = logging.getLogger(__name__)

ACCOUNT_PATH = "/api/auth/account"
PASSWORD_PATH = "/api/auth/change-password"
PHONE_VERIFICATION_PATH = "/api/auth/phone-verification"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_OTP_RE = re.compile(r"^\d{6}$")

STRENGTH_CHECKS = {
    "length": lambda p: len(p) >= 8,
    "uppercase": lambda p: re.search(r"[A-Z]", p) is not None,
    "lowercase": lambda p: re.search(r"[a-z]", p) is not None,
    "number": lambda p: re.search(r"[0-9]", p) is not None,
    "special": lambda p: re.search(r"[!@#$%^&*(),.?\":{}|<>]", p) is not None,
}


def password_strength(password: str) -> tuple[int, str]:
    """Score 0-5 (one point per check passed) and its label."""
    score = sum(1 for check in STRENGTH_CHECKS.values() if check(password))
    if score == 0:
        label = ""
    elif score <= 2:
        label = "Weak"
    elif score == 3:
        label = "Fair"
    elif score == 4:
        label = "Good"
    else:
        label = "Strong"
    return score, label


class AccountSettings:
    def __init__(self, client: ApiClient):
        self.client = client
        self.account: dict[str, Any] = {}
        self.name = ""
        self.email = ""
        self.phone = ""
        self.saving = False
        self.error: str | None = None
        self.success: str | None = None

    @property
    def phone_locked(self) -> bool:
        return (self.account.get("phoneCooldownDays") or 0) > 0

    def _adopt(self, account: dict[str, Any]) -> None:
        self.account = account
        self.name = account.get("name") or ""
        self.email = account.get("email") or ""
        self.phone = account.get("phone") or ""

    async def load(self) -> None:
        self.error = None
        try:
            self._adopt(await self.client.get(ACCOUNT_PATH))
        except ApiError as e:
            self.error = e.message

    def validate(self) -> str | None:
        if not self.name.strip():
            return "Name is required"
        if not _EMAIL_RE.match(self.email.strip()):
            return "Valid email is required"
        return None

    async def save(self) -> bool:
        self.success = None
        self.error = self.validate()
        if self.error or self.saving:
            return False
        payload = {"name": self.name.strip(), "email": self.email.strip()}
        if self.phone.strip() != (self.account.get("phone") or ""):
            payload["phone"] = self.phone.strip()
        self.saving = True
        try:
            body = await self.client.patch(ACCOUNT_PATH, json=payload)
        except ApiError as e:
            logger.warning("Account update failed: %s", e.message)
            self.error = e.message
            return False
        finally:
            self.saving = False
        self._adopt(body.get("user") or {})
        self.success = body.get("message")
        return True


class ChangePassword:
    def __init__(self, client: ApiClient):
        self.client = client
        self.current_password = ""
        self.new_password = ""
        self.confirm_password = ""
        self.saving = False
        self.error: str | None = None
        self.success: str | None = None

    @property
    def strength(self) -> tuple[int, str]:
        return password_strength(self.new_password)

    def validate(self) -> str | None:
        if not self.current_password:
            return "Please enter your current password"
        if not self.new_password:
            return "Please enter a new password"
        if len(self.new_password) < 8:
            return "New password must be at least 8 characters long"
        if self.strength[0] < 3:
            return "Please choose a stronger password"
        if self.new_password != self.confirm_password:
            return "New passwords do not match"
        if self.current_password == self.new_password:
            return "New password must be different from current password"
        return None

    async def submit(self) -> bool:
        self.success = None
        self.error = self.validate()
        if self.error or self.saving:
            return False
        self.saving = True
        try:
            body = await self.client.post(
                PASSWORD_PATH,
                json={"currentPassword": self.current_password, "newPassword": self.new_password},
            )
        except ApiError as e:
            self.error = e.message or "Failed to change password"
            return False
        finally:
            self.saving = False
        self.success = body.get("message")
        self.current_password = self.new_password = self.confirm_password = ""
        return True


class PhoneVerification:
    """Request a code (an admin phones it through) and then enter it."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.status: dict[str, Any] = {}
        self.otp = ""
        self.busy = False
        self.error: str | None = None
        self.message: str | None = None

    @property
    def verified(self) -> bool:
        return bool(self.status.get("phoneVerified"))

    @property
    def pending(self) -> dict[str, Any] | None:
        return self.status.get("pendingVerification")

    async def load(self) -> None:
        self.error = None
        try:
            self.status = await self.client.get(PHONE_VERIFICATION_PATH)
        except ApiError as e:
            self.error = e.message

    async def _call(self, method: str, json: Any = None) -> bool:
        if self.busy:
            return False
        self.busy = True
        self.error = None
        self.message = None
        try:
            body = await self.client.request(method, PHONE_VERIFICATION_PATH, json=json)
        except ApiError as e:
            logger.warning("Phone verification %s failed: %s", method, e.message)
            self.error = e.message
            return False
        finally:
            self.busy = False
        self.message = body.get("message")
        await self.load()
        return True

    async def request_code(self) -> bool:
        return await self._call("POST")

    async def verify(self) -> bool:
        otp = self.otp.strip()
        if not _OTP_RE.match(otp):
            self.error = "Please enter a valid 6-digit code"
            return False
        ok = await self._call("PUT", json={"otp": otp})
        if ok:
            self.otp = ""
        return ok
