import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from nikah_api.schemas.base import ApiModel


def _check_password(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(value.encode("utf-8")) > 72:
        raise ValueError("Password is too long")
    if not re.search(r"[A-Za-z]", value) or not re.search(r"\d", value):
        raise ValueError("Password must include a letter and a number")
    return value


class RegisterRequest(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str
    phone: str | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


class LoginRequest(ApiModel):
    email: EmailStr
    password: str


class TokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class AccountResponse(ApiModel):
    id: str
    name: str | None = None
    email: str
    phone: str | None = None
    phone_changed_at: datetime | None = None
    role: str
    status: str
    email_verified: bool = False
    phone_verified: bool = False
    created_at: datetime | None = None
    last_login_at: datetime | None = None
    phone_cooldown_days: int = 0
    phone_cooldown_ends_at: datetime | None = None


class AccountUpdate(ApiModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class AccountUpdateResult(ApiModel):
    success: bool = True
    message: str
    user: AccountResponse
    phone_changed: bool


class ChangePasswordRequest(ApiModel):
    current_password: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


class MessageResponse(ApiModel):
    success: bool = True
    message: str


# -- phone verification (self-service) ---------------------------------------


class PendingVerification(ApiModel):
    id: str
    phone: str
    expires_at: datetime
    requested_at: datetime


class PhoneVerificationStatus(ApiModel):
    phone: str | None = None
    phone_verified: bool = False
    pending_verification: PendingVerification | None = None


class PhoneVerificationRequested(ApiModel):
    success: bool = True
    message: str
    verification: PendingVerification


class VerifyOtpRequest(ApiModel):
    otp: str = ""


# -- phone verification (admin queue) ----------------------------------------


class VerificationUser(ApiModel):
    id: str
    name: str | None = None
    email: str
    phone: str | None = None
    phone_verified: bool = False
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class PendingVerificationRow(ApiModel):
    id: str
    phone: str
    otp: str
    attempts: int = 0
    expires_at: datetime
    requested_at: datetime
    user: VerificationUser


class UserVerificationRow(VerificationUser):
    pending_verification: PendingVerification | None = None


class VerificationPagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int


class VerificationPage(ApiModel):
    data: list[PendingVerificationRow | UserVerificationRow]
    pagination: VerificationPagination


class AdminVerifyRequest(ApiModel):
    action: str
    verification_id: str | None = None
    user_id: str | None = None


class ReminderRequest(ApiModel):
    action: str
    user_ids: list[str] = []


class ReminderResult(ApiModel):
    success: bool = True
    message: str
    sent: int
    failed: int


class PendingCount(ApiModel):
    count: int
