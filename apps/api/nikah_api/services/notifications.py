"""Outbound email for phone verification. Failures are logged, never raised to the caller."""

import logging

from nikah_api.core.config import get_settings
from nikah_api.db.models import User
from nikah_api.providers import get_email_provider, EmailConfigError, EmailServiceError

logger = logging.getLogger(__name__)

REMINDER_SUBJECT = "Please Verify Your Phone Number - NikahFirst"


def _display(user: User) -> str:
    return user.name or "User"


async def _send(to_email: str, subject: str, text: str, to_name: str | None = None, category: str | None = None) -> bool:
    try:
        provider = get_email_provider()
    except EmailConfigError:
        logger.info("Email skipped (%s); SendGrid not configured.", subject)
        return False
    try:
        await provider.send_email(to_email, subject, text, to_name=to_name, category=category)
    except EmailServiceError:
        logger.warning("Failed to send email '%s' to %s", subject, to_email)
        return False
    return True


async def notify_phone_verification_request(user: User, phone: str, otp: str) -> bool:
    """Admins receive the code and call the user to read it out."""
    admin_email = get_settings().admin_notification_email
    if not admin_email:
        logger.info("Phone verification request for user %s; no admin notification email set.", user.id)
        return False
    text = "\n".join(
        [
            "A user has requested phone verification.",
            f"User: {user.name or 'Not provided'}",
            f"Email: {user.email}",
            f"Phone: {phone}",
            f"Verification code: {otp}",
            "",
            "Call the user and share this code so they can complete verification.",
            f"User ID: {user.id}",
        ]
    )
    return await _send(
        admin_email,
        f"[NikahFirst] Phone Verification Request - {_display(user)}",
        text,
        category="phone-verification",
    )


async def notify_phone_update(user: User, old_phone: str | None, new_phone: str | None) -> bool:
    admin_email = get_settings().admin_notification_email
    if not admin_email:
        return False
    text = "\n".join(
        [
            "A user has updated their phone number.",
            f"User: {user.name or 'Not provided'}",
            f"Email: {user.email}",
            f"Previous Phone: {old_phone or 'Not set'}",
            f"New Phone: {new_phone or 'Removed'}",
            "",
            "Action Required: this phone number requires manual verification.",
            f"User ID: {user.id}",
        ]
    )
    return await _send(
        admin_email,
        f"[NikahFirst] Phone Number Updated - {_display(user)}",
        text,
        category="phone-update",
    )


async def send_verification_reminder(user: User) -> bool:
    text = "\n\n".join(
        [
            f"Dear {_display(user)},",
            f"We noticed that your phone number ({user.phone}) has not been verified yet.",
            "To complete your verification:\n"
            "1. Log in to your NikahFirst account\n"
            "2. Go to Settings & Privacy\n"
            '3. Click "Request Verification Code"\n'
            f"4. Our team will contact you at {user.phone} to provide your verification code",
            "Verifying your phone number helps ensure the security and authenticity of profiles on our platform.",
            "Best regards,\nThe NikahFirst Team",
        ]
    )
    return await _send(user.email, REMINDER_SUBJECT, text, to_name=user.name, category="verification-reminder")
