from .email import EmailServiceError, EmailConfigError, get_email_provider

__all__ = [
    "EmailServiceError",
    "EmailConfigError",
    "get_email_provider",
]
