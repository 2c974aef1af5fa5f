"""NikahFirst API: taxonomy admin, profile moderation, profile wizard and account endpoints."""
