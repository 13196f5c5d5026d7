"""Helpers for keeping PII and secrets out of log lines."""

MASKED = "***"


def mask_value(value):
    """Mask an email (keep domain) or a long token (keep both ends)."""
    if not isinstance(value, str):
        return value
    if "@" in value:
        local, _, domain = value.partition("@")
        return f"{local[:2]}{MASKED}@{domain}" if local else f"{MASKED}@{domain}"
    if len(value) > 12:
        return f"{value[:4]}...{value[-4:]}"
    return MASKED
