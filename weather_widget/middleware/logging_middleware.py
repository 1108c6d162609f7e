"""Logging helpers with sensitive data redaction."""

import re

# Query parameters never written to logs
SENSITIVE_PARAMS = [
    "apikey",
    "api_key",
    "token",
    "password",
    "secret",
    "access_token",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"([?&]){param}=([^&\s\"]+)"
        redacted = re.sub(pattern, rf"\g<1>{param}=***REDACTED***", redacted)
    return redacted
