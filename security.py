#!/usr/bin/env python3
"""Credential redaction for teamigrate log output."""

import re
from typing import List, Tuple


class SecurityValidator:
    """Sanitization helpers applied to everything the logger prints."""

    # (pattern, replacement) pairs, applied in order
    REDACTIONS: List[Tuple[str, str]] = [
        (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
        (r"\bbearer\s+[^\s]+", "Bearer [REDACTED]"),  # Authorization header values
        (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),  # Token assignments
        (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),  # Password assignments
        (r"\bgithub_pat_[A-Za-z0-9_]{20,}", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained PATs
        (r"\bgh[pousr]_[A-Za-z0-9]{20,}\b", "[GITHUB_TOKEN_REDACTED]"),  # Classic GitHub tokens
    ]

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        sanitized = str(message)
        for pattern, replacement in cls.REDACTIONS:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized

    @staticmethod
    def mask_secret(secret: str) -> str:
        """Return a printable placeholder that only tells whether a secret is set."""
        return "<set>" if secret else "<empty>"
