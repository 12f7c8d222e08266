"""
Custom validators for the application
"""
from typing import Iterable, Optional
import os
import re

from vidtube.core.errors import ValidationError

_ID_PATTERN = re.compile(r'^[0-9a-f]{32}$')


def is_valid_id(value: Optional[str]) -> bool:
    """Identifiers are 32 lowercase hex characters"""
    return bool(value) and bool(_ID_PATTERN.match(value))


def validate_id(value: Optional[str], label: str) -> str:
    if not is_valid_id(value):
        raise ValidationError(f"Invalid {label} id")
    return value


def require_text(value: Optional[str], label: str) -> str:
    """Reject missing or whitespace-only text fields"""
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()


def validate_file_extension(filename: Optional[str], allowed_extensions: Iterable[str]) -> bool:
    if not filename:
        return False
    ext = os.path.splitext(filename)[1].lower()
    return ext in {e.lower() for e in allowed_extensions}


def validate_file_size(file_size: int, max_size: int) -> bool:
    """Validate file size"""
    return 0 < file_size <= max_size
