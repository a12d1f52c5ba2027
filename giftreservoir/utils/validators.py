"""Custom validators and normalizers"""

import re
from typing import Optional
from pydantic import AnyUrl, TypeAdapter, ValidationError
from email_validator import validate_email, EmailNotValidError

_absolute_url = TypeAdapter(AnyUrl)

def normalize_text(text: str) -> str:
    """Normalize text input"""
    # Remove zero-width characters
    text = re.sub(r'[\u200b\u200c\u200d\ufeff]', '', text)

    # Remove extra whitespace
    return " ".join(text.split())

def validate_optional_url(value: Optional[str]) -> Optional[str]:
    """
    Validate an optional absolute URL (any scheme)

    Empty strings are treated as "no URL" and stored as null. Valid URLs are
    returned as entered, without normalization.
    """
    if value is None:
        return None

    value = value.strip()
    if not value:
        return None

    try:
        _absolute_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL")

    return value

def validate_email_address(email: str) -> str:
    """Validate and normalize email"""
    email = email.strip().lower()

    try:
        validation = validate_email(email, check_deliverability=False)
        return validation.normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))
