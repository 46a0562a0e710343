"""Input sanitization utilities."""
import re
from typing import Optional


# Maximum length constraints for security
MAX_NAME_LENGTH = 150
MAX_EMAIL_LENGTH = 255
MAX_TEXT_LENGTH = 2000
MIN_NAME_LENGTH = 3
MIN_ADDRESS_LENGTH = 10
MIN_PHONE_DIGITS = 10

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]+$")


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize free text input.

    Strips HTML tags and normalizes whitespace. Entities are not escaped;
    escaping is the rendering client's job.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValueError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Malformed tags or encoded attacks left over after stripping
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_optional_text(text: Optional[str], max_length: int = MAX_TEXT_LENGTH) -> Optional[str]:
    """Sanitize optional text, collapsing empty input to None."""
    if text is None:
        return None
    sanitized = sanitize_text(text, max_length=max_length)
    return sanitized or None


def sanitize_name(name: str, min_length: int = MIN_NAME_LENGTH) -> str:
    """Sanitize a person's name and enforce a minimum length."""
    sanitized = sanitize_text(name, max_length=MAX_NAME_LENGTH)
    if len(sanitized) < min_length:
        raise ValueError(f"Name must be at least {min_length} characters long")
    return sanitized


def normalize_email(email: str) -> str:
    """
    Trim, lower-case and validate an email address.

    Raises:
        ValueError: If the address is malformed or too long
    """
    if not isinstance(email, str):
        raise ValueError("Email must be a string")

    normalized = email.strip().lower()

    if len(normalized) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email exceeds maximum length of {MAX_EMAIL_LENGTH} characters")

    if not EMAIL_PATTERN.match(normalized):
        raise ValueError("Please provide a valid email address")

    return normalized


def validate_phone(phone: str) -> str:
    """
    Validate a phone number such as ``+92 300 1234567`` or ``03001234567``.

    Raises:
        ValueError: If the number has invalid characters or fewer than 10 digits
    """
    if not isinstance(phone, str):
        raise ValueError("Phone must be a string")

    trimmed = phone.strip()
    digits = re.sub(r"\D", "", trimmed)

    if not PHONE_PATTERN.match(trimmed) or len(digits) < MIN_PHONE_DIGITS:
        raise ValueError(f"Please provide a valid phone number (minimum {MIN_PHONE_DIGITS} digits)")

    return trimmed


def validate_address(address: str) -> str:
    """Sanitize a postal address and require a minimally complete value."""
    sanitized = sanitize_text(address, max_length=MAX_TEXT_LENGTH)
    if len(sanitized) < MIN_ADDRESS_LENGTH:
        raise ValueError(
            f"Please provide a complete address (minimum {MIN_ADDRESS_LENGTH} characters)"
        )
    return sanitized
