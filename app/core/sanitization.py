"""Input sanitization utilities."""
import re
from typing import Optional


# Maximum length constraints for security
MAX_TOKEN_CODE_LENGTH = 32     # Generated codes are 6 chars; leave room for config changes
MAX_TOKEN_PAYLOAD_LENGTH = 500  # Scanned QR payloads are small JSON objects
MAX_LABEL_LENGTH = 100         # Session labels ("Meeting 1", "Day 2")
MAX_NOTE_LENGTH = 500          # Free-text notes on attendance records


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Note: This function strips HTML tags and normalizes whitespace, but does NOT
    escape HTML entities because the frontend escapes output when rendering.
    Double-escaping would cause entities to display literally (e.g., "&lt;" instead of "<").

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

    # Strip leading/trailing whitespace
    sanitized = text.strip()

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    # Strip HTML tags completely if requested (prevents injection entirely)
    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Reject inputs that still contain HTML-like patterns after stripping
    # This catches malformed tags or encoded attacks
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    # Normalize internal whitespace (replace multiple spaces with single space)
    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_label(label: Optional[str]) -> Optional[str]:
    """
    Sanitize a session label.

    Blank labels collapse to None so "no label" has a single representation.

    Raises:
        ValueError: If label is too long or contains markup
    """
    if label is None:
        return None
    sanitized = sanitize_text(label, max_length=MAX_LABEL_LENGTH)
    return sanitized or None


def sanitize_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    sanitized = sanitize_text(note, max_length=MAX_NOTE_LENGTH)
    return sanitized or None


def normalize_token_code(code: str) -> str:
    """
    Normalize a typed or scanned token code.

    Codes are case-insensitive and may be typed with surrounding whitespace.

    Raises:
        ValueError: If the code is empty, too long or has invalid characters
    """
    if not isinstance(code, str):
        raise ValueError("Token must be a string")

    sanitized = code.strip().upper()

    if not sanitized:
        raise ValueError("Token cannot be empty")

    if len(sanitized) > MAX_TOKEN_CODE_LENGTH:
        raise ValueError(f"Token exceeds maximum length of {MAX_TOKEN_CODE_LENGTH} characters")

    if not re.match(r'^[A-Z0-9-]+$', sanitized):
        raise ValueError("Token can only contain letters, numbers, and hyphens")

    return sanitized


def validate_token_payload(payload: str) -> str:
    """
    Validate a raw check-in payload before decoding.

    The payload is either a bare code or a scanned JSON object, so only
    emptiness and length are checked here.

    Raises:
        ValueError: If payload is empty or too long
    """
    if not isinstance(payload, str):
        raise ValueError("Token must be a string")

    payload = payload.strip()

    if not payload:
        raise ValueError("Token cannot be empty")

    if len(payload) > MAX_TOKEN_PAYLOAD_LENGTH:
        raise ValueError(f"Token exceeds maximum length of {MAX_TOKEN_PAYLOAD_LENGTH} characters")

    return payload
