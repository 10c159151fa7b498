"""
Logging Sanitizer Utility

Provides utilities to sanitize request payloads before logging.
Redacts credentials and strips query strings from document links
(receipts, certificates, images) since those are often pre-signed URLs.
"""

from typing import Dict, Any
from urllib.parse import urlsplit, urlunsplit


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'secret',
    'secret_key',
    'token',
    'api_key',
    'apikey',
    'auth_token',
    'access_token',
    'refresh_token',
    'authorization',
    'session_id',
}

# Fields holding links to stored documents
URL_FIELDS = {
    'attachments',
    'certificateurl',
    'certificate_url',
    'imageurl',
    'image_url',
}


def sanitize_url(url: Any) -> Any:
    """
    Drop the query string and fragment from a URL.

    Example:
        >>> sanitize_url('https://docs.example.com/r/1.pdf?X-Signature=abc')
        'https://docs.example.com/r/1.pdf'
    """
    if not isinstance(url, str) or not url:
        return url
    parts = urlsplit(url)
    if not parts.query and not parts.fragment:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, '', ''))


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy; the input is never modified

    Example:
        >>> sanitize_dict({'performedBy': 'Dana', 'token': 'abc'})
        {'performedBy': 'Dana', 'token': '[REDACTED]'}
    """
    if not data or not isinstance(data, dict):
        return data

    sanitized = {}
    for key, value in data.items():
        lowered = key.lower()
        if lowered in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif lowered in URL_FIELDS:
            if isinstance(value, list):
                sanitized[key] = [sanitize_url(item) for item in value]
            else:
                sanitized[key] = sanitize_url(value)
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(item, redact_text) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized


def sanitize_exception_message(exception: Exception) -> str:
    """
    Sanitize exception messages to ensure they don't leak credentials.

    Args:
        exception: Exception to sanitize

    Returns:
        Sanitized exception message
    """
    message = str(exception)

    if any(field in message.lower() for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
