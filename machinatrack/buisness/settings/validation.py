from typing import Any

from machinatrack.buisness.core.validation import PayloadValidator


def validate_lookup_name(payload: Any) -> str:
    """Settings list entries carry a single name of at most 100 characters"""
    validator = PayloadValidator(payload)
    validator.string('name', required=True, max_length=100)
    return validator.result("Invalid settings entry")['name'].strip()
