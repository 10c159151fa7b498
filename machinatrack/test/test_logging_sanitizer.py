"""
Test the logging sanitizer utility.
Credentials must be redacted and document links stripped of signed query strings.
"""

from machinatrack.utils.logging_sanitizer import (
    SENSITIVE_FIELDS,
    sanitize_dict,
    sanitize_exception_message,
    sanitize_url,
)


def test_sanitize_dict():
    """Test dictionary sanitization"""
    test_data = {
        'performedBy': 'Dana',
        'token': 'xyz789',
        'descriptionOfWork': 'Replaced wipers',
    }
    result = sanitize_dict(test_data)
    assert result['performedBy'] == 'Dana', "performedBy should not be redacted"
    assert result['token'] == '[REDACTED]', "token should be redacted"
    assert result['descriptionOfWork'] == 'Replaced wipers'
    assert test_data['token'] == 'xyz789', "Input must not be modified"

    # Case insensitivity
    result = sanitize_dict({'Authorization': 'Bearer abc', 'API_KEY': 'k'})
    assert result['Authorization'] == '[REDACTED]'
    assert result['API_KEY'] == '[REDACTED]'

    # Nested dictionaries and lists of dictionaries
    result = sanitize_dict({
        'settings': {'secret': 's', 'theme': 'dark'},
        'partsUsed': [{'partName': 'Filter', 'quantity': 1}],
    })
    assert result['settings'] == {'secret': '[REDACTED]', 'theme': 'dark'}
    assert result['partsUsed'] == [{'partName': 'Filter', 'quantity': 1}]


def test_document_links_are_stripped():
    result = sanitize_dict({
        'certificateUrl': 'https://docs.example.com/c/1.pdf?X-Signature=abc#page=2',
        'attachments': [
            'https://docs.example.com/r/1.pdf?token=abc',
            'https://docs.example.com/r/2.pdf',
        ],
    })
    assert result['certificateUrl'] == 'https://docs.example.com/c/1.pdf'
    assert result['attachments'] == [
        'https://docs.example.com/r/1.pdf',
        'https://docs.example.com/r/2.pdf',
    ]
    assert sanitize_url(None) is None


def test_all_sensitive_fields():
    """Verify all sensitive fields are properly configured"""
    test_data = {field: f"sensitive_{field}_value" for field in SENSITIVE_FIELDS}

    result = sanitize_dict(test_data)

    for field in SENSITIVE_FIELDS:
        assert result[field] == '[REDACTED]', f"Field '{field}' should be redacted"


def test_non_dict_payloads_pass_through():
    assert sanitize_dict(None) is None
    assert sanitize_dict([1, 2]) == [1, 2]


def test_sanitize_exception_message():
    assert sanitize_exception_message(ValueError("disk full")) == "disk full"
    assert sanitize_exception_message(RuntimeError("bad token abc")) == \
        "RuntimeError: [Message contains sensitive data]"
