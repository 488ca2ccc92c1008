"""
Field validators shared by serializers and the admin.
"""
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator

from .constants import DANGEROUS_CHARACTERS

validate_phone_number = RegexValidator(
    regex=r'^\d{10}$',
    message='Phone number must be exactly 10 digits',
)

validate_email_format = RegexValidator(
    regex=r'^[^\s@]+@[^\s@]+\.[^\s@]+$',
    message='Invalid email address',
)


def validate_no_dangerous_characters(value: str | None) -> None:
    """Reject characters usable for script or template injection."""
    if not value:
        return
    found = sorted({char for char in value if char in DANGEROUS_CHARACTERS})
    if found:
        raise ValidationError(
            f"Contains invalid characters: {' '.join(found)}",
            code='dangerous_characters',
        )
