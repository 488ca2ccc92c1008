"""
Validator Unit Tests
"""
from django.core.exceptions import ValidationError
from django.test import SimpleTestCase

from apps.core.validators import validate_email_format, validate_no_dangerous_characters, validate_phone_number


class ValidatorTests(SimpleTestCase):
    def test_phone_number(self):
        validate_phone_number('9876543210')
        for value in ('987654321', '+919876543210', '98765 43210'):
            with self.assertRaisesMessage(ValidationError, 'Phone number must be exactly 10 digits'):
                validate_phone_number(value)

    def test_email_format(self):
        validate_email_format('a.b@example.co.in')
        for value in ('a@b', 'a b@example.com', '@example.com'):
            with self.assertRaisesMessage(ValidationError, 'Invalid email address'):
                validate_email_format(value)

    def test_dangerous_characters(self):
        validate_no_dangerous_characters('Flat 4, Shanti Nagar (East)')
        validate_no_dangerous_characters('')
        with self.assertRaisesMessage(ValidationError, 'Contains invalid characters: < >'):
            validate_no_dangerous_characters('<b>')
        with self.assertRaises(ValidationError):
            validate_no_dangerous_characters('${HOME}')
