"""
Core View Mixins

Provides standardized authentication, parameter parsing, error handling,
and response patterns for all API views in the application.
"""
import functools
from datetime import date, datetime
from uuid import UUID

from rest_framework.response import Response

from .authentication import AuthenticatedUser, get_user_context
from .exceptions import APIException as APIError
from .exceptions import AuthenticationError, ValidationError


class AuthenticatedAPIView:
    """
    Mixin providing standardized authentication and error handling.

    Usage:
        class MyView(AuthenticatedAPIView, APIView):
            def get(self, request):
                user = self.get_user(request)  # Raises if not authenticated
                # ... view logic
    """

    def get_user(self, request) -> AuthenticatedUser:
        """
        Get authenticated user or raise 401.
        """
        user = get_user_context(request)
        if not user:
            raise AuthenticationError()
        return user

    def parse_uuid(self, value: str, field_name: str = "id") -> UUID:
        """
        Parse string to UUID or raise validation error.

        Args:
            value: String value to parse
            field_name: Name of field for error message

        Raises:
            ValidationError if missing or invalid format
        """
        if not value:
            raise ValidationError(f"{field_name} is required")
        try:
            return UUID(str(value))
        except ValueError as err:
            raise ValidationError(f"Invalid {field_name} format") from err

    def parse_uuid_optional(self, value: str, field_name: str = "id") -> UUID | None:
        """Parse string to UUID; None if empty, ValidationError if malformed."""
        if not value:
            return None
        return self.parse_uuid(value, field_name)

    def parse_date(self, value: str, field_name: str = "date", fmt: str = "%Y-%m-%d") -> date | None:
        """Parse date string; None if empty, ValidationError if malformed."""
        if not value:
            return None
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError as err:
            raise ValidationError(f"Invalid {field_name} format, expected YYYY-MM-DD") from err

    def parse_int(self, value: str, field_name: str, default: int) -> int:
        """Parse a positive integer query param, falling back to default."""
        if value in (None, ''):
            return default
        try:
            parsed = int(value)
        except (TypeError, ValueError) as err:
            raise ValidationError(f"{field_name} must be an integer") from err
        if parsed < 1:
            raise ValidationError(f"{field_name} must be a positive integer")
        return parsed

    def parse_bool(self, value: str | None) -> bool:
        return str(value).lower() in ('1', 'true', 'yes')


def handle_api_errors(func):
    """
    Decorator to handle APIError exceptions in view methods.

    Usage:
        @handle_api_errors
        def get(self, request):
            user = self.get_user(request)
            # ...
    """
    @functools.wraps(func)
    def wrapper(self, request, *args, **kwargs):
        try:
            return func(self, request, *args, **kwargs)
        except APIError as e:
            return Response(
                {"error": e.message, "details": e.details} if e.details else {"error": e.message},
                status=e.status_code
            )
    return wrapper
