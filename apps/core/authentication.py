"""
JWT Authentication for Django REST Framework

Validates Bearer JWTs issued by the identity provider and attaches user
context to requests. Tokens are only verified here, never issued.
"""
import hmac
import logging
from dataclasses import dataclass
from uuid import UUID

import jwt
from django.conf import settings
from rest_framework import authentication, exceptions

logger = logging.getLogger(__name__)

SYSTEM_USER_ID = UUID('00000000-0000-0000-0000-000000000000')


@dataclass
class AuthenticatedUser:
    """
    Represents an authenticated back-office user.

    This is NOT a Django auth User - it's a lightweight container
    for user context derived from the JWT and the users table.
    """
    id: UUID                      # users.id
    auth_uid: str                 # identity provider subject (sub claim)
    email: str
    name: str
    role: str                     # 'admin', 'sub-user'
    is_active: bool = True
    is_system: bool = False

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'

    @property
    def audit_id(self) -> UUID | None:
        """User id to record in created_by / updated_by, None for the system user."""
        return None if self.is_system else self.id

    @classmethod
    def from_user(cls, user) -> 'AuthenticatedUser':
        """Build from a `core.User` row."""
        return cls(
            id=user.id,
            auth_uid=user.auth_uid or '',
            email=user.email or '',
            name=user.name or '',
            role=user.role or 'sub-user',
            is_active=user.is_active,
        )


class JWTAuthentication(authentication.BaseAuthentication):
    """
    Authenticates requests using HS256 Bearer JWTs.

    Flow:
    1. Extract Bearer token from Authorization header
    2. Decode and validate JWT using AUTH_JWT_SECRET
    3. Look up the user by auth_uid (sub claim)
    4. Return AuthenticatedUser with full context
    """

    def authenticate(self, request):
        """
        Authenticate the request and return (user, token) or None.

        Returns:
            tuple: (AuthenticatedUser, token) if authenticated
            None: If no authentication credentials provided

        Raises:
            AuthenticationFailed: If credentials are invalid
        """
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header.startswith('Bearer '):
            return None

        token = auth_header[7:]  # Remove 'Bearer ' prefix
        if not token:
            return None

        payload = self._decode_jwt(token)
        if not payload:
            raise exceptions.AuthenticationFailed('Invalid or expired token')

        user = self._get_user_from_payload(payload)
        if not user:
            raise exceptions.AuthenticationFailed('User not found')

        return (user, token)

    def authenticate_header(self, request):
        """
        Return the WWW-Authenticate header value for 401 responses.
        """
        return 'Bearer realm="api"'

    def _decode_jwt(self, token: str) -> dict | None:
        """
        Decode and validate a JWT.

        Args:
            token: The JWT string

        Returns:
            dict: The decoded payload if valid
            None: If token is invalid or expired
        """
        jwt_secret = getattr(settings, 'AUTH_JWT_SECRET', None)
        if not jwt_secret:
            logger.error('AUTH_JWT_SECRET not configured')
            return None

        audience = getattr(settings, 'AUTH_JWT_AUDIENCE', None) or None
        issuer = getattr(settings, 'AUTH_JWT_ISSUER', None) or None

        decode_kwargs = {
            'jwt': token,
            'key': jwt_secret,
            'algorithms': ['HS256'],
            'options': {
                'verify_exp': True,
                'verify_aud': bool(audience),
                'verify_iss': bool(issuer),
            },
        }
        if audience:
            decode_kwargs['audience'] = audience
        if issuer:
            decode_kwargs['issuer'] = issuer

        try:
            return jwt.decode(**decode_kwargs)
        except jwt.ExpiredSignatureError:
            logger.debug('JWT has expired')
            return None
        except jwt.InvalidAudienceError:
            logger.debug('JWT has invalid audience')
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f'JWT validation failed: {e}')
            return None

    def _get_user_from_payload(self, payload: dict) -> AuthenticatedUser | None:
        """
        Look up the user by auth_uid from the JWT sub claim.

        Deactivated users are still returned; IsActiveUser rejects them.
        """
        from .models import User

        auth_uid = payload.get('sub')
        if not auth_uid:
            logger.warning('JWT missing sub claim')
            return None

        user = User.objects.filter(auth_uid=auth_uid).first()
        if not user:
            logger.warning(f'No user found for auth_uid: {auth_uid}')
            return None

        return AuthenticatedUser.from_user(user)


def get_user_context(request) -> AuthenticatedUser | None:
    """
    Utility function to get authenticated user from request.

    Args:
        request: Django request object

    Returns:
        AuthenticatedUser if authenticated, None otherwise
    """
    user = getattr(request, 'user', None)
    if isinstance(user, AuthenticatedUser):
        return user
    return None


class CronSecretAuthentication(authentication.BaseAuthentication):
    """
    Authenticates requests using a shared CRON_SECRET.

    Used by scheduled jobs that don't have user context. Returns a
    system-level AuthenticatedUser with admin privileges.

    The secret is passed via the X-Cron-Secret header.
    """

    def authenticate(self, request):
        cron_secret = request.META.get('HTTP_X_CRON_SECRET', '')
        if not cron_secret:
            return None

        expected_secret = getattr(settings, 'CRON_SECRET', None)
        if not expected_secret:
            logger.error('CRON_SECRET not configured in settings')
            return None

        # Constant-time comparison
        if not hmac.compare_digest(cron_secret, expected_secret):
            raise exceptions.AuthenticationFailed('Invalid cron secret')

        system_user = AuthenticatedUser(
            id=SYSTEM_USER_ID,
            auth_uid='system',
            email='system@internal',
            name='System Cron',
            role='admin',
            is_system=True,
        )
        return (system_user, None)
