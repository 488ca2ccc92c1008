"""
Authentication Unit Tests

Tests for Bearer JWT verification and the cron secret authenticator.
"""
import time

import jwt
from django.conf import settings
from django.test import RequestFactory, TestCase
from rest_framework import exceptions

from apps.core.authentication import (
    SYSTEM_USER_ID,
    AuthenticatedUser,
    CronSecretAuthentication,
    JWTAuthentication,
)
from tests.factories import AdminUserFactory


def make_token(sub, *, secret=None, audience='authenticated', expires_in=3600, **claims):
    payload = {'sub': sub, 'exp': int(time.time()) + expires_in, **claims}
    if audience:
        payload['aud'] = audience
    return jwt.encode(payload, secret or settings.AUTH_JWT_SECRET, algorithm='HS256')


class JWTAuthenticationTests(TestCase):
    """Tests for JWTAuthentication."""

    def setUp(self):
        self.factory = RequestFactory()
        self.auth = JWTAuthentication()
        self.user = AdminUserFactory(auth_uid='idp-user-1', name='Admin One')

    def _request(self, token):
        return self.factory.get('/', HTTP_AUTHORIZATION=f'Bearer {token}')

    def test_valid_token_returns_user_context(self):
        user, token = self.auth.authenticate(self._request(make_token('idp-user-1')))

        self.assertIsInstance(user, AuthenticatedUser)
        self.assertEqual(user.id, self.user.id)
        self.assertEqual(user.role, 'admin')
        self.assertEqual(user.name, 'Admin One')
        self.assertTrue(user.is_admin)

    def test_no_header_returns_none(self):
        self.assertIsNone(self.auth.authenticate(self.factory.get('/')))

    def test_non_bearer_header_returns_none(self):
        request = self.factory.get('/', HTTP_AUTHORIZATION='Basic abc')
        self.assertIsNone(self.auth.authenticate(request))

    def test_expired_token_rejected(self):
        token = make_token('idp-user-1', expires_in=-60)
        with self.assertRaisesMessage(exceptions.AuthenticationFailed, 'Invalid or expired token'):
            self.auth.authenticate(self._request(token))

    def test_wrong_secret_rejected(self):
        token = make_token('idp-user-1', secret='another-secret-that-is-long-enough-for-hs256')
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self._request(token))

    def test_wrong_audience_rejected(self):
        token = make_token('idp-user-1', audience='someone-else')
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self._request(token))

    def test_unknown_subject_rejected(self):
        with self.assertRaisesMessage(exceptions.AuthenticationFailed, 'User not found'):
            self.auth.authenticate(self._request(make_token('nobody')))

    def test_deleted_user_rejected(self):
        self.user.soft_delete()
        with self.assertRaisesMessage(exceptions.AuthenticationFailed, 'User not found'):
            self.auth.authenticate(self._request(make_token('idp-user-1')))

    def test_deactivated_user_is_returned_inactive(self):
        self.user.is_active = False
        self.user.save()

        user, _ = self.auth.authenticate(self._request(make_token('idp-user-1')))

        self.assertFalse(user.is_active)

    def test_api_request_with_token(self):
        response = self.client.get(
            '/api/users/me',
            HTTP_AUTHORIZATION=f"Bearer {make_token('idp-user-1')}",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['id'], str(self.user.id))

    def test_api_request_with_bad_token(self):
        response = self.client.get('/api/users/me', HTTP_AUTHORIZATION='Bearer not-a-jwt')

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Invalid or expired token')


class CronSecretAuthenticationTests(TestCase):
    """Tests for CronSecretAuthentication."""

    def setUp(self):
        self.factory = RequestFactory()
        self.auth = CronSecretAuthentication()

    def test_valid_secret_returns_system_user(self):
        request = self.factory.post('/', HTTP_X_CRON_SECRET=settings.CRON_SECRET)

        user, token = self.auth.authenticate(request)

        self.assertIsNone(token)
        self.assertEqual(user.id, SYSTEM_USER_ID)
        self.assertTrue(user.is_admin)
        self.assertTrue(user.is_system)
        self.assertIsNone(user.audit_id)

    def test_missing_header_returns_none(self):
        self.assertIsNone(self.auth.authenticate(self.factory.post('/')))

    def test_invalid_secret_rejected(self):
        request = self.factory.post('/', HTTP_X_CRON_SECRET='nope')
        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(request)
