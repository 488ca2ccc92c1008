"""
Django Production Settings

Use these settings for production deployment.
"""
from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F401, F403

DEBUG = False

ALLOWED_HOSTS = config('ALLOWED_HOSTS', cast=Csv())  # noqa: F405

# =============================================================================
# Required secrets
# =============================================================================

for _name in ('DJANGO_SECRET_KEY', 'AUTH_JWT_SECRET', 'CRON_SECRET'):
    if not config(_name, default=''):  # noqa: F405
        raise ImproperlyConfigured(f'{_name} must be set in production')

# =============================================================================
# Security Settings
# =============================================================================

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# The API sits behind a TLS-terminating proxy
SECURE_SSL_REDIRECT = config('SECURE_SSL_REDIRECT', default=True, cast=bool)  # noqa: F405
SECURE_REDIRECT_EXEMPT = [r'^api/health$']
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# =============================================================================
# CORS Settings - Back-office frontend origins only
# =============================================================================

CORS_ALLOWED_ORIGINS = config('CORS_ALLOWED_ORIGINS', cast=Csv())  # noqa: F405
CORS_ALLOW_ALL_ORIGINS = False

# =============================================================================
# Database
# =============================================================================

DATABASES['default']['OPTIONS']['sslmode'] = 'require'  # noqa: F405
DATABASES['default']['CONN_MAX_AGE'] = config('DB_CONN_MAX_AGE', default=60, cast=int)  # noqa: F405

# =============================================================================
# Logging - Less verbose in production
# =============================================================================

LOGGING = LOGGING.copy()  # noqa: F405  # type: ignore[name-defined]
LOGGING['root']['level'] = 'INFO'  # type: ignore[index]
LOGGING['loggers']['django']['level'] = 'WARNING'  # type: ignore[index]
LOGGING['loggers']['apps']['level'] = config('APP_LOG_LEVEL', default='INFO')  # noqa: F405  # type: ignore[index]
