"""
Django Test Settings for BrokerDesk Backend

Uses SQLite in-memory database for fast testing. Tables are created from the
models by pytest-django (no migration files).
"""
from .base import *  # noqa: F401, F403

# =============================================================================
# Debug Mode for Tests
# =============================================================================

DEBUG = False

SECRET_KEY = 'test-secret-key'

# =============================================================================
# Database
# =============================================================================

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# =============================================================================
# Speed Optimizations for Tests
# =============================================================================

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
}

# =============================================================================
# Auth Test Configuration
# =============================================================================

AUTH_JWT_SECRET = 'test-jwt-secret-key-for-testing-purposes-only'
AUTH_JWT_AUDIENCE = 'authenticated'
AUTH_JWT_ISSUER = ''

# Cron authentication secret for testing
CRON_SECRET = 'test-cron-secret'

POLICY_EXPIRING_SOON_DAYS = 30

# =============================================================================
# CORS - Allow all for tests
# =============================================================================

CORS_ALLOW_ALL_ORIGINS = True
