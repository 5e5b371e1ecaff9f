"""
Test settings for SurveyDesk.
"""
# Inherit from 'base', NOT 'production': no Sentry, no forced SSL, no Redis.
from .base import *

# ============================================================
# BASIC TEST CONFIGURATION
# ============================================================
DEBUG = False
SECRET_KEY = 'test-secret-key-insecure-but-fast'
ALLOWED_HOSTS = ['testserver', 'localhost']

SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 0
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# The survey API is never reached from tests: the client is mocked.
SURVEY_API_URL = 'http://api.test'
SURVEY_API_TIMEOUT = 2

# ============================================================
# CACHE (RAM only)
# ============================================================
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'unique-snowflake',
    }
}

# ============================================================
# STATIC FILES STORAGE
# Use simple storage in tests to avoid requiring a collectstatic manifest.
# ============================================================
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

RATELIMIT_ENABLE = False
SILENCED_SYSTEM_CHECKS = ['django_ratelimit.E003', 'django_ratelimit.W001']

# ============================================================
# LOGGING (silent)
# ============================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': True,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'core': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'surveys': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'links': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'registrations': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
        'accounts': {
            'handlers': ['null'],
            'level': 'CRITICAL',
        },
    },
}
