from .base import *
from decouple import config

# ============================================================
# LOCAL DEVELOPMENT
# ============================================================

DEBUG = True

LOCAL_LAN_IP = config('LAN_IP', default='172.16.0.2')

ALLOWED_HOSTS = ['localhost', '127.0.0.1', LOCAL_LAN_IP]

# ============================================================
# MIDDLEWARE (with request logging)
# ============================================================
MIDDLEWARE = [
    'core.middleware_logging.RequestLoggingMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'django_ratelimit.middleware.RatelimitMiddleware',
]

# runserver only speaks HTTP
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_SSL_REDIRECT = False

CSRF_TRUSTED_ORIGINS = [
    'http://127.0.0.1:8000',
    'http://localhost:8000',
    'http://127.0.0.1:8010',
    'http://localhost:8010',
    f'http://{LOCAL_LAN_IP}:8000',
    f'http://{LOCAL_LAN_IP}:8010',
]

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# django-ratelimit wants a shared cache; locmem is fine for a single dev process
SILENCED_SYSTEM_CHECKS = ['django_ratelimit.E003', 'django_ratelimit.W001']

LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['handlers']['console']['formatter'] = 'verbose'
LOGGING['loggers']['core']['level'] = 'DEBUG'
LOGGING['loggers']['surveys']['level'] = 'DEBUG'
