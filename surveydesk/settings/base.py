"""
Django settings for surveydesk project.
Shared by every environment; local/production/test override what they need.
"""

from pathlib import Path
from decouple import config, Csv
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='django-insecure-surveydesk-dev-key')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())
COMPANY_NAME = config('COMPANY_NAME', default='SurveyDesk')
SUPPORT_EMAIL = config('SUPPORT_EMAIL', default='support@example.com')


# Application definition

INSTALLED_APPS = [
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.humanize',  # intcomma for dashboard counters

    # --- Project apps ---
    'core.apps.CoreConfig',
    'accounts.apps.AccountsConfig',
    'surveys.apps.SurveysConfig',
    'links.apps.LinksConfig',
    'registrations.apps.RegistrationsConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'django_ratelimit.middleware.RatelimitMiddleware',
]

ROOT_URLCONF = 'surveydesk.urls'

APPEND_SLASH = True

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'core.context_processors.admin_session',
            ],
        },
    },
]

WSGI_APPLICATION = 'surveydesk.wsgi.application'


# Database
# The panel owns no data: everything lives behind the survey API.
DATABASES = {}


# ============================================================
# SURVEY API (external REST backend)
# ============================================================
SURVEY_API_URL = config('SURVEY_API_URL', default='http://localhost:5000').rstrip('/')
SURVEY_API_TIMEOUT = config('SURVEY_API_TIMEOUT', default=10, cast=int)
SURVEY_API_SLOW_MS = config('SURVEY_API_SLOW_MS', default=1500.0, cast=float)

# Page sizes mirrored from the API defaults
SURVEY_LIST_PAGE_SIZE = 100
OUTCOME_PAGE_SIZE = 100
REGISTRATION_PAGE_SIZE = 100
REGISTRATION_EXPORT_LIMIT = 50000

# Seconds an applicant must wait before requesting another OTP
OTP_RESEND_COOLDOWN = config('OTP_RESEND_COOLDOWN', default=60, cast=int)


# ============================================================
# SESSIONS & CACHE
# ============================================================
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'surveydesk-default',
    }
}

SESSION_ENGINE = 'django.contrib.sessions.backends.cache'
SESSION_CACHE_ALIAS = 'default'
MESSAGE_STORAGE = 'django.contrib.messages.storage.session.SessionStorage'

RATELIMIT_VIEW = 'core.views_ratelimit.ratelimit_error'


# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True


# Static files (CSS, JavaScript, Images)
STATIC_URL = '/static/'
STATICFILES_DIRS = [BASE_DIR / 'static']
STATIC_ROOT = BASE_DIR / 'staticfiles'


LOGIN_URL = 'accounts:login'
LOGIN_REDIRECT_URL = 'core:dashboard'


# ============================================================
# LOGGING CONFIGURATION
# ============================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': { 'format': '[{levelname}] {asctime} {name} {module}.{funcName}:{lineno} - {message}', 'style': '{', 'datefmt': '%Y-%m-%d %H:%M:%S', },
        'simple': { 'format': '[{levelname}] {asctime} - {message}', 'style': '{', 'datefmt': '%Y-%m-%d %H:%M:%S', },
        'detailed': { 'format': '{asctime} | {name:30} | {levelname:8} | {funcName:20} | {message}', 'style': '{', 'datefmt': '%Y-%m-%d %H:%M:%S', },
    },
    'filters': {
        'require_debug_false': { '()': 'django.utils.log.RequireDebugFalse', },
        'require_debug_true': { '()': 'django.utils.log.RequireDebugTrue', },
    },
    'handlers': {
        'console': { 'level': 'DEBUG' if DEBUG else 'INFO', 'class': 'logging.StreamHandler', 'formatter': 'detailed', },
        'file_app': { 'level': 'INFO', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'app.log', 'maxBytes': 1024 * 1024 * 10, 'backupCount': 5, 'formatter': 'detailed', },
        'file_error': { 'level': 'ERROR', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'error.log', 'maxBytes': 1024 * 1024 * 10, 'backupCount': 5, 'formatter': 'verbose', },
        'file_security': { 'level': 'WARNING', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'security.log', 'maxBytes': 1024 * 1024 * 5, 'backupCount': 10, 'formatter': 'verbose', },
        'file_surveys': { 'level': 'INFO', 'class': 'logging.handlers.RotatingFileHandler', 'filename': BASE_DIR / 'logs' / 'surveys.log', 'maxBytes': 1024 * 1024 * 10, 'backupCount': 5, 'formatter': 'detailed', },
    },
    'loggers': {
        'django': { 'handlers': ['console', 'file_app'], 'level': 'INFO', 'propagate': False, },
        'django.request': { 'handlers': ['console', 'file_error'], 'level': 'ERROR', 'propagate': False, },
        'django.security': { 'handlers': ['console', 'file_security'], 'level': 'WARNING', 'propagate': False, },
        'core': { 'handlers': ['console', 'file_app', 'file_error'], 'level': 'DEBUG' if DEBUG else 'INFO', 'propagate': False, },
        'core.security': { 'handlers': ['console', 'file_security'], 'level': 'INFO', 'propagate': False, },
        'core.performance': { 'handlers': ['console', 'file_app'], 'level': 'INFO', 'propagate': False, },
        'surveys': { 'handlers': ['console', 'file_surveys', 'file_error'], 'level': 'DEBUG' if DEBUG else 'INFO', 'propagate': False, },
        'links': { 'handlers': ['console', 'file_surveys', 'file_error'], 'level': 'DEBUG' if DEBUG else 'INFO', 'propagate': False, },
        'registrations': { 'handlers': ['console', 'file_app', 'file_error'], 'level': 'DEBUG' if DEBUG else 'INFO', 'propagate': False, },
        'accounts': { 'handlers': ['console', 'file_security'], 'level': 'INFO', 'propagate': False, },
    },
    'root': { 'handlers': ['console', 'file_app'], 'level': 'INFO', },
}

# Ensure logs dir exists
logs_dir = BASE_DIR / 'logs'
if not os.path.exists(logs_dir):
    os.makedirs(logs_dir)
