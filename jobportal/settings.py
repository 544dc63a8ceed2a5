"""
Django settings for the jobportal project.

The portal keeps no database of its own: job roles, applications and users
live behind the backend REST API configured in BACKEND_API.
"""

from pathlib import Path
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# -------------------------
# Basic / environment
# -------------------------
APP_NAME = os.environ.get('JOBPORTAL_APP_NAME', 'Job Portal')

SECRET_KEY = os.environ.get('JOBPORTAL_SECRET_KEY', 'django-insecure-dev-secret-for-local')

DEBUG = os.environ.get('JOBPORTAL_DEBUG', 'True').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = (
    os.environ.get('JOBPORTAL_ALLOWED_HOSTS', '')
    .split(',') if os.environ.get('JOBPORTAL_ALLOWED_HOSTS') else ['localhost', '127.0.0.1', 'testserver']
)


# -------------------------
# Installed apps / middleware
# -------------------------
INSTALLED_APPS = [
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # your apps
    'accounts',
    'jobs',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'jobportal.urls'


# -------------------------
# Templates
# -------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [os.path.join(BASE_DIR, 'templates')],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.static',   # for {% static %} helper
                'django.template.context_processors.csrf',     # makes csrf_token available
                'django.contrib.messages.context_processors.messages',
                'accounts.context_processors.auth',            # is_authenticated / is_admin / current_user
            ],
        },
    },
]


WSGI_APPLICATION = 'jobportal.wsgi.application'


# -------------------------
# Database (none: everything goes through the backend API)
# -------------------------
DATABASES = {}


# -------------------------
# Sessions / messages (cookie based, no DB tables)
# -------------------------
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_AGE = int(os.environ.get('JOBPORTAL_SESSION_AGE', 60 * 60 * 24))
SESSION_COOKIE_SECURE = os.environ.get('JOBPORTAL_SECURE_COOKIES', 'False').lower() in ('1', 'true', 'yes')
CSRF_COOKIE_SECURE = SESSION_COOKIE_SECURE

MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'


# -------------------------
# Backend API
# -------------------------
BACKEND_API = {
    'BASE_URL': os.environ.get('JOBPORTAL_API_BASE_URL', 'http://localhost:8080'),
    'TIMEOUT': float(os.environ.get('JOBPORTAL_API_TIMEOUT', 10)),
}


# -------------------------
# Uploads
# -------------------------
# CVs up to 5 MB are accepted; keep them in memory until they are forwarded.
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = 6 * 1024 * 1024


# -------------------------
# Internationalization
# -------------------------
LANGUAGE_CODE = 'en-gb'
TIME_ZONE = os.environ.get('JOBPORTAL_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


# -------------------------
# Static
# -------------------------
STATIC_URL = '/static/'
STATIC_ROOT = os.environ.get('JOBPORTAL_STATIC_ROOT', os.path.join(BASE_DIR, 'staticfiles'))


# -------------------------
# Auth
# -------------------------
LOGIN_URL = '/login/'


# -------------------------
# Logging (basic)
# -------------------------
LOG_LEVEL = os.environ.get('JOBPORTAL_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO' if DEBUG else 'WARNING',
            'propagate': False,
        },
    },
}


# -------------------------
# Security (production suggestions)
# -------------------------
# In production, set these via environment variables:
# SECURE_HSTS_SECONDS = 31536000
# SECURE_SSL_REDIRECT = True
