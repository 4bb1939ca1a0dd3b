"""
Django settings for the posadmin project.

Values come from environment variables with development defaults so the
same module serves local runs, tests and deployments.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default=''):
    return [item.strip() for item in os.environ.get(name, default).split(',') if item.strip()]


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-posadmin-development-key')

DEBUG = _env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = _env_list('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver')


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'corsheaders',
    'rest_framework',
    'rest_framework.authtoken',
    'core.apps.CoreConfig',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'posadmin.middleware.ApiCorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'posadmin.middleware.ApiCsrfExemptMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'posadmin.middleware.ApiErrorMiddleware',
]

ROOT_URLCONF = 'posadmin.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

ASGI_APPLICATION = 'posadmin.asgi.application'


# --- Database ---

_db_engine = os.environ.get('POS_DB_ENGINE', 'django.db.backends.sqlite3')
if _db_engine.endswith('sqlite3'):
    DATABASES = {
        'default': {
            'ENGINE': _db_engine,
            'NAME': os.environ.get('POS_DB_NAME', str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': _db_engine,
            'NAME': os.environ.get('POS_DB_NAME', 'posadmin'),
            'USER': os.environ.get('POS_DB_USER', 'postgres'),
            'PASSWORD': os.environ.get('POS_DB_PASSWORD', ''),
            'HOST': os.environ.get('POS_DB_HOST', 'localhost'),
            'PORT': os.environ.get('POS_DB_PORT', '5432'),
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_USER_MODEL = 'core.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]


# --- Internationalization ---

LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('POS_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = 'media/'
MEDIA_ROOT = BASE_DIR / 'media'


# --- CORS / sessions (cookie-based auth for the SPA) ---

CORS_ALLOWED_ORIGINS = _env_list('CORS_ALLOWED_ORIGINS', 'http://localhost:5173')
CORS_ALLOW_CREDENTIALS = True
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = 'Lax'
SESSION_COOKIE_AGE = 60 * 60 * 24 * 7


# --- Point-of-sale workflow ---

POS_BILLING = {
    'TAX_RATE': os.environ.get('POS_TAX_RATE', '0.05'),
    'SERVICE_CHARGE_RATE': os.environ.get('POS_SERVICE_CHARGE_RATE', '0.10'),
}

POS_IDENTITY_PROVIDERS = [
    'core.identity.SessionIdentityProvider',
    'core.identity.TokenIdentityProvider',
]

POS_DEMO_LOGIN_ENABLED = _env_bool('POS_DEMO_LOGIN_ENABLED', DEBUG)

POS_VENUE_NAME = os.environ.get('POS_VENUE_NAME', 'Restaurant')


# --- Logging ---

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'core': {
            'level': os.environ.get('POS_LOG_LEVEL', 'INFO'),
        },
        'posadmin': {
            'level': os.environ.get('POS_LOG_LEVEL', 'INFO'),
        },
    },
}
