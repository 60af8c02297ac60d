import os

os.environ.setdefault('SECRET_KEY', 'barberbook-test-secret-key')

from .base import *  # noqa: E402

DEBUG = False

DATABASES = {
    'default': dj_database_url.parse('sqlite://:memory:'),
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

AXES_ENABLED = False

LOGGING['loggers']['apps']['level'] = 'WARNING'
