# config/settings/test.py
from decouple import config

from .base import *

# Enable testing mode
DEBUG = False
ALLOWED_HOSTS = ['*']
SECRET_KEY = 'test-secret-key-not-for-production'
TESTING = True

# Use in-memory database for speed; TEST_USE_POSTGRES=True keeps the
# PostgreSQL settings from base so the concurrency tests run too
if not config('TEST_USE_POSTGRES', default=False, cast=bool):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': ':memory:',
        }
    }


# Disable migrations for faster tests
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

# Cache configuration for tests
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'test-cache',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

# Celery eager execution for tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

# Disable logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'INFO',
    },
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',  # Fast for tests
]

APP_BASE_URL = 'http://testserver.local'
STRIPE_SECRET_KEY = 'sk_test_remoof'
STRIPE_WEBHOOK_SECRET = 'whsec_test_remoof'
STRIPE_PAYMENT_METHOD_TYPES = ['card']
ADMIN_NOTIFICATION_EMAIL = 'orders@remoof.bike'

EMAIL_VERIFICATION_TOKEN_TTL_HOURS = 0
AUTO_LOGIN_TOKEN_TTL_MINUTES = 30
PASSWORD_RESET_TOKEN_TTL_MINUTES = 60

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}
