# config/settings/test.py
from .base import *  # noqa

DEBUG = False
SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

ACCESS_CONTROL = {
    "ROLE_SOURCE": "defaults",
    "LOG_DENIALS": False,
}

# Let pytest's caplog see hn_core records.
LOGGING["loggers"]["hn_core"]["propagate"] = True
