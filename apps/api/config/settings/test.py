# PATH: apps/api/config/settings/test.py
from .base import *

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LOGGING["loggers"]["quizportal"]["level"] = "WARNING"
LOGGING["loggers"]["apps"]["level"] = "WARNING"
