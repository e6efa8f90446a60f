# config/settings/prod.py
from .base import *  # noqa

DEBUG = False
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h]

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Role/permission rows are managed in the admin and hot-reloaded.
ACCESS_CONTROL["ROLE_SOURCE"] = os.getenv("ACCESS_ROLE_SOURCE", "database")
