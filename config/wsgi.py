import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()

# Swap in stored roles before the first request; no-op for in-code roles.
from hn_core.access.bootstrap import ROLE_SOURCE_DATABASE, access_settings, load_role_registry  # noqa: E402

if access_settings()["ROLE_SOURCE"] == ROLE_SOURCE_DATABASE:
    load_role_registry(ROLE_SOURCE_DATABASE)
