"""WSGI config for the Zade backend."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zadeBackend.settings")

application = get_wsgi_application()
