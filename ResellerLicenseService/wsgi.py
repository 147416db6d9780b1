"""
WSGI config for ResellerLicenseService.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ResellerLicenseService.settings.prod")

application = get_wsgi_application()
