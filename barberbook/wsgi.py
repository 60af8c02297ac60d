"""
WSGI config for the Barberbook booking system.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'barberbook.settings.production')

application = get_wsgi_application()
