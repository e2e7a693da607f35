"""
WSGI config para o projeto Vela Aroma.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'velaroma.settings')

application = get_wsgi_application()
