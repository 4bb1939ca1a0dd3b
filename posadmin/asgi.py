"""
ASGI config for the posadmin project.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'posadmin.settings')

from django.core.asgi import get_asgi_application

application = get_asgi_application()
