import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "threadline.settings")

from django.core.wsgi import get_wsgi_application
from django.apps import apps
from django.conf import settings

application = get_wsgi_application()

# Миграции выполняются один раз при старте процесса, а не на каждый запрос
if settings.THREADLINE_AUTO_MIGRATE:
    apps.get_app_config('storefront').setup()
