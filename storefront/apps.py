import logging

from django.apps import AppConfig
from django.core.management import call_command

logger = logging.getLogger(__name__)


class StorefrontConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'storefront'

    # Схема приведена к актуальному состоянию в этом процессе
    schema_ready = False

    def setup(self, force=False):
        """
        Apply pending migrations once per process.

        Idempotent: later calls are no-ops unless ``force`` is passed. Called
        from the WSGI entry point, never from request handling.
        """
        if self.schema_ready and not force:
            return False
        logger.info("Applying database migrations before serving requests")
        call_command('migrate', interactive=False, verbosity=0)
        self.schema_ready = True
        return True
