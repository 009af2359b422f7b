from django.apps import AppConfig


class ProductColorsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'productcolors'
    verbose_name = 'Кольори та варіанти'
