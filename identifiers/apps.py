from django.apps import AppConfig


class IdentifiersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'identifiers'
    verbose_name = 'Identifiers'
