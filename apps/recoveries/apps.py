from django.apps import AppConfig


class RecoveriesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.recoveries'
    label = 'recoveries'

    def ready(self):
        from . import signals  # noqa: F401
