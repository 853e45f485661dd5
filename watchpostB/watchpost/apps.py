from django.apps import AppConfig


class WatchpostConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'watchpost'

    def ready(self):
        from . import signals  # noqa: F401
