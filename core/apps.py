from django.apps import AppConfig    # type:ignore


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    verbose_name = 'CESIM Rounds'
