from django.apps import AppConfig


class EgliseConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'eglise'
    verbose_name = "Église"
