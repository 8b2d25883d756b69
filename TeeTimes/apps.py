from django.apps import AppConfig


class TeeTimesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "TeeTimes"
