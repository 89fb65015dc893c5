from django.apps import AppConfig


class PitchesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pitches"
    verbose_name = "Sales pitch audio"

    def ready(self):
        from .generators.config import missing_api_keys
        from .generators.utils.logging import log

        missing = missing_api_keys()
        if missing:
            log(f"Provider keys not configured: {', '.join(missing)}", "WARNING")
