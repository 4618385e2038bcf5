from django.apps import AppConfig


class AcademicsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "academics"
    verbose_name = "Academic records"

    def ready(self) -> None:  # pragma: no cover - Django convention
        from . import signals  # noqa: F401
