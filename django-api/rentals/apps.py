from django.apps import AppConfig


class RentalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rentals"
    verbose_name = "Vehicle rentals"

    def ready(self) -> None:
        from rentals import conf, signals  # noqa: F401
