from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hn_core.iam"
    verbose_name = "Identity & roles"

    def ready(self) -> None:
        # import here so app loading doesn’t break tooling
        from hn_core.iam import signals  # noqa: F401
