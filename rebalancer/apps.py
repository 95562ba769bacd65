from django.apps import AppConfig


class RebalancerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rebalancer"
    verbose_name = "Asset Allocation Rebalancer"

    def ready(self) -> None:
        from . import checks  # noqa: F401
