from django.apps import AppConfig


class ContractsCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "contracts_core"
    verbose_name = "Contract ledger"

    # ensure receivers are registered
    def ready(self):
        import contracts_core.observers  # noqa: F401
