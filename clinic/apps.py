from django.apps import AppConfig
from django.db.models.signals import post_migrate


class ClinicConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'clinic'
    verbose_name = 'Front desk'

    def ready(self):
        from .services.schema import record_ledger_after_migrate

        post_migrate.connect(record_ledger_after_migrate, sender=self, dispatch_uid='clinic.schema_ledger')
