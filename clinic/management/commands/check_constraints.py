from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from clinic.services.schema import IntegrityPolicyError, all_foreign_keys, check_clinical_isolation


class Command(BaseCommand):
    help = "List every foreign key in the database and enforce clinical/inventory isolation."

    def add_arguments(self, parser):
        parser.add_argument('--database', default=DEFAULT_DB_ALIAS)

    def handle(self, *args, **opts):
        using = opts['database']
        for table, fks in all_foreign_keys(using).items():
            for column, target, target_column in fks:
                self.stdout.write(f"{table}.{column} -> {target}.{target_column}")
        try:
            check_clinical_isolation(using)
        except IntegrityPolicyError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS("clinical records are isolated from inventory"))
