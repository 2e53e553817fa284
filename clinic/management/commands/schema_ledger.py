from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from clinic.services.schema import SchemaDriftError, ledger_problems, record_ledger


class Command(BaseCommand):
    help = "Record checksums of applied migrations, or verify them with --verify."

    def add_arguments(self, parser):
        parser.add_argument('--verify', action='store_true', help='fail if any applied migration changed')
        parser.add_argument('--database', default=DEFAULT_DB_ALIAS)

    def handle(self, *args, **opts):
        using = opts['database']
        if opts['verify']:
            problems = ledger_problems(using)
            if problems:
                for p in problems:
                    self.stderr.write(self.style.ERROR(p))
                raise CommandError(str(SchemaDriftError(problems)))
            self.stdout.write(self.style.SUCCESS("schema ledger matches applied migrations"))
            return
        recorded = record_ledger(using=using)
        for label in recorded:
            self.stdout.write(f"recorded {label}")
        self.stdout.write(self.style.SUCCESS(f"{len(recorded)} new ledger entries"))
