from django.core.management.base import BaseCommand, CommandError

from clinic.services.billing import purge_billing


class Command(BaseCommand):
    help = "Delete every patient service bill and payment. Patients and stock are kept."

    def add_arguments(self, parser):
        parser.add_argument('--yes', action='store_true', help='confirm the deletion')

    def handle(self, *args, **opts):
        if not opts['yes']:
            raise CommandError("refusing to purge billing data without --yes")
        counts = purge_billing()
        self.stdout.write(self.style.SUCCESS(
            f"deleted {counts['services']} service bills and {counts['payments']} payments"
        ))
