from django.core.management.base import BaseCommand

from clinic.models import User
from clinic.permissions import default_permissions_for

DEFAULT_USERS = [
    # username, password, role, display name
    ("admin", "admin123", "Admin", "Administrator"),
    ("receptionist", "reception123", "Receptionist", "Front Desk"),
    ("doctor", "doctor123", "Doctor", "Duty Doctor"),
    ("labtech", "lab123", "LabTechnician", "Lab Technician"),
]


class Command(BaseCommand):
    help = "Ensure the default staff accounts exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset-permissions',
            action='store_true',
            help='overwrite the permissions of the default accounts with their role defaults',
        )

    def handle(self, *args, **opts):
        for username, password, role, name in DEFAULT_USERS:
            u = User.objects.filter(username=username).first()
            if u is None:
                u = User(username=username, role=role, name=name, created_by='system')
                u.permissions = default_permissions_for(role)
                u.set_password(password)
                u.save()
                self.stdout.write(self.style.SUCCESS(f"created: {username} ({role})"))
                continue
            if opts['reset_permissions']:
                u.permissions = default_permissions_for(u.role)
                u.save(update_fields=['permissions', 'updated_at'])
                self.stdout.write(self.style.SUCCESS(f"reset permissions: {username} ({u.role})"))
            else:
                self.stdout.write(f"exists: {username} ({u.role})")
        self.stdout.write(self.style.SUCCESS("Default users ensured."))
