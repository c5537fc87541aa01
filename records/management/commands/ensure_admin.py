# records/management/commands/ensure_admin.py
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from records.models import User


class Command(BaseCommand):
    help = "Ensure the default admin account exists, is active and has the admin role (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None)
        parser.add_argument("--password", default=None)

    def handle(self, *args, **opts):
        email = (opts["email"] or settings.DEFAULT_ADMIN_EMAIL).strip().lower()
        password = opts["password"] or settings.DEFAULT_ADMIN_PASSWORD
        if not password:
            raise CommandError("No password given; pass --password or set DEFAULT_ADMIN_PASSWORD.")

        user, created = User.objects.get_or_create(
            email=email,
            defaults={"username": email, "name": "Administrator", "role": User.ROLE_ADMIN},
        )
        user.role = User.ROLE_ADMIN
        user.is_active = True
        user.is_staff = True
        user.is_superuser = True
        user.set_password(password)
        user.save()
        verb = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"ok: {email} {verb}"))
