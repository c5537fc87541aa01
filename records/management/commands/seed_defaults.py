# records/management/commands/seed_defaults.py
from django.core.management.base import BaseCommand

from records.models import Pharmacy
from records.services.system_settings import get_settings


class Command(BaseCommand):
    help = "Create the system settings record and a main pharmacy if they are missing (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--pharmacy-name", default="Main Pharmacy")

    def handle(self, *args, **opts):
        setting = get_settings()
        self.stdout.write(self.style.SUCCESS(f"settings: {setting.hospital_name}"))

        main = Pharmacy.current_default()
        if main is None:
            main, _ = Pharmacy.objects.get_or_create(name=opts["pharmacy_name"])
            main.is_main_pharmacy = True
            main.save()
            self.stdout.write(self.style.SUCCESS(f"main pharmacy: {main.name} (created)"))
        else:
            self.stdout.write(f"main pharmacy: {main.name} (exists)")
