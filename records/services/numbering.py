"""Human-readable identifiers for patients, receipts and claims."""
import random
import time

from django.utils import timezone

from records.models import Claim


def _millis() -> str:
    return str(int(time.time() * 1000))


def generate_mrn() -> str:
    return f"PAT-{_millis()[-6:]}-{random.randint(1000, 9999)}"


def generate_receipt_number() -> str:
    return f"RCP-{_millis()[-6:]}-{random.randint(1000, 9999)}"


def generate_claim_number() -> str:
    year = timezone.now().year
    prefix = f"CLM-{year}-"
    count = Claim.objects.filter(claim_number__startswith=prefix).count()
    number = f"{prefix}{count + 1:04d}"
    while Claim.objects.filter(claim_number=number).exists():
        count += 1
        number = f"{prefix}{count + 1:04d}"
    return number
