from rest_framework import serializers

from records.models import HMO

from .common import CleanCharField


class HMOSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    code = CleanCharField(max_length=50, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=HMO.CATEGORY_CHOICES, required=False)
    description = CleanCharField(required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)
    contactPerson = CleanCharField(source='contact_person', max_length=255, required=False, allow_blank=True)
    contactPhone = CleanCharField(source='contact_phone', max_length=50, required=False, allow_blank=True)
    contactEmail = CleanCharField(source='contact_email', max_length=255, required=False, allow_blank=True)
