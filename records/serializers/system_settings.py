from rest_framework import serializers

from .common import CleanCharField


class SettingsSerializer(serializers.Serializer):
    """Every field is optional; only supplied keys are applied."""
    hospitalName = CleanCharField(source='hospital_name', max_length=255, required=False, allow_blank=True)
    # Logos are stored as data URIs, so no markup stripping here.
    hospitalLogo = serializers.CharField(source='hospital_logo', required=False, allow_blank=True, trim_whitespace=False)
    address = CleanCharField(max_length=500, required=False, allow_blank=True)
    phone = CleanCharField(max_length=50, required=False, allow_blank=True)
    email = CleanCharField(max_length=255, required=False, allow_blank=True)
    website = CleanCharField(max_length=255, required=False, allow_blank=True)
    systemVersion = CleanCharField(source='system_version', max_length=50, required=False, allow_blank=True)
    reportHeader = CleanCharField(source='report_header', required=False, allow_blank=True)
    reportFooter = CleanCharField(source='report_footer', required=False, allow_blank=True)
    currencySymbol = CleanCharField(source='currency_symbol', max_length=10, required=False, allow_blank=True)
