from rest_framework import serializers

from records.models import User

from .common import CleanCharField


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True)
    username = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField()

    def validate(self, attrs):
        identifier = (attrs.get('email') or attrs.get('username') or '').strip()
        if not identifier:
            raise serializers.ValidationError('Email is required')
        attrs['identifier'] = identifier
        return attrs


class UserCreateSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)
    assignedPharmacyId = serializers.IntegerField(required=False, allow_null=True)


class UserUpdateSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255, required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True, required=False)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, required=False)
    assignedPharmacyId = serializers.IntegerField(required=False, allow_null=True)
    isActive = serializers.BooleanField(source='is_active', required=False)


class ResetPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True)
