from django.contrib.auth.models import User
from rest_framework import serializers


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)
    name = serializers.CharField(min_length=2, max_length=200, required=False)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField(min_length=10)
    password = serializers.CharField(min_length=6, trim_whitespace=False)


class AccountUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    currentPassword = serializers.CharField(source='current_password', required=False, allow_blank=True, trim_whitespace=False)
    newPassword = serializers.CharField(source='new_password', min_length=6, required=False, trim_whitespace=False)


class UserListSerializer(serializers.ModelSerializer):
    """Пользователь для списка в админке"""
    name = serializers.CharField(source='profile.name', default='')
    phone = serializers.CharField(source='profile.phone', default='')
    address = serializers.CharField(source='profile.address', default='')
    created_at = serializers.DateTimeField(source='date_joined')

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'phone', 'address', 'created_at']
        read_only_fields = fields
