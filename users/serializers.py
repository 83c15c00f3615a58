"""Serializers for accounts: profile, registration, sign-in, admin updates.

- UserSerializer: read-only profile representation.
- RegistrationSerializer: creates users with Django password validation.
- EmailOrPhoneTokenObtainPairSerializer: obtain JWTs using email or phone.
- ProfileUpdateSerializer / UserAdminUpdateSerializer: allow-listed updates.
- UserAdminCreateSerializer: accounts opened by an administrator.
"""

from common.exceptions import AuthError
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User


class UserSerializer(serializers.ModelSerializer):
    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "is_admin",
            "is_verified",
            "date_joined",
        ]
        read_only_fields = fields


def tokens_for(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


class RegistrationSerializer(serializers.Serializer):
    """Register a new customer account.

    Email uniqueness is checked case-insensitively; the username defaults to
    the email address.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    phone = serializers.RegexField(r"^\+?[1-9]\d{1,14}$", required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("User with this email already exists.")
        return value

    def validate(self, attrs):
        candidate = User(email=attrs["email"], first_name=attrs["first_name"], last_name=attrs["last_name"])
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user


class SignOutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class EmailOrPhoneTokenObtainPairSerializer(serializers.Serializer):
    """Obtain JWTs by authenticating with either email or phone.

    `identifier` may be an email address (case-insensitive) or an E.164
    phone number. Returns `access`, `refresh` and the user profile.
    """

    identifier = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        identifier = attrs["identifier"].strip()
        if "@" in identifier:
            user = User.objects.filter(email=identifier.lower()).first()
        else:
            user = User.objects.filter(phone=identifier).first()

        if not user or not user.is_active or not user.check_password(attrs["password"]):
            raise AuthError("Invalid credentials", code="invalid_credentials")

        return {**tokens_for(user), "user": UserSerializer(user).data}


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["first_name", "last_name", "phone"]
        extra_kwargs = {"first_name": {"required": False}, "last_name": {"required": False}}


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=8)

    def validate_current_password(self, value):
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Current password is incorrect.")
        return value

    def validate_new_password(self, value):
        try:
            validate_password(value, user=self.context["request"].user)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value


class UserAdminUpdateSerializer(serializers.ModelSerializer):
    """Fields an administrator may change on another account."""

    is_admin = serializers.BooleanField(source="is_staff", required=False)

    class Meta:
        model = User
        fields = ["first_name", "last_name", "email", "phone", "is_admin", "is_verified", "is_active"]
        extra_kwargs = {"email": {"required": False}}

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email=value).exclude(pk=getattr(self.instance, "pk", None)).exists():
            raise serializers.ValidationError("Email is already registered.")
        return value


class UserAdminCreateSerializer(serializers.ModelSerializer):
    """Accounts opened by an administrator.

    Without a password the account gets an unusable one and cannot sign in
    until a password is set.
    """

    is_admin = serializers.BooleanField(source="is_staff", required=False, default=False)
    password = serializers.CharField(write_only=True, required=False, min_length=8)

    class Meta:
        model = User
        fields = ["first_name", "last_name", "email", "phone", "is_admin", "is_verified", "password"]
        extra_kwargs = {
            "first_name": {"required": True, "allow_blank": False},
            "last_name": {"required": True, "allow_blank": False},
            "email": {"validators": []},
        }

    def validate_email(self, value: str) -> str:
        value = value.strip().lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email already exists.")
        return value

    def validate(self, attrs):
        password = attrs.get("password")
        if password:
            candidate = User(email=attrs["email"], first_name=attrs["first_name"], last_name=attrs["last_name"])
            try:
                validate_password(password, user=candidate)
            except DjangoValidationError as exc:
                raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password", None)
        user = User(**validated_data)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save()
        return user
