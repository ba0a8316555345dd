# apps/auth/serializers.py

from rest_framework import serializers
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils import timezone

from apps.core.exceptions import Conflict
from .models import Address

User = get_user_model()


class GuestCartItemSerializer(serializers.Serializer):
    """One line of a cart kept client-side before sign-in"""
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class SignupSerializer(serializers.Serializer):
    """Serializer for storefront signup"""
    first_name = serializers.CharField(min_length=2, max_length=60)
    last_name = serializers.CharField(min_length=2, max_length=60)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, validators=[validate_password])
    accept_terms = serializers.BooleanField()

    def validate_accept_terms(self, value):
        if value is not True:
            raise serializers.ValidationError('Terms must be accepted')
        return value


class TokenSerializer(serializers.Serializer):
    """Carries a verification or auto-login token"""
    token = serializers.CharField(max_length=64)
    guest_cart = GuestCartItemSerializer(many=True, required=False)


class LoginSerializer(serializers.Serializer):
    """Serializer for email + password login"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    guest_cart = GuestCartItemSerializer(many=True, required=False)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get('request'),
            email=attrs['email'],
            password=attrs['password'],
        )
        if not user:
            raise serializers.ValidationError('Invalid credentials')

        attrs['user'] = user
        return attrs


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordResetSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=64)
    password = serializers.CharField(write_only=True, validators=[validate_password])


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class UserProfileSerializer(serializers.ModelSerializer):
    """The caller's own account"""
    full_name = serializers.ReadOnlyField()
    email_verified = serializers.BooleanField(source='is_email_verified', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name',
            'role', 'email_verified', 'email_verified_at', 'last_login', 'created_at',
        ]
        read_only_fields = [
            'id', 'email', 'role', 'email_verified_at', 'last_login', 'created_at',
        ]


class AddressSerializer(serializers.ModelSerializer):
    line1 = serializers.CharField(min_length=3, max_length=200)
    line2 = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    city = serializers.CharField(min_length=2, max_length=100)
    state = serializers.CharField(min_length=2, max_length=100)
    postal = serializers.CharField(min_length=3, max_length=20)
    country = serializers.CharField(min_length=2, max_length=100)

    class Meta:
        model = Address
        fields = ['id', 'line1', 'line2', 'city', 'state', 'postal', 'country', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class AdminUserSerializer(serializers.ModelSerializer):
    """
    Back-office view of a user account.

    ``password`` is accepted on write and hashed; it is never returned.
    """
    password = serializers.CharField(
        write_only=True, required=False, allow_blank=False, validators=[validate_password]
    )
    full_name = serializers.ReadOnlyField()
    email_verified = serializers.BooleanField(source='is_email_verified', read_only=True)
    order_count = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name', 'role',
            'password', 'is_active', 'email_verified', 'email_verified_at',
            'order_count', 'last_login', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'email_verified_at', 'last_login', 'created_at', 'updated_at']
        extra_kwargs = {
            # uniqueness is checked in validate_email so a clash maps to 409
            'email': {'validators': []},
        }

    def get_order_count(self, obj):
        # list views annotate the count, single objects fall back to a query
        count = getattr(obj, 'order_count', None)
        return obj.orders.count() if count is None else count

    def validate_email(self, value):
        value = User.objects.normalize_email(value)
        clash = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise Conflict('Email already registered')
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': 'This field is required.'})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        # Accounts created by an admin skip the verification email
        return User.objects.create_user(
            password=password,
            email_verified_at=timezone.now(),
            **validated_data,
        )

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class AdminUserDetailSerializer(AdminUserSerializer):
    """Single user with their addresses and order history summary"""
    addresses = AddressSerializer(many=True, read_only=True)
    orders = serializers.SerializerMethodField()

    class Meta(AdminUserSerializer.Meta):
        fields = AdminUserSerializer.Meta.fields + ['addresses', 'orders']

    def get_orders(self, obj):
        return [
            {
                'id': order.id,
                'reference': order.reference,
                'total': order.total,
                'currency': order.currency,
                'status': order.status,
                'created_at': order.created_at,
            }
            for order in obj.orders.all()
        ]
