# apps/auth/models.py

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone
from django.conf import settings
import shortuuid
from datetime import timedelta

from apps.core.models import TimeStampedModel


class UserManager(BaseUserManager):
    """Manager for the email-keyed User model"""
    use_in_migrations = True

    def normalize_email(self, email):
        return (email or '').strip().lower()

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email address must be set')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.Role.ADMIN)
        extra_fields.setdefault('email_verified_at', timezone.now())

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Storefront customer or back-office admin, identified by email"""

    class Role(models.TextChoices):
        USER = 'USER', 'User'
        ADMIN = 'ADMIN', 'Admin'

    username = None
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=60)
    last_name = models.CharField(max_length=60)

    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)

    # Null until the address is proven via the verification link
    email_verified_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    objects = UserManager()

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.full_name} ({self.email})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    @property
    def is_email_verified(self):
        return self.email_verified_at is not None

    def mark_email_verified(self):
        """One-way UNVERIFIED -> VERIFIED transition"""
        if self.email_verified_at is None:
            self.email_verified_at = timezone.now()
            self.save(update_fields=['email_verified_at', 'updated_at'])


class Address(TimeStampedModel):
    """Shipping destination; the storefront keeps one current address per user"""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='addresses')
    line1 = models.CharField(max_length=200)
    line2 = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    postal = models.CharField(max_length=20)
    country = models.CharField(max_length=100)

    class Meta:
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.line1}, {self.city} ({self.country})"

    @property
    def lines(self):
        return [
            line for line in [
                self.line1,
                self.line2,
                f"{self.postal} {self.city}".strip(),
                self.state,
                self.country,
            ] if line
        ]

    def snapshot(self):
        """Frozen copy stored on orders"""
        return {
            'line1': self.line1,
            'line2': self.line2,
            'city': self.city,
            'state': self.state,
            'postal': self.postal,
            'country': self.country,
        }


class AccountToken(models.Model):
    """
    Single-use capability token.

    Each purpose gets its own row, so a verification token and the
    auto-login token issued when it is redeemed never share storage.
    Validity is a database lookup only; tokens carry no claims.
    """

    class Purpose(models.TextChoices):
        VERIFY_EMAIL = 'verify_email', 'Email verification'
        AUTO_LOGIN = 'auto_login', 'Auto-login after verification'
        PASSWORD_RESET = 'password_reset', 'Password reset'

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='account_tokens')
    purpose = models.CharField(max_length=20, choices=Purpose.choices)
    token = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    consumed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['user', 'purpose']),
        ]

    def __str__(self):
        return f"{self.get_purpose_display()} token for {self.user.email}"

    def save(self, *args, **kwargs):
        if not self.token:
            self.token = shortuuid.uuid()
        if self.expires_at is None and not self.pk:
            ttl = self.ttl_for(self.purpose)
            if ttl:
                self.expires_at = timezone.now() + ttl
        super().save(*args, **kwargs)

    @staticmethod
    def ttl_for(purpose):
        """Lifetime for a purpose, None when the token never expires"""
        if purpose == AccountToken.Purpose.VERIFY_EMAIL:
            hours = settings.EMAIL_VERIFICATION_TOKEN_TTL_HOURS
            return timedelta(hours=hours) if hours else None
        if purpose == AccountToken.Purpose.AUTO_LOGIN:
            minutes = settings.AUTO_LOGIN_TOKEN_TTL_MINUTES
            return timedelta(minutes=minutes) if minutes else None
        if purpose == AccountToken.Purpose.PASSWORD_RESET:
            return timedelta(minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES)
        return None

    @property
    def is_expired(self):
        return self.expires_at is not None and timezone.now() >= self.expires_at

    @property
    def is_usable(self):
        return self.consumed_at is None and not self.is_expired
