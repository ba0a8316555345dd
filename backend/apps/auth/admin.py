# apps/auth/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm as BaseUserChangeForm
from django.contrib.auth.forms import UserCreationForm as BaseUserCreationForm
from django.utils.translation import gettext_lazy as _

from .models import AccountToken, Address, User


class UserCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'role')


class UserChangeForm(BaseUserChangeForm):
    class Meta:
        model = User
        fields = '__all__'


class AddressInline(admin.StackedInline):
    model = Address
    extra = 0


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for email-keyed storefront accounts."""

    form = UserChangeForm
    add_form = UserCreationForm

    ordering = ['-created_at']
    list_display = ['email', 'full_name', 'role', 'email_verified_display', 'is_active', 'created_at']
    list_filter = ['role', 'is_active', 'created_at']
    search_fields = ['email', 'first_name', 'last_name']
    readonly_fields = ['last_login', 'created_at', 'updated_at']
    inlines = [AddressInline]

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal info'), {'fields': ('first_name', 'last_name')}),
        (_('Access'), {'fields': ('role', 'email_verified_at', 'is_active', 'is_staff', 'is_superuser')}),
        (_('Timestamps'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'role', 'password1', 'password2'),
        }),
    )

    def email_verified_display(self, obj):
        return obj.is_email_verified
    email_verified_display.boolean = True
    email_verified_display.short_description = _('Verified')


@admin.register(AccountToken)
class AccountTokenAdmin(admin.ModelAdmin):
    list_display = ['user', 'purpose', 'created_at', 'expires_at', 'consumed_at']
    list_filter = ['purpose']
    search_fields = ['user__email']
    readonly_fields = ['token', 'created_at']
