"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import Company, CustomUser


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "phone", "email", "created_at")
    search_fields = ("name", "owner__email", "phone", "email")
    readonly_fields = ("created_at",)


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Personal info"),
            {
                "fields": (
                    "username",
                    "first_name",
                    "last_name",
                    "phone",
                    "city",
                    "profile_image",
                )
            },
        ),
        (
            _("Security"),
            {"fields": ("locked_until",)},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "username", "password1", "password2"),
            },
        ),
    )
    list_display = ("email", "username", "phone", "city", "locked_until", "is_staff")
    list_filter = ("groups", "is_staff", "is_superuser", "is_active")
    search_fields = ("email", "username", "phone")
    ordering = ("id",)
    readonly_fields = ("created_at", "updated_at", "last_login", "date_joined")
