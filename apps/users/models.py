"""User domain models for the hotel reservation platform.

The platform distinguishes three roles (administrator, company, customer),
stored as Django auth groups so a user may hold zero or more of them.
Companies are the accounts that own hotels; each one is tied to the user
that signs in for it.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use the international format without spaces."),
)


class CustomUserManager(BaseUserManager):
    """User manager that uses the email as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("An email is required to create a user.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)
        extra_fields.setdefault("username", email)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Strip spaces and dashes so phones are stored one way."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Platform user with city, profile photo and a lockout timestamp."""

    username = models.CharField(
        _("Display name"),
        max_length=150,
        blank=True,
        help_text=_("Defaults to the email address."),
    )
    email = models.EmailField(_("Email"), unique=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    city = models.CharField(_("City"), max_length=100, blank=True)
    profile_image = models.ImageField(_("Profile photo"), upload_to="users/", blank=True, null=True)
    locked_until = models.DateTimeField(_("Locked until"), null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.email

    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())

    def lock(self, years: int = 100) -> None:
        self.locked_until = timezone.now() + timezone.timedelta(days=365 * years)
        self.save(update_fields=["locked_until"])

    def unlock(self) -> None:
        self.locked_until = None
        self.save(update_fields=["locked_until"])


class Company(models.Model):
    """Hotel-owning company, signed in through its owner account."""

    name = models.CharField(max_length=255)
    owner = models.OneToOneField(
        CustomUser,
        on_delete=models.CASCADE,
        related_name="company",
    )
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True, validators=[PHONE_VALIDATOR])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Company")
        verbose_name_plural = _("Companies")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


# Backwards compatibility alias used in tests
User = CustomUser
