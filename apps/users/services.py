"""Identity and user-administration services."""

from __future__ import annotations

import logging

from django.contrib.auth.models import Group  # type: ignore
from django.db import transaction  # type: ignore

from shared.application.auth import AuthContext

from . import roles
from .models import CustomUser
from .repositories import UserRepository

logger = logging.getLogger(__name__)


class IdentityOperationFailed(Exception):
    """Role, lockout or profile change rejected."""


class UserNotFound(Exception):
    """No user with the requested id."""


def log_admin_action(auth: AuthContext, action: str, entity: str) -> None:
    logger.info(f"Admin action: {auth.username or auth.user_id} {action} {entity}")


def _load_user(repository: UserRepository, user_id) -> CustomUser:
    user = repository.get_one({"pk": user_id})
    if user is None:
        raise UserNotFound(f"User {user_id} not found")
    return user


def assign_single_role(user: CustomUser, role: str) -> None:
    """Drop every role membership of ``user`` and grant exactly ``role``."""
    group = Group.objects.filter(name=role).first()
    if group is None:
        raise IdentityOperationFailed(f"Unknown role: {role}")
    user.groups.clear()
    user.groups.add(group)


def toggle_lockout(auth: AuthContext, user_id) -> CustomUser:
    """Unlock a locked user, lock an active one (for 100 years)."""
    repository = UserRepository()
    with transaction.atomic():
        user = _load_user(repository, user_id)
        if user.pk == auth.user_id:
            raise IdentityOperationFailed("You cannot lock your own account.")
        if user.is_locked:
            user.unlock()
            log_admin_action(auth, "unlock", f"User {user.email}")
        else:
            user.lock()
            log_admin_action(auth, "lock", f"User {user.email}")
    return user


def edit_user(
    auth: AuthContext,
    user_id,
    *,
    email: str | None = None,
    phone: str | None = None,
    city: str | None = None,
    role: str | None = None,
    profile_image=None,
) -> CustomUser:
    """
    Update contact details, replace the role and optionally the photo.

    A field passed as ``None`` keeps its current value. Without ``role``
    the user's role memberships are left as they are.
    """
    if role is not None and role not in roles.ALL_ROLES:
        raise IdentityOperationFailed(f"Unknown role: {role}")

    repository = UserRepository()
    with transaction.atomic():
        user = _load_user(repository, user_id)
        if email is not None:
            email = CustomUser.objects.normalize_email(email)
            if CustomUser.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
                raise IdentityOperationFailed(f"Email '{email}' is already taken.")
            user.email = email
            user.username = email

        repository.update_profile_image(user, profile_image)
        if phone is not None:
            user.phone = CustomUser.objects.normalize_phone(phone) if phone else ""
        if city is not None:
            user.city = city
        repository.update(user)
        repository.commit()

        if role is not None:
            assign_single_role(user, role)

    log_admin_action(auth, "edit", f"User {user.email}")
    return user


def delete_user(auth: AuthContext, user_id) -> None:
    repository = UserRepository()
    with transaction.atomic():
        user = _load_user(repository, user_id)
        if user.pk == auth.user_id:
            raise IdentityOperationFailed("You cannot delete your own account.")
        email = user.email
        photo = user.profile_image.name if user.profile_image else None
        repository.delete(user)
        repository.commit()
        transaction.on_commit(lambda: repository.storage.delete(photo))
    log_admin_action(auth, "delete", f"User {email}")


def update_profile(user: CustomUser, *, phone=None, city=None, profile_image=None) -> CustomUser:
    """Self-service profile change: phone, city and photo."""
    repository = UserRepository()
    with transaction.atomic():
        if phone is not None:
            user.phone = CustomUser.objects.normalize_phone(phone) if phone else ""
        if city is not None:
            user.city = city
        repository.update_profile_image(user, profile_image)
        repository.update(user)
        repository.commit()
    return user


def register_customer(*, email: str, password: str, phone: str = "", city: str = "") -> CustomUser:
    with transaction.atomic():
        user = CustomUser.objects.create_user(email=email, password=password, phone=phone, city=city)
        assign_single_role(user, roles.CUSTOMER)
    logger.info(f"Customer registered: {user.email}")
    return user
