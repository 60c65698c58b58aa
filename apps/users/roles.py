"""Role names. Roles are stored as Django auth groups."""

from __future__ import annotations

ADMIN = "Admin"
COMPANY = "Company"
CUSTOMER = "Customer"

ALL_ROLES = (ADMIN, COMPANY, CUSTOMER)


def ensure_role_groups(**kwargs) -> None:
    """post_migrate hook: make sure every role group exists."""
    from django.contrib.auth.models import Group  # type: ignore

    for name in ALL_ROLES:
        Group.objects.get_or_create(name=name)
