"""Repositories for users and companies."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore

from shared.infrastructure.repository import ChangeSet, Repository
from shared.infrastructure.storage import ImageStorage

from .models import Company, CustomUser


class UserRepository(Repository[CustomUser]):
    model = CustomUser

    def __init__(self, changes: ChangeSet | None = None, storage: ImageStorage | None = None) -> None:
        super().__init__(changes)
        self.storage = storage or ImageStorage()

    def search(self, search: str | None = None):
        """Users matching ``search`` in username, email, phone or role name."""
        qs = self.queryset(include=("groups", "company"), tracked=False)
        if search:
            search = search.strip()
            qs = qs.filter(
                Q(username__icontains=search)
                | Q(email__icontains=search)
                | Q(phone__icontains=search)
                | Q(groups__name__icontains=search)
            ).distinct()
        return qs.order_by("id")

    def update_profile_image(self, user: CustomUser, upload) -> CustomUser:
        """Replace the user's profile photo; the previous file goes once the transaction commits."""
        if upload is None:
            return user
        old_name = user.profile_image.name if user.profile_image else None
        user.profile_image.name = self.storage.save(f"users/{user.pk}", upload)
        transaction.on_commit(lambda: self.storage.delete(old_name))
        self.update(user)
        return user


class CompanyRepository(Repository[Company]):
    model = Company

    def for_user(self, user_id: int | None) -> Company | None:
        if user_id is None:
            return None
        return self.get_one({"owner_id": user_id}, tracked=False)
