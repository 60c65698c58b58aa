"""Explicit authentication context handed to application services."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthContext:
    """Who is calling: user id and role names, nothing else."""

    user_id: int | None
    roles: frozenset[str] = field(default_factory=frozenset)
    username: str = ""

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(user_id=None)

    @classmethod
    def from_user(cls, user) -> "AuthContext":
        if user is None or not user.is_authenticated:
            return cls.anonymous()
        roles = frozenset(user.groups.values_list("name", flat=True))
        return cls(user_id=user.pk, roles=roles, username=user.get_username())

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def has_role(self, role: str) -> bool:
        return role in self.roles
