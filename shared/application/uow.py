"""
Unit of Work Pattern

Groups the repositories of one workflow around a single database
transaction. Every repository opened by a unit of work stages its writes
in the same change set; leaving the ``with`` block cleanly flushes them,
leaving it with an exception discards them and rolls the transaction back.
"""

from abc import ABC, abstractmethod
from typing import Callable
import logging
import sys

from django.db import transaction

from shared.infrastructure.repository import ChangeSet, Repository

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Subclasses declare the repositories they need in ``repositories``;
    each one is available as an attribute of the same name.

    Usage:
        class BookingUnitOfWork(DjangoUnitOfWork):
            repositories = {"rooms": RoomRepository, "coupons": CouponRepository}

        with BookingUnitOfWork() as uow:
            room = uow.rooms.get_one({"pk": room_id})
            room.is_available = False
            uow.rooms.update(room)
            # Transaction commits here
    """

    repositories: dict[str, type[Repository]] = {}

    def __init__(self):
        self.changes = ChangeSet()
        self._transaction = None
        for name, repository_class in self.repositories.items():
            setattr(self, name, repository_class(self.changes))

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        if exc_type is not None:
            self.rollback()
            return self._transaction.__exit__(exc_type, exc_val, exc_tb)
        try:
            self.commit()
        except BaseException:
            self.rollback()
            self._transaction.__exit__(*sys.exc_info())
            raise
        return self._transaction.__exit__(None, None, None)

    def complete(self):
        """Flush staged writes now, keeping the transaction open."""
        self.changes.flush()

    def commit(self):
        logger.debug(f"Committing unit of work with {len(self.changes)} staged write(s)")
        self.changes.flush()

    def rollback(self):
        """Discard staged writes"""
        if len(self.changes):
            logger.warning(f"Rolling back unit of work, discarding {len(self.changes)} staged write(s)")
        self.changes.clear()

    @staticmethod
    def on_commit(callback: Callable[[], None]):
        """Run ``callback`` once the outermost transaction commits."""
        transaction.on_commit(callback)
