"""Tests for the unit of work."""

from __future__ import annotations

from django.test import TestCase

from apps.hotels.models import Amenity
from shared.application.uow import DjangoUnitOfWork
from shared.infrastructure.repository import Repository


class AmenityRepository(Repository[Amenity]):
    model = Amenity


class AmenityUnitOfWork(DjangoUnitOfWork):
    repositories = {"amenities": AmenityRepository}


class UnitOfWorkTests(TestCase):
    def test_clean_exit_commits_staged_writes(self) -> None:
        with AmenityUnitOfWork() as uow:
            uow.amenities.create(Amenity(name="Pool"))
            self.assertEqual(Amenity.objects.count(), 0)

        self.assertEqual(Amenity.objects.count(), 1)

    def test_exception_discards_everything(self) -> None:
        uow = AmenityUnitOfWork()
        with self.assertRaises(RuntimeError):
            with uow:
                uow.amenities.create(Amenity(name="Pool"))
                uow.complete()
                uow.amenities.create(Amenity(name="Spa"))
                raise RuntimeError("boom")

        self.assertEqual(Amenity.objects.count(), 0)
        self.assertEqual(len(uow.changes), 0)

    def test_repositories_are_attributes(self) -> None:
        uow = AmenityUnitOfWork()
        self.assertIsInstance(uow.amenities, AmenityRepository)
        self.assertIs(uow.amenities.changes, uow.changes)
