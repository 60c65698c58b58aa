"""Hosted card checkout for reservations."""
