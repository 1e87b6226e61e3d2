"""Seeded generators for synthetic card activity."""

from fare_card.generators.trips import TripGenerator

__all__ = ["TripGenerator"]
