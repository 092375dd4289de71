"""Destination and cooperation lookups."""

from .base import CooperationLookup, CooperationRecord, DestinationLookup, DestinationRecord
from .memory import InMemoryCooperationLookup, InMemoryDestinationLookup

__all__ = [
    "CooperationLookup",
    "CooperationRecord",
    "DestinationLookup",
    "DestinationRecord",
    "InMemoryCooperationLookup",
    "InMemoryDestinationLookup",
]
