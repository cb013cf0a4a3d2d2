"""Persistence layer."""

from trendcast.storage.repository import Repository
from trendcast.storage.storage import Storage

__all__ = [
    "Repository",
    "Storage",
]
