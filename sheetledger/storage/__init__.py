"""Mini README: Record stores for sales and expenses.

Structure:
    * RecordStore - async persistence interface.
    * MemoryRecordStore - in-process backend used by default and in tests.
    * MongoRecordStore - MongoDB backend for durable deployments.
    * build_store - choose a backend from ``LedgerSettings``.
"""

from __future__ import annotations

from ..configuration import LedgerSettings
from ..logging_utils import get_logger
from .base import RecordStore
from .memory import MemoryRecordStore
from .mongo import MongoRecordStore

LOGGER = get_logger(__name__)


def build_store(settings: LedgerSettings) -> RecordStore:
    """Create the record store described by the settings."""

    if settings.mongodb_uri:
        LOGGER.info("Using MongoDB record store (database '%s')", settings.mongodb_database)
        return MongoRecordStore(settings.mongodb_uri, settings.mongodb_database)
    LOGGER.warning("No MongoDB URI configured; records will be kept in memory only")
    return MemoryRecordStore()


__all__ = ["MemoryRecordStore", "MongoRecordStore", "RecordStore", "build_store"]
