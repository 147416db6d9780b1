"""
In-process storage backend.

Backs the memory repositories used by the unit tests.
Every compound operation runs under one re-entrant lock, so the
all-or-nothing and single-winner guarantees of the ORM adapters hold
here too, across threads and across asyncio tasks.
"""
import itertools
import threading
from typing import Dict


class InMemoryStore:
    """
    Shared tables for the memory repositories.

    Repositories built on the same store see each other's writes, the
    way Django repositories share one database.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.resellers: Dict[int, object] = {}
        self.referral_tokens: Dict[str, object] = {}
        self.license_keys: Dict[int, object] = {}
        # key id -> device id -> DeviceRegistration
        self.registrations: Dict[int, Dict[str, object]] = {}
        self._sequences: Dict[str, itertools.count] = {}

    def next_id(self, table: str) -> int:
        """Allocate the next id for ``table`` (starting at 1)."""
        with self.lock:
            counter = self._sequences.setdefault(table, itertools.count(1))
            return next(counter)

    def key_id_for(self, key: str):
        """Return the id of the key with string ``key``, or None."""
        with self.lock:
            for key_id, entity in self.license_keys.items():
                if entity.key == key:
                    return key_id
            return None
