"""Shared record identity allocator."""

import threading


class IdentityAllocator:
    """Issues strictly increasing ids shared by every collection and nested entity.

    Ids are never reused, even after the record holding one is deleted.
    """

    def __init__(self, start: int):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def reserve(self, observed_id: int) -> None:
        """Make sure ``observed_id`` will never be issued."""
        with self._lock:
            if observed_id >= self._next:
                self._next = observed_id + 1

