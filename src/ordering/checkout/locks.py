"""Per-user mutual exclusion for checkout."""

import threading
from contextlib import contextmanager


class _UserLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class UserLocks:
    """Hands out one lock per user id.

    Two checkouts for the same user run one after the other; checkouts for
    different users do not wait on each other. A user's lock is dropped as
    soon as nobody holds it or waits for it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, _UserLock] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, user_id: int):
        with self._guard:
            entry = self._locks.setdefault(user_id, _UserLock())
            entry.holders += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[user_id]
