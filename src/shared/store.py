"""In-memory entity store: the single owner of every storefront record.

The store keeps one map per record type, keyed by an integer id drawn from a
per-type counter. Records are immutable pydantic models: writes replace a
record with a freshly validated copy, so a shallow copy of each map is a
complete snapshot of the store's state.

Accessor contract:
    create(kind, **fields)      -> validated record with a new id
    get(kind, id)               -> record or None
    update(kind, id, **changes) -> merged record or None
    delete(kind, id)            -> None (idempotent)
    list(kind, predicate)       -> lazy iterator over matching records

Missing ids are reported with ``None``. Only structural violations raise
(``ValidationError`` for schema failures, ``InvalidStateError`` for unique
key collisions).
"""

import itertools
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

import structlog
from protean.exceptions import InvalidStateError
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from shared.errors import validation_error_from

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class EntityStore:
    """Keyed record maps guarded by one re-entrant lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: dict[type[BaseModel], dict[int, BaseModel]] = {}
        self._counters: dict[type[BaseModel], itertools.count] = {}

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _table(self, kind: type[T]) -> dict[int, T]:
        return self._records.setdefault(kind, {})

    def _next_id(self, kind: type[BaseModel]) -> int:
        counter = self._counters.setdefault(kind, itertools.count(1))
        return next(counter)

    @staticmethod
    def _validate(kind: type[T], data: dict) -> T:
        try:
            return kind.model_validate(data)
        except SchemaError as exc:
            raise validation_error_from(exc) from exc

    # -------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------
    def create(self, kind: type[T], unique_on: tuple[str, ...] = (), **fields) -> T:
        """Validate ``fields`` against ``kind``, assign the next id and store the record.

        ``unique_on`` names fields whose combined values must not already be
        present in the collection.
        """
        fields.pop("id", None)
        with self._lock:
            # Validate before drawing an id so rejected input does not consume one
            self._validate(kind, {**fields, "id": 0})

            if unique_on:
                key = tuple(fields.get(name) for name in unique_on)
                for existing in self._table(kind).values():
                    if tuple(getattr(existing, name) for name in unique_on) == key:
                        raise InvalidStateError(
                            f"{kind.__name__} already exists for {dict(zip(unique_on, key, strict=True))}"
                        )

            record = self._validate(kind, {**fields, "id": self._next_id(kind)})
            self._table(kind)[record.id] = record
            return record

    def get(self, kind: type[T], record_id: int) -> T | None:
        with self._lock:
            return self._table(kind).get(record_id)

    def update(self, kind: type[T], record_id: int, **changes) -> T | None:
        """Merge ``changes`` into the stored record and re-validate the result."""
        changes.pop("id", None)
        with self._lock:
            existing = self._table(kind).get(record_id)
            if existing is None:
                return None

            record = self._validate(kind, {**existing.model_dump(), **changes})
            self._table(kind)[record_id] = record
            return record

    def delete(self, kind: type[BaseModel], record_id: int) -> None:
        with self._lock:
            self._table(kind).pop(record_id, None)

    def delete_where(self, kind: type[T], predicate: Callable[[T], bool]) -> int:
        """Remove every matching record in one step and return how many were removed."""
        with self._lock:
            table = self._table(kind)
            doomed = [record_id for record_id, record in table.items() if predicate(record)]
            for record_id in doomed:
                del table[record_id]
            return len(doomed)

    def list(self, kind: type[T], predicate: Callable[[T], bool] | None = None) -> Iterator[T]:
        """Iterate over a point-in-time copy of the collection.

        Each call starts a fresh pass. Insertion order happens to be kept but
        is not part of the contract.
        """
        with self._lock:
            records = list(self._table(kind).values())

        for record in records:
            if predicate is None or predicate(record):
                yield record

    def count(self, kind: type[BaseModel]) -> int:
        with self._lock:
            return len(self._table(kind))

    # -------------------------------------------------------------------
    # Lock scopes
    # -------------------------------------------------------------------
    @contextmanager
    def locked(self):
        """Hold the store lock for a block of reads and single writes.

        Nothing is snapshotted and nothing is undone if the block raises.
        """
        with self._lock:
            yield self

    @contextmanager
    def transaction(self):
        """Run a block of operations as one commit-or-discard unit.

        The store lock is held for the whole block. If the block raises, every
        record map is restored to its state at entry and the exception
        propagates. Id counters are not rewound: ids drawn inside a discarded
        transaction are never handed out again.
        """
        with self._lock:
            snapshot = {kind: dict(table) for kind, table in self._records.items()}
            try:
                yield self
            except BaseException:
                self._records = snapshot
                logger.warning("Store transaction rolled back")
                raise
