import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from .base import EntityStore, T
from .locks import KeyedLocks

logger = logging.getLogger(__name__)


def _column_defaults(model: type) -> dict[str, Any]:
    """Evaluate the Python-side column defaults a flush would have applied."""
    values: dict[str, Any] = {}
    for column in model.__table__.columns:
        default = column.default
        if default is None:
            continue
        if default.is_scalar:
            values[column.key] = default.arg
        elif default.is_callable:
            # SQLAlchemy wraps zero-arg callables to accept an execution context
            values[column.key] = default.arg(None)
    return values


class MemoryStore(EntityStore):
    """
    Process-local store holding transient model instances in plain dicts.
    Ids come from a counter per entity type, starting at 1 and never reused.
    """

    def __init__(self, locks: Optional[KeyedLocks] = None) -> None:
        self._mutex = threading.RLock()
        self._tables: dict[type, dict[int, Any]] = {}
        self._counters: dict[type, int] = {}
        self.locks = locks or KeyedLocks()

    def _table(self, model: type) -> dict[int, Any]:
        return self._tables.setdefault(model, {})

    def create(self, model: type[T], **fields: Any) -> T:
        values = _column_defaults(model)
        values.update(fields)
        with self._mutex:
            entity_id = self._counters.get(model, 0) + 1
            self._counters[model] = entity_id
            values["id"] = entity_id
            entity = model(**values)
            self._table(model)[entity_id] = entity
        logger.debug("Created %s #%s", model.__name__, entity_id)
        return entity

    def get(self, model: type[T], entity_id: int) -> Optional[T]:
        with self._mutex:
            return self._table(model).get(entity_id)

    def list_all(self, model: type[T]) -> list[T]:
        with self._mutex:
            return [self._table(model)[k] for k in sorted(self._table(model))]

    def list_where(self, model: type[T], predicate: Optional[Callable[[T], bool]] = None, **criteria: Any) -> list[T]:
        rows = self.list_all(model)
        if criteria:
            rows = [r for r in rows if all(getattr(r, k) == v for k, v in criteria.items())]
        if predicate is not None:
            rows = [r for r in rows if predicate(r)]
        return rows

    def update(self, model: type[T], entity_id: int, **changes: Any) -> Optional[T]:
        with self._mutex:
            entity = self._table(model).get(entity_id)
            if entity is None:
                return None
            for key, value in changes.items():
                setattr(entity, key, value)
            return entity

    def delete(self, model: type[T], entity_id: int) -> bool:
        with self._mutex:
            return self._table(model).pop(entity_id, None) is not None

    @contextmanager
    def property_scope(self, property_id: int) -> Iterator[None]:
        with self.locks.hold(property_id):
            yield
