import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import StorageError
from ..models import Property
from .base import EntityStore, T
from .locks import KeyedLocks

logger = logging.getLogger(__name__)


class SqlStorage(EntityStore):
    """
    Entity store over a SQLAlchemy session.

    Outside of ``property_scope`` every mutation is committed on its own.
    Inside it, writes are only flushed and the whole block commits (or rolls
    back) once, while the property row is held with SELECT ... FOR UPDATE.
    SQLite has no row locks, so the scope also takes a process-local lock
    keyed by property id.
    """

    def __init__(self, db: Session, locks: Optional[KeyedLocks] = None) -> None:
        self.db = db
        self.locks = locks or KeyedLocks()
        self._depth = 0

    @contextmanager
    def _errors(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Storage operation failed, rolled back: %s", exc)
            raise StorageError(str(exc)) from exc

    def _commit(self) -> None:
        if self._depth:
            self.db.flush()
        else:
            self.db.commit()

    def create(self, model: type[T], **fields: Any) -> T:
        with self._errors():
            entity = model(**fields)
            self.db.add(entity)
            self._commit()
            return entity

    def get(self, model: type[T], entity_id: int) -> Optional[T]:
        with self._errors():
            return self.db.get(model, entity_id)

    def list_all(self, model: type[T]) -> list[T]:
        with self._errors():
            return self.db.query(model).order_by(model.id.asc()).all()

    def list_where(self, model: type[T], predicate: Optional[Callable[[T], bool]] = None, **criteria: Any) -> list[T]:
        with self._errors():
            rows = self.db.query(model).filter_by(**criteria).order_by(model.id.asc()).all()
        if predicate is not None:
            rows = [r for r in rows if predicate(r)]
        return rows

    def update(self, model: type[T], entity_id: int, **changes: Any) -> Optional[T]:
        with self._errors():
            entity = self.db.get(model, entity_id)
            if entity is None:
                return None
            for key, value in changes.items():
                setattr(entity, key, value)
            self._commit()
            return entity

    def delete(self, model: type[T], entity_id: int) -> bool:
        with self._errors():
            entity = self.db.get(model, entity_id)
            if entity is None:
                return False
            self.db.delete(entity)
            self._commit()
            return True

    @contextmanager
    def property_scope(self, property_id: int) -> Iterator[None]:
        with self.locks.hold(property_id):
            self._depth += 1
            try:
                if self._depth == 1:
                    with self._errors():
                        self.db.query(Property).filter(Property.id == property_id).with_for_update().first()
                yield
                if self._depth == 1:
                    with self._errors():
                        self.db.commit()
            except Exception:
                if self._depth == 1:
                    self.db.rollback()
                raise
            finally:
                self._depth -= 1
