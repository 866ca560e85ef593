from contextlib import contextmanager
from typing import Generic, Iterable, Iterator, Optional, Type, TypeVar

from django.db import DatabaseError, models

from .errors import PersistenceError
from .logger import get_logger

T = TypeVar('T', bound=models.Model)

logger = get_logger(__name__).bind(component='common', layer='repository')


class GenericRepository(Generic[T]):
    def __init__(self, model: Type[T]):
        self.model = model

    @contextmanager
    def guard(self, operation: str) -> Iterator[None]:
        """Surface database failures as ``PersistenceError``."""
        try:
            yield
        except DatabaseError as exc:
            logger.error(
                'Store operation failed',
                model=self.model.__name__,
                operation=operation,
                error=str(exc),
            )
            raise PersistenceError(
                f'{self.model.__name__} store failed during {operation}',
                operation=operation,
            ) from exc

    def get(self, **filters) -> Optional[T]:
        with self.guard('get'):
            return self.model.objects.filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        with self.guard('list'):
            return list(self.model.objects.filter(**filters))

    def create(self, **data) -> T:
        with self.guard('create'):
            return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        with self.guard('update'):
            for k, v in data.items():
                setattr(obj, k, v)
            obj.save()
            return obj

    def delete(self, obj: T):
        with self.guard('delete'):
            obj.delete()
