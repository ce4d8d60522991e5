"""Explicit operation outcomes.

Service calls never return None to mean "missing". They return one of:

    Found(value)     the operation succeeded
    NotFound(error)  the target record does not exist
    Failure(error)   validation or store failure

Callers branch with isinstance()::

    outcome = await service.delete(book_id)
    if isinstance(outcome, NotFound):
        ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from core.errors import CatalogError, NotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    error: NotFoundError


@dataclass(frozen=True)
class Failure:
    error: CatalogError


Outcome = Union[Found[T], NotFound, Failure]
