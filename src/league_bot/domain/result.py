"""Result values for operations whose failures are replies, not exceptions.

Lookups and ingestion updates return ``Ok``/``Err`` so callers can turn a
miss or a rejected update into a reply or a log line without unwinding.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


Result: TypeAlias = Ok[T] | Err[E]


def errors_of(results: Iterable[Result[T, E]]) -> list[E]:
    """Collect the errors of a batch of results, in order."""
    return [result.error for result in results if isinstance(result, Err)]
