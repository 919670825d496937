from __future__ import annotations

from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def iter_pages(pages: Iterable[Iterable[T]]) -> Iterator[T]:
    """
    Flatten result pages into a single lazy iterator.

    Pages are fetched only as items are consumed, so callers never see page
    boundaries. The iterator is finite and cannot be restarted; list again
    to get a fresh view.
    """
    for page in pages:
        yield from page
