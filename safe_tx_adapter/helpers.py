"""Pagination helpers for the Safe Transaction Service API."""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from .schemas import PaginatedResponse

T = TypeVar("T")


async def collect_all_pages(
    first_page: PaginatedResponse[T],
    fetch_page: Callable[[str], Awaitable[PaginatedResponse[T]]],
    max_pages: int = 20,
) -> list[T]:
    """Follow ``next`` links and gather every result, in service order.

    Args:
        first_page: Already fetched first page.
        fetch_page: Coroutine function fetching a page by its absolute URL.
        max_pages: Upper bound on pages read, including the first one.

    Returns:
        Results of all pages concatenated.
    """
    results = list(first_page.results)
    next_url = first_page.next
    pages = 1

    while next_url and pages < max_pages:
        page = await fetch_page(next_url)
        results.extend(page.results)
        next_url = page.next
        pages += 1

    return results
