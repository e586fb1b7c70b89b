# (c) Nelen & Schuurmans

import logging
from collections.abc import Callable
from collections.abc import Iterator
from typing import TypeVar

from ..domain.cancellation import CancelToken
from ..domain.exceptions import BadRequest
from ..domain.pagination import Page
from ..domain.pagination import PageOptions

__all__ = ["DEFAULT_PAGE_SIZE", "fetch_all", "iter_pages"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100


def iter_pages(
    fetch_page: Callable[[PageOptions], Page[T]],
    page_size: int = DEFAULT_PAGE_SIZE,
    cancel: CancelToken | None = None,
) -> Iterator[Page[T]]:
    """Yield consecutive pages, starting at page 1, until the listing is exhausted.

    Pages are requested one at a time. Iteration stops after the page that
    brings the number of received items up to the total count reported by the
    server, or after an empty page.

    Exceptions raised by fetch_page propagate unchanged. Pages that were yielded
    before that remain with the caller; use fetch_all to get all-or-nothing.

    Args:
        fetch_page: Retrieves one page for the given PageOptions.
        page_size: Number of items per request, at least 1.
        cancel: Checked before every page request.
    """
    if page_size < 1:
        raise BadRequest(f"page_size must be at least 1, got {page_size}")
    page_options = PageOptions(page_number=1, page_size=page_size)
    received = 0
    total_count: int | None = None
    while True:
        if cancel is not None:
            cancel.check()
        page = fetch_page(page_options)
        if total_count is not None and page.total_count != total_count:
            logger.warning(
                "total count changed from %d to %d while fetching page %d",
                total_count,
                page.total_count,
                page_options.page_number,
            )
        total_count = page.total_count
        received += len(page.items)
        logger.debug(
            "fetched page %d: %d items (%d of %d)",
            page_options.page_number,
            len(page.items),
            received,
            total_count,
        )
        yield page
        if not page.items or received >= total_count:
            return
        page_options = page_options.next_page()


def fetch_all(
    fetch_page: Callable[[PageOptions], Page[T]],
    page_size: int = DEFAULT_PAGE_SIZE,
    cancel: CancelToken | None = None,
) -> list[T]:
    """Fetch every page of a listing and return all items in order.

    Example, all findings of a project:

        fetch_all(
            lambda po: client.finding.get_all_for_project(uuid, page_options=po)
        )

    Either the complete listing is returned or an exception is raised; a partial
    listing is never returned. The pages are not read in a single transaction:
    when the server-side collection changes during the traversal, the result
    is best-effort (a warning is logged if the total count shifts).

    Raises:
        BadRequest: page_size is smaller than 1
        Cancelled: the cancel token was cancelled or its deadline passed
        Exception: anything raised by fetch_page, unchanged
    """
    items: list[T] = []
    for page in iter_pages(fetch_page, page_size=page_size, cancel=cancel):
        items.extend(page.items)
    return items
