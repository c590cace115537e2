"""Stream a cursor-paginated ARM listing from a background producer.

A :class:`PageEnumerator` owns one daemon thread that fetches pages and hands
their items over one at a time, so the caller can start working on the first
page while later pages are still being requested. The outcome of the whole
enumeration (an error, or ``None`` for success) is delivered once, through a
single-slot queue, after the last item.

Consumers must drain before checking::

    with list_subscriptions(client) as subscriptions:
        for subscription in subscriptions:
            ...
        subscriptions.raise_for_error()

or use :func:`drain`, which does exactly that.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Generic, Iterator, TypeVar

from vaultscout.errors import EnumerationProtocolError, FetchError, VaultScoutError

from .models import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

# How often a blocked hand-off wakes up to check for cancellation.
_POLL_INTERVAL = 0.1

_END = object()
_NO_ERROR = object()
_UNREAD = object()


class PageEnumerator(Generic[T]):
    """Single-producer, single-consumer stream over a paginated listing.

    Args:
        fetch_first: Returns the first page.
        fetch_next: Returns the page following the given one.
        name: What is being listed, for log lines and the thread name.
    """

    def __init__(
        self,
        fetch_first: Callable[[], Page[T]],
        fetch_next: Callable[[Page[T]], Page[T]],
        *,
        name: str = "items",
    ) -> None:
        self.name = name
        self.pages_fetched = 0
        self.rebind_count = 0

        self._fetch_first = fetch_first
        self._fetch_next = fetch_next
        self._items: queue.Queue = queue.Queue(maxsize=1)
        self._errors: queue.Queue = queue.Queue(maxsize=1)
        self._cancelled = threading.Event()
        self._drained = False
        self._outcome: object = _UNREAD

        self._producer = threading.Thread(
            target=self._produce, name=f"enumerate-{name}", daemon=True
        )
        self._producer.start()

    def _produce(self) -> None:
        fetch: Callable[[], Page[T]] = self._fetch_first
        rebound = False
        page: Page[T] | None = None

        def fetch_following() -> Page[T]:
            # Reads ``page`` at call time, i.e. the most recently fetched one.
            return self._fetch_next(page)

        outcome: object = _NO_ERROR
        try:
            while not self._cancelled.is_set():
                page = fetch()
                self.pages_fetched += 1
                logger.info("Fetched %s page %s", self.name, self.pages_fetched)

                for item in page.items:
                    if not self._hand_off(item):
                        return

                if page.next_link is None:
                    break

                if not rebound:
                    fetch = fetch_following
                    rebound = True
                    self.rebind_count += 1
                logger.debug("Fetching next %s page via nextLink", self.name)
        except Exception as exc:  # handed to the consumer as the outcome
            logger.debug("Listing %s failed: %s", self.name, exc)
            outcome = exc
        finally:
            # The outcome goes first so it is readable once the end is seen.
            self._errors.put(outcome)
            self._hand_off(_END)

    def _hand_off(self, item: object) -> bool:
        """Block until the consumer has room for ``item`` or we are cancelled."""
        while not self._cancelled.is_set():
            try:
                self._items.put(item, timeout=_POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        # a closed stream ends here; the producer will not send the end marker
        if self._drained or self._cancelled.is_set():
            raise StopIteration
        item = self._items.get()
        if item is _END:
            self._drained = True
            raise StopIteration
        return item

    @property
    def drained(self) -> bool:
        return self._drained

    def outcome(self) -> BaseException | None:
        """Return the error that ended the enumeration, or ``None``.

        Raises:
            EnumerationProtocolError: If the item stream has not been drained.
        """
        if not self._drained:
            raise EnumerationProtocolError(
                f"{self.name} outcome read before the item stream was drained"
            )
        if self._outcome is _UNREAD:
            value = self._errors.get()
            self._outcome = None if value is _NO_ERROR else value
        return self._outcome  # type: ignore[return-value]

    def raise_for_error(self) -> None:
        """Raise the terminal error, if any, as a :class:`FetchError`.

        Errors that are already user-facing (for example an expired token)
        are raised unchanged.
        """
        error = self.outcome()
        if error is None:
            return
        if isinstance(error, VaultScoutError):
            raise error
        raise FetchError(f"Listing {self.name} failed: {error}") from error

    def close(self) -> None:
        """Stop the producer and release it if it is blocked on a hand-off.

        A fetch that is already in flight is not interrupted; its result is
        discarded.
        """
        if self._drained:
            return
        self._cancelled.set()
        try:
            while True:
                self._items.get_nowait()
        except queue.Empty:
            pass

    def __enter__(self) -> "PageEnumerator[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def enumerate_pages(
    fetch_first: Callable[[], Page[T]],
    fetch_next: Callable[[Page[T]], Page[T]],
    *,
    name: str = "items",
) -> PageEnumerator[T]:
    """Start streaming a paginated listing.

    Args:
        fetch_first: Returns the first page.
        fetch_next: Returns the page following the given one.
        name: What is being listed, for log lines.

    Returns:
        The running enumerator. Drain it, then check its outcome.
    """
    return PageEnumerator(fetch_first, fetch_next, name=name)


def drain(enumerator: PageEnumerator[T]) -> list[T]:
    """Collect every item, then raise the terminal error if there was one."""
    with enumerator:
        items = list(enumerator)
        enumerator.raise_for_error()
    return items
