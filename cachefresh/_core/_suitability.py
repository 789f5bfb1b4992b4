from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cachefresh._core._headers import parse_cache_control

if TYPE_CHECKING:
    from cachefresh import CacheEntry, Request

logger = logging.getLogger("cachefresh.core.suitability")

__all__ = (
    "DefaultSuitabilityChecker",
    "SuitabilityChecker",
    "can_use",
    "get_current_age",
)


def get_current_age(entry: CacheEntry, now: float) -> int:
    """
    Whole seconds elapsed between the entry's creation and ``now``.

    The difference is truncated toward zero, never rounded up: an entry
    created 59.9996 seconds ago is 59 seconds old. It is first rounded to
    the microsecond so float noise such as 59.99999999 for a true 60 seconds
    does not cost a second.
    A ``now`` earlier than the creation time (clock skew) gives a negative or
    zero age.

    Examples:
    --------
    >>> from cachefresh import CacheEntry
    >>> entry = CacheEntry(response_created=1000.0, response_expiration=4600.0)
    >>> get_current_age(entry, 1059.9996)
    59
    >>> get_current_age(entry, 1060.0)
    60
    >>> get_current_age(entry, 990.0)
    -10
    """
    elapsed = now - entry.response_created
    return math.trunc(round(elapsed, 6))


class SuitabilityChecker(ABC):
    """
    Decides whether a cached entry may satisfy a request without revalidation.

    Subclass this to plug a stricter or looser freshness policy into a cache.
    Implementations must not read a clock; the current time is always passed
    in by the caller.
    """

    __slots__ = ()

    @abstractmethod
    def can_use(self, request: Request, entry: CacheEntry, now: float) -> bool:
        raise NotImplementedError("Subclasses must implement this method")


class DefaultSuitabilityChecker(SuitabilityChecker):
    """
    Reuse rules based on the entry's expiration and the request's ``max-age``.

    Checks run in order and the first failing one decides:

    1. The entry is unusable once ``now`` is strictly after its expiration.
    2. If the request carries ``Cache-Control: max-age=N``, the entry is
       unusable when its current age exceeds ``N``. An age of exactly ``N``
       is still acceptable.

    No other Cache-Control directive is considered here; ``no-cache``,
    ``min-fresh`` and friends belong in separate checkers layered around
    this one.

    The checker holds no state and can be shared freely between threads.
    """

    __slots__ = ()

    def can_use(self, request: Request, entry: CacheEntry, now: float) -> bool:
        if now > entry.response_expiration:
            logger.debug(
                (
                    "Considering the cached entry as unsuitable since it expired "
                    f"{now - entry.response_expiration:.3f} seconds ago."
                )
            )
            return False

        request_cache_control = parse_cache_control(request.headers.get("cache-control"))
        max_age = request_cache_control.max_age

        # negative values are accepted as the "not specified" marker too
        if max_age is not None and max_age > -1:
            age = get_current_age(entry, now)
            if age > max_age:
                logger.debug(
                    (
                        f"Considering the cached entry as unsuitable since its age ({age}s) "
                        f"exceeds the max-age directive of the request ({max_age}s)."
                    )
                )
                return False

        logger.debug("Considering the cached entry as suitable for use without revalidation.")
        return True


_default_checker = DefaultSuitabilityChecker()


def can_use(request: Request, entry: CacheEntry, now: float) -> bool:
    """
    Shortcut for :meth:`DefaultSuitabilityChecker.can_use`.

    Examples:
    --------
    >>> from cachefresh import CacheEntry, Headers, Request
    >>> entry = CacheEntry(response_created=0.0, response_expiration=3600.0)
    >>> can_use(Request("GET", "https://example.com"), entry, now=1800.0)
    True
    >>> can_use(Request("GET", "https://example.com"), entry, now=3601.0)
    False
    >>> request = Request("GET", "https://example.com", Headers({"Cache-Control": "max-age=60"}))
    >>> can_use(request, entry, now=100.0)
    False
    """
    return _default_checker.can_use(request, entry, now)
