from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from cachefresh._core._headers import Headers, parse_cache_control
from cachefresh._utils import parse_date

logger = logging.getLogger("cachefresh.core.models")


@dataclass
class Request:
    method: str
    url: str
    headers: Headers = field(default_factory=lambda: Headers({}))


@dataclass
class Response:
    status_code: int
    headers: Headers = field(default_factory=lambda: Headers({}))


@dataclass
class EntryOptions:
    """
    Configuration used when turning a response into a cache entry.

    Attributes:
    ----------
    default_lifetime : float
        Freshness lifetime, in seconds, given to responses that carry neither
        a ``max-age`` directive nor an ``Expires`` header.

        RFC 9111 Section 4.2.2 lets a cache pick a heuristic lifetime in
        that case. The default of 0 makes such entries usable only at the
        instant they were created.

        Examples:
        --------
        >>> # Treat responses without explicit freshness as fresh for 5 minutes
        >>> options = EntryOptions(default_lifetime=300)
    """

    default_lifetime: float = 0.0


def get_freshness_lifetime(response: Response, created: float, options: EntryOptions) -> float:
    """
    Freshness lifetime of a response in seconds (RFC 9111 Section 4.2.1).

    The first of these applies:
      1. the ``max-age`` response directive;
      2. ``Expires`` minus ``Date`` (``created`` stands in for a missing or
         invalid Date; an invalid Expires means the response is already stale);
      3. ``options.default_lifetime``.
    """
    cache_control = parse_cache_control(response.headers.get("cache-control"))

    if cache_control.max_age is not None:
        return cache_control.max_age

    if "expires" in response.headers:
        expires = parse_date(response.headers["expires"])

        if expires is None:
            # RFC 9111 Section 5.3: invalid Expires values represent a time in the past
            logger.debug("Treating the response as already stale since its Expires header is invalid.")
            return 0

        date = parse_date(response.headers["date"]) if "date" in response.headers else None

        return expires - (created if date is None else date)

    return options.default_lifetime


@dataclass(frozen=True)
class CacheEntry:
    """
    Freshness metadata for a stored response.

    Both fields are POSIX timestamps. ``response_expiration`` is expected to
    be no earlier than ``response_created``; this is not enforced.
    """

    response_created: float
    response_expiration: float

    @classmethod
    def from_response(
        cls,
        response: Response,
        created: Optional[float] = None,
        options: Optional[EntryOptions] = None,
    ) -> "CacheEntry":
        """
        Build an entry for a response received at ``created`` (now by default).
        """
        created = time.time() if created is None else created
        options = options or EntryOptions()

        lifetime = max(0, get_freshness_lifetime(response, created, options))

        logger.debug(
            (
                f"Computed a freshness lifetime of {lifetime} seconds "
                f"for the response with status code {response.status_code}."
            )
        )

        return cls(response_created=created, response_expiration=created + lifetime)
