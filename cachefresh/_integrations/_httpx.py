from __future__ import annotations

from typing import Dict, List, Optional, Union, overload

import httpx

from cachefresh._core._headers import Headers
from cachefresh._core._suitability import SuitabilityChecker, can_use
from cachefresh._core.models import CacheEntry, Request, Response


def _headers_to_internal(headers: httpx.Headers) -> Headers:
    collected: Dict[str, List[str]] = {}
    for key, value in headers.multi_items():
        collected.setdefault(key, []).append(value)
    return Headers(collected)


@overload
def httpx_to_internal(
    value: httpx.Request,
) -> Request: ...


@overload
def httpx_to_internal(
    value: httpx.Response,
) -> Response: ...


def httpx_to_internal(
    value: Union[httpx.Request, httpx.Response],
) -> Union[Request, Response]:
    """
    Convert httpx.Request/httpx.Response to internal Request/Response.

    Bodies are left untouched; only the parts freshness checks look at are copied.
    """
    if isinstance(value, httpx.Request):
        return Request(
            method=value.method,
            url=str(value.url),
            headers=_headers_to_internal(value.headers),
        )
    elif isinstance(value, httpx.Response):
        return Response(
            status_code=value.status_code,
            headers=_headers_to_internal(value.headers),
        )
    raise TypeError(f"Expected httpx.Request or httpx.Response, got {type(value).__name__}")


def can_use_httpx(
    request: httpx.Request,
    entry: CacheEntry,
    now: float,
    checker: Optional[SuitabilityChecker] = None,
) -> bool:
    """
    Run a suitability check for an outgoing httpx request.
    """
    return (checker.can_use if checker else can_use)(httpx_to_internal(request), entry, now)
