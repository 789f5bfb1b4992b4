import httpx
import pytest
from inline_snapshot import snapshot

from cachefresh import CacheEntry, DefaultSuitabilityChecker, Headers, Request, Response, SuitabilityChecker
from cachefresh.httpx import can_use_httpx, httpx_to_internal

T0 = 1_704_067_200.0


def test_request_to_internal() -> None:
    request = httpx.Request("GET", "https://example.com/path", headers={"Cache-Control": "max-age=60"})

    internal = httpx_to_internal(request)

    assert isinstance(internal, Request)
    assert internal.method == "GET"
    assert internal.url == "https://example.com/path"
    assert internal.headers["cache-control"] == "max-age=60"


def test_response_to_internal_keeps_repeated_headers() -> None:
    response = httpx.Response(
        200,
        headers=[("Cache-Control", "public"), ("Cache-Control", "max-age=120")],
    )

    internal = httpx_to_internal(response)

    assert isinstance(internal, Response)
    assert internal.status_code == 200
    assert internal.headers == Headers({"cache-control": ["public", "max-age=120"]})


def test_unsupported_value() -> None:
    with pytest.raises(TypeError):
        httpx_to_internal("https://example.com")  # type: ignore[call-overload]


def test_entry_from_httpx_response() -> None:
    response = httpx.Response(200, headers={"Cache-Control": "max-age=3600"})

    entry = CacheEntry.from_response(httpx_to_internal(response), created=T0)

    assert entry == CacheEntry(response_created=T0, response_expiration=T0 + 3600)


def test_can_use_httpx() -> None:
    entry = CacheEntry(response_created=T0, response_expiration=T0 + 3600)
    plain = httpx.Request("GET", "https://example.com")
    strict = httpx.Request("GET", "https://example.com", headers={"Cache-Control": "max-age=60"})

    verdicts = [
        can_use_httpx(plain, entry, T0 + 1800),
        can_use_httpx(plain, entry, T0 + 3601),
        can_use_httpx(strict, entry, T0 + 100),
        can_use_httpx(strict, entry, T0 + 59),
        can_use_httpx(strict, entry, T0 + 60),
    ]

    assert verdicts == snapshot([True, False, False, True, True])


def test_httpx_request_works_with_the_checker_directly() -> None:
    entry = CacheEntry(response_created=T0, response_expiration=T0 + 3600)
    request = httpx.Request("GET", "https://example.com", headers={"cache-control": "max-age=10"})

    assert DefaultSuitabilityChecker().can_use(request, entry, T0 + 11) is False  # type: ignore[arg-type]


def test_can_use_httpx_with_custom_checker() -> None:
    class Refuse(SuitabilityChecker):
        def can_use(self, request: Request, entry: CacheEntry, now: float) -> bool:
            return False

    entry = CacheEntry(response_created=T0, response_expiration=T0 + 3600)

    assert can_use_httpx(httpx.Request("GET", "https://example.com"), entry, T0, checker=Refuse()) is False


def test_logging(caplog: pytest.LogCaptureFixture) -> None:
    entry = CacheEntry(response_created=T0, response_expiration=T0 + 3600)
    request = httpx.Request("GET", "https://example.com", headers={"Cache-Control": "max-age=60"})

    with caplog.at_level("DEBUG", logger="cachefresh"):
        can_use_httpx(request, entry, T0 + 30)
        can_use_httpx(request, entry, T0 + 90)
        can_use_httpx(request, entry, T0 + 3700)

    assert caplog.messages == snapshot(
        [
            "Considering the cached entry as suitable for use without revalidation.",
            "Considering the cached entry as unsuitable since its age (90s) exceeds the max-age directive of the request (60s).",
            "Considering the cached entry as unsuitable since it expired 100.000 seconds ago.",
        ]
    )
