from __future__ import annotations

from typing import Any, Iterator, List, Mapping, MutableMapping, Optional, Union

"""
Header access and the small slice of Cache-Control parsing that freshness
checks rely on.

Character classes follow RFC 9110 Section 5.6 (tokens, quoted strings).
"""

__all__ = (
    "CacheControl",
    "Headers",
    "parse_cache_control",
)

MAX_DELTA_SECONDS = 2147483647
SEPARATORS = frozenset('()<>@,;:\\"/[]?={} \t')
OWS = (" ", "\t")


def is_token(c: str) -> bool:
    """
    Check if character may appear in an HTTP token.

    RFC 9110 Section 5.6.2:
    tchar = "!" / "#" / "$" / "%" / "&" / "'" / "*"
          / "+" / "-" / "." / "^" / "_" / "`" / "|" / "~"
          / DIGIT / ALPHA

    That is every visible US-ASCII character that is not a delimiter.

    Examples:
        >>> is_token('m')
        True
        >>> is_token('-')
        True
        >>> is_token('=')
        False
        >>> is_token(' ')
        False
    """
    if not c:
        return False
    code = ord(c)
    return 32 < code < 127 and c not in SEPARATORS


def is_qd_text(c: str) -> bool:
    """
    Check if character is allowed unescaped inside a quoted string.

    RFC 9110 Section 5.6.4:
    qdtext = HTAB / SP / %x21 / %x23-5B / %x5D-7E / obs-text
    """
    if not c:
        return False
    code = ord(c)
    return code in (0x09, 0x20, 0x21) or 0x23 <= code <= 0x5B or 0x5D <= code <= 0x7E or code >= 0x80


def http_unquote(raw: str) -> tuple[int, str]:
    r"""
    Unquote the quoted string at the start of ``raw``.

    Returns a ``(consumed, text)`` pair, where ``consumed`` counts the
    characters read including both quotes. A string that does not start with
    a double quote or is never closed gives ``(-1, "")``.

    Escaped characters outside ``HTAB / SP / VCHAR / obs-text`` and stray
    characters that are not qdtext are replaced with ``?``.

    Examples:
        >>> http_unquote('"60"')
        (4, '60')
        >>> http_unquote('"a\\"b", c')
        (6, 'a"b')
        >>> http_unquote('"open')
        (-1, '')
    """
    if not raw or raw[0] != '"':
        return -1, ""

    buf: list[str] = []
    i = 1

    while i < len(raw):
        c = raw[i]

        if c == '"':
            return i + 1, "".join(buf)

        if c == "\\":
            if i + 1 >= len(raw):
                return -1, ""
            escaped = raw[i + 1]
            code = ord(escaped)
            buf.append(escaped if code in (0x09, 0x20) or 0x21 <= code <= 0x7E or code >= 0x80 else "?")
            i += 2
            continue

        buf.append(c if is_qd_text(c) else "?")
        i += 1

    return -1, ""


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive header mapping.

    Repeated fields are kept in order and joined with ``", "`` on lookup,
    which is how a list-based field such as Cache-Control is combined.
    """

    def __init__(self, headers: Mapping[str, Union[str, List[str]]]) -> None:
        self._headers = {k.lower(): ([v] if isinstance(v, str) else list(v)) for k, v in headers.items()}

    def get_list(self, key: str) -> Optional[List[str]]:
        return self._headers.get(key.lower(), None)

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __setitem__(self, key: str, value: str) -> None:
        self._headers.setdefault(key.lower(), []).append(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._headers!r}>"

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers


class CacheControl:
    """
    Parsed Cache-Control directives relevant to reuse decisions.

    Only ``max-age`` is tracked. ``None`` means the directive was absent or
    carried an unusable value.
    """

    __slots__ = ("max_age",)

    def __init__(self, max_age: Optional[int] = None) -> None:
        self.max_age = max_age

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, CacheControl) and self.max_age == other.max_age

    def __repr__(self) -> str:
        if self.max_age is None:
            return f"<{type(self).__name__}>"
        return f"<{type(self).__name__} max_age={self.max_age}>"


def parse_delta_seconds(value: str) -> Optional[int]:
    """Parse a delta-seconds value (RFC 9111 Section 1.2.2), None if invalid."""
    if not value or any(c not in "0123456789" for c in value):
        return None
    return min(int(value), MAX_DELTA_SECONDS)


def parse(value: str) -> CacheControl:
    """
    Walk a Cache-Control value directive by directive.

    Quoted arguments are unquoted, so commas inside them never split a
    directive. Anything that does not look like a directive is skipped.
    """
    cc = CacheControl()
    i = 0
    length = len(value)

    while i < length:
        while i < length and value[i] in (" ", "\t", ","):
            i += 1

        if i >= length:
            break

        j = i
        while j < length and is_token(value[j]):
            j += 1

        if j == i:
            i += 1
            continue

        name = value[i:j].lower()

        while j < length and value[j] in OWS:
            j += 1

        if j >= length or value[j] != "=":
            i = j
            continue

        k = j + 1
        while k < length and value[k] in OWS:
            k += 1

        if k >= length:
            break

        if value[k] == '"':
            eaten, argument = http_unquote(value[k:])
            if eaten == -1:
                i = k + 1
                continue
            i = k + eaten
        else:
            z = k
            while z < length and value[z] not in (" ", "\t", ","):
                z += 1
            argument = value[k:z]
            i = z

        # first usable max-age wins
        if name == "max-age" and cc.max_age is None:
            cc.max_age = parse_delta_seconds(argument)

    return cc


def parse_cache_control(value: str | None) -> CacheControl:
    """
    Parse a Cache-Control header value.

    Malformed input never raises; an unusable or missing ``max-age``
    simply leaves ``max_age`` as ``None``.

    Examples:
        >>> parse_cache_control("max-age=60").max_age
        60
        >>> parse_cache_control('no-cache="Set-Cookie, Vary", max-age="30"').max_age
        30
        >>> parse_cache_control("max-age=soon").max_age is None
        True
        >>> parse_cache_control(None).max_age is None
        True
    """
    if value is None:
        return CacheControl()
    return parse(value)
