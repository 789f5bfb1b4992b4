try:
    import httpx  # noqa: F401
except ImportError as e:
    raise ImportError(
        "httpx is required to use cachefresh.httpx module. "
        "Please install cachefresh with the 'httpx' extra, "
        "e.g., 'pip install cachefresh[httpx]'."
    ) from e


from ._integrations._httpx import can_use_httpx as can_use_httpx, httpx_to_internal as httpx_to_internal

__all__ = ("can_use_httpx", "httpx_to_internal")
