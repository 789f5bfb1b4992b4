from cachefresh._core._headers import (
    CacheControl as CacheControl,
    Headers as Headers,
    parse_cache_control as parse_cache_control,
)
from cachefresh._core._suitability import (
    DefaultSuitabilityChecker as DefaultSuitabilityChecker,
    SuitabilityChecker as SuitabilityChecker,
    can_use as can_use,
    get_current_age as get_current_age,
)
from cachefresh._core.models import (
    CacheEntry as CacheEntry,
    EntryOptions as EntryOptions,
    Request as Request,
    Response as Response,
)

__version__ = "0.1.0"

__all__ = (
    ## Headers
    "Headers",
    "CacheControl",
    "parse_cache_control",
    ## Models
    "Request",
    "Response",
    "CacheEntry",
    "EntryOptions",
    ## Suitability
    "SuitabilityChecker",
    "DefaultSuitabilityChecker",
    "can_use",
    "get_current_age",
)
