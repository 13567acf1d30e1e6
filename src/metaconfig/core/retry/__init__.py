"""metaconfig — Retry (core)."""

from .loop import (  # noqa: F401
    DEFAULT_DELAY,
    LOUD_DEFAULT_ATTEMPTS,
    SILENT_DEFAULT_ATTEMPTS,
    RetryLoop,
    retry_all,
    start_loop,
    start_silent_loop,
)
