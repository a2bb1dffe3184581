"""Single seam for surfacing upstream failures to error reporting."""

from __future__ import annotations
import logging

from .errors import (
    GitHubApiError,
    NetworkError,
    RateLimitExceeded,
    RateLimitProtection,
)

log = logging.getLogger("statcard.upstream")


def report_upstream_error(tag: str, error: GitHubApiError) -> None:
    if isinstance(error, (RateLimitExceeded, RateLimitProtection)):
        log.warning("[%s] rate limit: %s", tag, error)
    elif isinstance(error, NetworkError):
        if error.status is not None:
            log.error("[%s] upstream status %s: %s", tag, error.status, error)
        else:
            log.error("[%s] %s", tag, error)
    else:
        log.error("[%s] %s", tag, error)
