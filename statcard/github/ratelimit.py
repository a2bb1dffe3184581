"""
Upstream quota tracking.

The snapshot is replaced wholesale on every update, so a reader never sees
a half-written state even if an update raises midway.
"""

from __future__ import annotations
import logging
import threading
import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..errors import RateLimitProtection

log = logging.getLogger(__name__)

# Headroom kept for requests racing between admit() and header arrival.
SAFETY_CUSHION = 100

HEADER_FIELDS = {
    "x-ratelimit-limit": "limit",
    "x-ratelimit-remaining": "remaining",
    "x-ratelimit-used": "used",
    "x-ratelimit-reset": "reset",
}


@dataclass(frozen=True)
class RateLimitSnapshot:
    limit: Optional[int] = None
    remaining: Optional[int] = None
    used: Optional[int] = None
    reset: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ReadWriteLock:
    """Many concurrent readers, one writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    def acquire_read(self):
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()


class RateLimitGovernor:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = ReadWriteLock()
        self._snapshot = RateLimitSnapshot()

    def snapshot(self) -> RateLimitSnapshot:
        self._lock.acquire_read()
        try:
            return self._snapshot
        finally:
            self._lock.release_read()

    def admit(self) -> None:
        """Raise RateLimitProtection when the quota is too close to exhaustion."""
        snap = self.snapshot()
        if snap.remaining is None or snap.reset is None:
            return
        if snap.remaining >= SAFETY_CUSHION:
            return
        if self._clock() > snap.reset:
            return
        raise RateLimitProtection(snap.remaining, snap.reset)

    def update(self, headers: Mapping[str, str]) -> None:
        parsed: Dict[str, int] = {}
        for header, field in HEADER_FIELDS.items():
            value = _header(headers, header)
            if value is None:
                continue
            try:
                parsed[field] = int(str(value).strip())
            except ValueError:
                log.debug("Ignoring non-numeric %s=%r", header, value)
        if not parsed:
            return
        self._lock.acquire_write()
        try:
            self._snapshot = replace(self._snapshot, **parsed)
            snap = self._snapshot
        finally:
            self._lock.release_write()
        log.debug("Rate limit snapshot: %s", snap)

    def retry_after_seconds(self, reset: Optional[int]) -> int:
        if reset is None:
            return 0
        return max(0, int(reset - self._clock()))


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
    return value


_GOVERNOR: Optional[RateLimitGovernor] = None
_GOVERNOR_LOCK = threading.Lock()


def get_rate_limit_governor() -> RateLimitGovernor:
    global _GOVERNOR
    if _GOVERNOR is None:
        with _GOVERNOR_LOCK:
            if _GOVERNOR is None:
                _GOVERNOR = RateLimitGovernor()
    return _GOVERNOR
