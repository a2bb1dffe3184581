import pytest

from statcard.errors import RateLimitProtection
from statcard.github.ratelimit import RateLimitGovernor, RateLimitSnapshot


def governor(now=1_000_000):
    return RateLimitGovernor(clock=lambda: now)


def test_empty_snapshot_admits():
    g = governor()
    assert g.snapshot() == RateLimitSnapshot()
    g.admit()


def test_update_parses_headers_case_insensitively():
    g = governor()
    g.update({
        "X-RateLimit-Limit": "5000",
        "x-ratelimit-remaining": "4999",
        "X-RATELIMIT-USED": "1",
        "X-RateLimit-Reset": "1000500",
        "Content-Type": "application/json",
    })
    assert g.snapshot() == RateLimitSnapshot(limit=5000, remaining=4999, used=1, reset=1000500)


def test_partial_update_keeps_other_fields():
    g = governor()
    g.update({"x-ratelimit-limit": "5000", "x-ratelimit-remaining": "10"})
    g.update({"x-ratelimit-remaining": "9", "x-ratelimit-reset": "garbage"})
    snap = g.snapshot()
    assert (snap.limit, snap.remaining, snap.reset) == (5000, 9, None)


@pytest.mark.parametrize("remaining", [100, 101, 5000])
def test_admits_above_cushion(remaining):
    g = governor()
    g.update({"x-ratelimit-remaining": str(remaining), "x-ratelimit-reset": "1000500"})
    g.admit()


def test_denies_below_cushion_before_reset():
    g = governor()
    g.update({"x-ratelimit-remaining": "99", "x-ratelimit-reset": "1000500"})
    with pytest.raises(RateLimitProtection) as exc:
        g.admit()
    assert exc.value.remaining == 99
    assert exc.value.reset == 1000500
    assert g.retry_after_seconds(exc.value.reset) == 500


def test_admits_after_reset_passes():
    g = governor(now=1000501)
    g.update({"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1000500"})
    g.admit()
    assert g.retry_after_seconds(1000500) == 0


def test_retry_after_without_reset():
    assert governor().retry_after_seconds(None) == 0


def test_snapshot_as_dict():
    g = governor()
    g.update({"x-ratelimit-limit": "5000"})
    assert g.snapshot().as_dict() == {"limit": 5000, "remaining": None, "used": None, "reset": None}
