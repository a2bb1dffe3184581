"""
Language ranking.

A language's rank is ``size_bytes ** size_weight * repo_count ** count_weight``:
(1, 0) ranks by raw bytes, (0, 1) by how many repositories use the language,
anything in between interpolates. Percentages are always taken against the
total rank of the full input, so a truncated top-N can sum below 100.
"""

from __future__ import annotations
import math
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

DEFAULT_SIZE_WEIGHT = 1.0
DEFAULT_COUNT_WEIGHT = 0.0


@dataclass(frozen=True)
class LangEdge:
    name: str
    size_bytes: int


@dataclass(frozen=True)
class LanguageStat:
    name: str
    size_bytes: int
    repo_count: int

    def rank(self, size_weight: float = DEFAULT_SIZE_WEIGHT, count_weight: float = DEFAULT_COUNT_WEIGHT) -> float:
        return rank(self.size_bytes, self.repo_count, size_weight, count_weight)


def _power(base: float, exponent: float) -> float:
    try:
        return float(base) ** exponent
    except OverflowError:
        return math.inf


def rank(size: float, count: float, size_weight: float, count_weight: float) -> float:
    """Score of one language; scores too large for a float are math.inf."""
    # float ** 0.0 is 1.0 for every base, zero included.
    size_part = _power(size, size_weight)
    count_part = _power(count, count_weight)
    if size_part == 0.0 or count_part == 0.0:
        return 0.0
    return size_part * count_part


def from_edges(edges: Iterable[LangEdge]) -> List[LanguageStat]:
    """Group edges by language: bytes are summed, occurrences counted."""
    totals: Dict[str, Tuple[int, int]] = {}
    for edge in edges:
        size, count = totals.get(edge.name, (0, 0))
        totals[edge.name] = (size + edge.size_bytes, count + 1)
    return [LanguageStat(name, size, count) for name, (size, count) in totals.items()]


def ranked(stats: Sequence[LanguageStat], size_weight: float, count_weight: float) -> List[LanguageStat]:
    return sorted(stats, key=lambda s: s.rank(size_weight, count_weight), reverse=True)


def total_rank(stats: Sequence[LanguageStat], size_weight: float, count_weight: float) -> float:
    return sum(s.rank(size_weight, count_weight) for s in stats)


def top_n(stats: Sequence[LanguageStat], size_weight: float, count_weight: float, n: int) -> List[LanguageStat]:
    return ranked(stats, size_weight, count_weight)[:max(n, 0)]


def top_percentages(
    stats: Sequence[LanguageStat], size_weight: float, count_weight: float, n: int
) -> List[Tuple[LanguageStat, float]]:
    """
    Top-N languages paired with their share of the full total rank.

    When the total overflows, scores are rescaled by the largest one first;
    infinite scores then split 100% evenly and finite ones get 0.
    """
    total = total_rank(stats, size_weight, count_weight)
    top = top_n(stats, size_weight, count_weight, n)
    scores = [stat.rank(size_weight, count_weight) for stat in top]
    if math.isfinite(total):
        return [(stat, score / total * 100 if total > 0 else 0.0) for stat, score in zip(top, scores)]

    largest = max(s.rank(size_weight, count_weight) for s in stats)
    if math.isinf(largest):
        infinite = sum(1 for s in stats if math.isinf(s.rank(size_weight, count_weight)))
        return [(stat, 100.0 / infinite if math.isinf(score) else 0.0) for stat, score in zip(top, scores)]
    scaled_total = sum(s.rank(size_weight, count_weight) / largest for s in stats)
    return [(stat, score / largest / scaled_total * 100) for stat, score in zip(top, scores)]


def stats_weight(stats: Sequence[LanguageStat]) -> int:
    return sys.getsizeof(stats) + sum(sys.getsizeof(s) + len(s.name) for s in stats)
