#!/usr/bin/env python3
"""Render sample cards from canned data, without touching the network.
Usage:
  python render_examples.py              # writes into examples/
  python render_examples.py out/dir

Writes one stats card and four language cards (vertical, horizontal,
each with and without background) per theme, plus two error cards.
"""
from __future__ import annotations
import sys
from pathlib import Path
from typing import Dict

from statcard.cards import CardSettings, ErrorCard, LangsCard, LayoutType, StatsCard
from statcard.github.types import GitHubStats
from statcard.languages import LanguageStat
from statcard.themes import theme_names

DEFAULT_OUT = "examples"

SAMPLE_STATS = GitHubStats(
    login="octocat",
    name="The Octocat",
    total_stars=1234,
    total_commits_ytd=567,
    total_issues=89,
    total_prs=123,
    total_merged_prs=45,
    total_reviews=67,
    total_discussions_started=12,
    total_discussions_answered=34,
)
SAMPLE_LANGUAGES = [
    LanguageStat("Rust", 45000, 15),
    LanguageStat("TypeScript", 35000, 12),
    LanguageStat("JavaScript", 25000, 8),
    LanguageStat("Python", 15000, 6),
    LanguageStat("Go", 10000, 4),
]
SAMPLE_ERRORS = {
    "error-short": "Invalid username provided",
    "error-long": (
        "GitHub API rate limit exceeded while fetching repository languages. "
        "Please wait a few minutes before requesting this card again."
    ),
}


def render_all() -> Dict[str, str]:
    out = {}
    for theme in theme_names():
        out[f"stats-{theme}"] = StatsCard.from_stats(SAMPLE_STATS, CardSettings(theme=theme)).render()
        for layout in LayoutType:
            for hide_background in (False, True):
                settings = CardSettings(theme=theme, hide_background=hide_background)
                suffix = "-no-bg" if hide_background else ""
                card = LangsCard(settings=settings, stats=list(SAMPLE_LANGUAGES), layout=layout)
                out[f"langs-{layout.value}-{theme}{suffix}"] = card.render()
    for name, message in SAMPLE_ERRORS.items():
        out[name] = ErrorCard(message).render()
    return out


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    out_dir = Path(args[0] if args else DEFAULT_OUT)
    out_dir.mkdir(parents=True, exist_ok=True)
    cards = render_all()
    for name, svg in cards.items():
        (out_dir / f"{name}.svg").write_text(svg, encoding="utf-8")
    print(f"wrote {len(cards)} cards to {out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
