from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GitHubStats:
    """Per-user counters shown on the stats card."""

    login: str
    name: Optional[str] = None
    total_stars: int = 0
    total_commits_ytd: int = 0
    total_prs: int = 0
    total_merged_prs: int = 0
    total_reviews: int = 0
    total_issues: int = 0
    total_discussions_started: int = 0
    total_discussions_answered: int = 0
    followers: int = 0

    def weight(self) -> int:
        return sys.getsizeof(self) + len(self.login) + len(self.name or "")
