"""GitHub aggregation: user stats and per-language byte totals."""

from __future__ import annotations
import datetime
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from dateutil import relativedelta

from ..errors import InvalidUsername, UserNotFound
from ..languages import LangEdge, LanguageStat, from_edges
from .client import GraphQLClient
from .queries import USER_LANGUAGES_QUERY, USER_REPOS_QUERY, USER_STATS_QUERY
from .types import GitHubStats

log = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 39
USERNAME_CHARS = re.compile(r"^[A-Za-z0-9-]+$")


def validate_username(username: Optional[str]) -> str:
    if username is None or not username.strip():
        raise InvalidUsername("Username cannot be empty")
    if " " in username:
        raise InvalidUsername("Username cannot contain spaces")
    if len(username) > MAX_USERNAME_LENGTH:
        raise InvalidUsername("Username too long")
    if not USERNAME_CHARS.match(username):
        raise InvalidUsername("Username contains invalid characters")
    if username.startswith("-") or username.endswith("-"):
        raise InvalidUsername("Username cannot start or end with hyphen")
    return username


def start_of_year(now: Optional[datetime.datetime] = None) -> datetime.datetime:
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return now + relativedelta.relativedelta(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)


def _count(block: Optional[Dict[str, Any]]) -> int:
    if not block:
        return 0
    return int(block.get("totalCount") or 0)


def _user(data: Dict[str, Any], login: str) -> Dict[str, Any]:
    user = data.get("user")
    if user is None:
        raise UserNotFound(login)
    return user


class GitHubApi:
    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or GraphQLClient()

    def fetch_user_stats(self, username: str) -> GitHubStats:
        validate_username(username)
        variables = {
            "login": username,
            "after": None,
            "from": start_of_year().strftime("%Y-%m-%dT%H:%M:%SZ"),
        }
        user = _user(self.client.fetch(USER_STATS_QUERY, variables, "user_stats"), username)

        repos = user.get("repositories") or {}
        nodes: List[Dict[str, Any]] = list(repos.get("nodes") or [])
        page_info = repos.get("pageInfo") or {}
        while page_info.get("hasNextPage") and page_info.get("endCursor"):
            data = self.client.fetch(
                USER_REPOS_QUERY,
                {"login": username, "after": page_info["endCursor"]},
                "user_repos",
            )
            page = _user(data, username).get("repositories") or {}
            nodes.extend(page.get("nodes") or [])
            page_info = page.get("pageInfo") or {}
        log.debug("user_stats: %s repositories for %s", len(nodes), username)

        contributions = user.get("contributionsCollection") or {}
        return GitHubStats(
            login=user.get("login") or username,
            name=user.get("name"),
            total_stars=sum(_count((node or {}).get("stargazers")) for node in nodes),
            total_commits_ytd=int(contributions.get("totalCommitContributions") or 0),
            total_prs=_count(user.get("pullRequests")),
            total_merged_prs=_count(user.get("mergedPullRequests")),
            total_reviews=int(contributions.get("totalPullRequestReviewContributions") or 0),
            total_issues=_count(user.get("openIssues")) + _count(user.get("closedIssues")),
            total_discussions_started=_count(user.get("repositoryDiscussions")),
            total_discussions_answered=_count(user.get("repositoryDiscussionComments")),
            followers=_count(user.get("followers")),
        )

    def fetch_user_languages(self, username: str, excluded_repos: Iterable[str] = ()) -> List[LanguageStat]:
        validate_username(username)
        excluded = set(excluded_repos)
        edges: List[LangEdge] = []
        cursor = None
        while True:
            data = self.client.fetch(
                USER_LANGUAGES_QUERY,
                {"login": username, "after": cursor},
                "user_languages",
            )
            repos = _user(data, username).get("repositories") or {}
            for repo in repos.get("nodes") or []:
                if not repo or repo.get("name") in excluded:
                    continue
                for edge in (repo.get("languages") or {}).get("edges") or []:
                    edges.append(LangEdge(name=edge["node"]["name"], size_bytes=int(edge.get("size") or 0)))
            page_info = repos.get("pageInfo") or {}
            if not page_info.get("hasNextPage") or not page_info.get("endCursor"):
                break
            cursor = page_info["endCursor"]
        log.debug("user_languages: %s edges for %s", len(edges), username)
        return from_edges(edges)
