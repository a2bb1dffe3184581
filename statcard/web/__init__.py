from __future__ import annotations
import datetime
from dataclasses import dataclass, field
from typing import Optional

from flask import Flask

from ..github import GitHubApi, GitHubCache, RateLimitGovernor, get_github_cache, get_rate_limit_governor
from ..github.client import GraphQLClient
from .routes import bp


@dataclass
class Services:
    api: GitHubApi
    cache: GitHubCache
    governor: RateLimitGovernor
    started: datetime.datetime = field(default_factory=datetime.datetime.now)


def create_app(
    api: Optional[GitHubApi] = None,
    cache: Optional[GitHubCache] = None,
    governor: Optional[RateLimitGovernor] = None,
) -> Flask:
    """Build the Flask app; unset collaborators fall back to process-wide instances."""
    governor = governor or get_rate_limit_governor()
    app = Flask(__name__)
    app.extensions["statcard"] = Services(
        api=api or GitHubApi(GraphQLClient(governor=governor)),
        cache=cache or get_github_cache(),
        governor=governor,
    )
    app.register_blueprint(bp, url_prefix="/api")
    return app


__all__ = ["Services", "create_app"]
