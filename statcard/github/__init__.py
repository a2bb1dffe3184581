from .api import GitHubApi, validate_username
from .cache import GitHubCache, get_github_cache
from .client import GraphQLClient, GraphQLResponse
from .ratelimit import RateLimitGovernor, RateLimitSnapshot, get_rate_limit_governor
from .types import GitHubStats

__all__ = [
    "GitHubApi",
    "GitHubCache",
    "GitHubStats",
    "GraphQLClient",
    "GraphQLResponse",
    "RateLimitGovernor",
    "RateLimitSnapshot",
    "get_github_cache",
    "get_rate_limit_governor",
    "validate_username",
]
