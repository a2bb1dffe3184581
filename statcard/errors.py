"""Error taxonomy shared by the GitHub aggregation layer and the web adapter."""

from __future__ import annotations
from typing import Optional


class GitHubApiError(Exception):
    """
    Base class for everything the aggregation layer can raise.

    Subclasses pass their constructor arguments to ``Exception.__init__`` and
    build the message in ``__str__``, so ``copy.copy`` and pickling rebuild
    an equal error.
    """


class UserNotFound(GitHubApiError):
    def __init__(self, login: str = ""):
        super().__init__(login)
        self.login = login

    def __str__(self) -> str:
        return "User not found"


class InvalidUsername(GitHubApiError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid username: {self.reason}"


class MissingToken(GitHubApiError):
    def __str__(self) -> str:
        return "Missing GitHub token"


class RateLimitExceeded(GitHubApiError):
    def __str__(self) -> str:
        return "Rate limit exceeded"


class RateLimitProtection(GitHubApiError):
    """Raised locally before any request once the upstream quota is nearly spent."""

    def __init__(self, remaining: Optional[int], reset: Optional[int]):
        super().__init__(remaining, reset)
        self.remaining = remaining
        self.reset = reset

    def __str__(self) -> str:
        return f"Rate limit protection: {self.remaining} requests remaining until reset at {self.reset}"


class GraphQLError(GitHubApiError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"GraphQL error: {self.message}"


class NetworkError(GitHubApiError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, status)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return f"Network error: {self.message}"


class CardError(ValueError):
    """Invalid card geometry or settings."""


class UnknownTheme(KeyError):
    def __init__(self, name: str, known):
        self.name = name
        self.known = list(known)
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown theme '{self.name}'; expected one of: {', '.join(self.known)}"


class QueryError(ValueError):
    """A query parameter could not be decoded."""
