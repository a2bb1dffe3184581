"""Single-endpoint GraphQL client for api.github.com."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .. import config
from ..errors import (
    GraphQLError,
    MissingToken,
    NetworkError,
    RateLimitExceeded,
    RateLimitProtection,
    UserNotFound,
)
from ..reporting import report_upstream_error
from .ratelimit import RateLimitGovernor, get_rate_limit_governor

log = logging.getLogger(__name__)


@dataclass
class GraphQLErrorEntry:
    message: str
    type: Optional[str] = None


@dataclass
class GraphQLResponse:
    data: Optional[Dict[str, Any]] = None
    errors: List[GraphQLErrorEntry] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Any) -> "GraphQLResponse":
        if not isinstance(payload, dict):
            raise ValueError("GraphQL response is not a JSON object")
        errors = [
            GraphQLErrorEntry(message=str(e.get("message", "")), type=e.get("type"))
            for e in (payload.get("errors") or [])
            if isinstance(e, dict)
        ]
        return cls(data=payload.get("data"), errors=errors)

    def unwrap(self) -> Dict[str, Any]:
        """Return `data`, raising the mapped error when the body carries errors."""
        if self.errors:
            first = self.errors[0]
            if first.type == "NOT_FOUND":
                raise UserNotFound()
            raise GraphQLError(first.message)
        if self.data is None:
            raise GraphQLError("No data in response")
        return self.data


class GraphQLClient:
    def __init__(
        self,
        token: Optional[str] = None,
        governor: Optional[RateLimitGovernor] = None,
        url: str = config.GITHUB_GRAPHQL_URL,
    ):
        self.token = token if token is not None else config.github_token()
        self.governor = governor or get_rate_limit_governor()
        self.url = url

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": config.USER_AGENT,
        }

    def execute(self, query: str, variables: Dict[str, Any], tag: str = "graphql") -> GraphQLResponse:
        if not query or not query.strip():
            raise ValueError("query must be a non-empty GraphQL document")
        if not self.token:
            raise MissingToken()
        try:
            self.governor.admit()
        except RateLimitProtection as exc:
            report_upstream_error(tag, exc)
            raise

        log.debug("%s: POST %s variables=%s", tag, self.url, variables)
        try:
            r = requests.post(
                self.url,
                json={"query": query, "variables": variables},
                headers=self.headers(),
                timeout=(config.CONNECT_TIMEOUT, config.READ_TIMEOUT),
            )
        except requests.RequestException as exc:
            error = NetworkError(str(exc))
            report_upstream_error(tag, error)
            raise error from exc

        self.governor.update(r.headers or {})

        if r.status_code == 401:
            report_upstream_error(tag, NetworkError("unauthorized", status=401))
            raise MissingToken()
        if r.status_code == 429:
            error = RateLimitExceeded()
            report_upstream_error(tag, error)
            raise error
        if not 200 <= r.status_code < 300:
            error = NetworkError(f"{tag} failed: {r.status_code}", status=r.status_code)
            report_upstream_error(tag, error)
            raise error

        try:
            return GraphQLResponse.from_json(r.json())
        except ValueError as exc:
            error = NetworkError(f"{tag}: could not decode response body: {exc}")
            report_upstream_error(tag, error)
            raise error from exc

    def fetch(self, query: str, variables: Dict[str, Any], tag: str = "graphql") -> Dict[str, Any]:
        return self.execute(query, variables, tag).unwrap()
