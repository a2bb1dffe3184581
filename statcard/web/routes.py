from __future__ import annotations
import datetime
import logging
from typing import Callable, Tuple

from dateutil import relativedelta
from flask import Blueprint, Response, current_app, jsonify, request

from .. import __version__, config
from ..cards import ErrorCard, LangsCard, StatsCard, parse_hidden
from ..errors import (
    CardError,
    GitHubApiError,
    InvalidUsername,
    MissingToken,
    QueryError,
    RateLimitExceeded,
    RateLimitProtection,
    UnknownTheme,
    UserNotFound,
)
from ..github import validate_username
from . import query

log = logging.getLogger(__name__)

bp = Blueprint("api", __name__)

SVG_MIMETYPE = "image/svg+xml"


def services():
    return current_app.extensions["statcard"]


# ------------------ Responses ------------------
def svg_response(svg: str, max_age: int) -> Response:
    resp = Response(svg, status=200, mimetype=SVG_MIMETYPE)
    resp.headers["Cache-Control"] = f"public, max-age={max_age}"
    return resp


def render_or_error_card(render: Callable[[], str]) -> str:
    try:
        return render()
    except CardError as e:
        log.warning("card could not be framed: %s", e)
        return ErrorCard(str(e)).render()


def error_status(error: Exception) -> int:
    if isinstance(error, (InvalidUsername, QueryError, UnknownTheme)):
        return 400
    if isinstance(error, UserNotFound):
        return 404
    if isinstance(error, (RateLimitExceeded, RateLimitProtection)):
        return 429
    if isinstance(error, MissingToken):
        return 503
    return 500


def error_response(error: Exception) -> Tuple[Response, int]:
    status = error_status(error)
    body = {"error": str(error)}
    retry_after = None
    if isinstance(error, RateLimitProtection):
        retry_after = services().governor.retry_after_seconds(error.reset)
        body["retry_after_seconds"] = retry_after
    resp = jsonify(body)
    resp.headers["Cache-Control"] = "no-store"
    if retry_after is not None:
        resp.headers["Retry-After"] = str(retry_after)
    return resp, status


@bp.errorhandler(GitHubApiError)
@bp.errorhandler(QueryError)
@bp.errorhandler(UnknownTheme)
def handle_error(error: Exception):
    if error_status(error) >= 500:
        log.error("request failed: %s", error)
    return error_response(error)


# ------------------ Cards ------------------
@bp.route("/stats-card", methods=["GET"])
def stats_card():
    username = validate_username(request.args.get("username"))
    settings = query.card_settings(request.args)
    hidden = parse_hidden(request.args.get("hide"))

    svc = services()
    stats = svc.cache.get_or_insert_user_stats(username, lambda: svc.api.fetch_user_stats(username))
    card = StatsCard.from_stats(stats, settings, hidden, username=username)
    svg = render_or_error_card(card.render)
    return svg_response(svg, int(svc.cache.config.user_stats_ttl))


@bp.route("/langs-card", methods=["GET"])
def langs_card():
    username = validate_username(request.args.get("username"))
    settings = query.card_settings(request.args)
    layout = query.parse_layout(request.args.get("layout"))
    size_weight = query.parse_weight("size_weight", request.args.get("size_weight"))
    count_weight = query.parse_weight("count_weight", request.args.get("count_weight"))
    max_languages = query.parse_max_languages(request.args.get("max_languages"))
    excluded = query.parse_csv(request.args.get("exclude_repo"))

    svc = services()
    stats = svc.cache.get_or_insert_user_languages(
        username, excluded, lambda: svc.api.fetch_user_languages(username, excluded)
    )
    card = LangsCard(
        settings=settings,
        stats=stats,
        layout=layout,
        size_weight=size_weight,
        count_weight=count_weight,
        max_languages=max_languages,
    )
    svg = render_or_error_card(card.render)
    return svg_response(svg, int(svc.cache.config.user_languages_ttl))


# ------------------ Health ------------------
def uptime(started: datetime.datetime) -> str:
    diff = relativedelta.relativedelta(datetime.datetime.now(), started)
    return (
        f"{diff.days} day{'s' if diff.days != 1 else ''}, "
        f"{diff.hours} hour{'s' if diff.hours != 1 else ''}, "
        f"{diff.minutes} minute{'s' if diff.minutes != 1 else ''}"
    )


@bp.route("/health", methods=["GET"])
def health():
    svc = services()
    resp = jsonify({
        "status": "ok",
        "version": __version__,
        "uptime": uptime(svc.started),
        "token_configured": config.github_token() is not None,
        "cache": svc.cache.stats().as_dict(),
        "rate_limit": svc.governor.snapshot().as_dict(),
    })
    resp.headers["Cache-Control"] = "no-store"
    return resp
