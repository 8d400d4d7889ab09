"""
fontseca.dev Backend — Article Filter Parsing
===============================================

What:  Builds a normalized ArticleFilter from the query string of listing
       requests (archive, hidden articles, drafts).
How:   Each parameter is normalized independently and never rejected: bad
       values fall back to their defaults so listings always render.

Query Parameters:
    search  → ASCII word tokens joined by single spaces ("_" counts as a space)
    topic   → word tokens joined by "-"
    tag     → word tokens joined by "-"
    page    → positive integer, default 1
    rpp     → positive integer (results per page), default 20
    from    → "YYYY/MM" publication month; anything else leaves it unset
"""

import logging
import re
from typing import Mapping, Optional

from starlette.requests import Request

from fontseca.schemas.archive import ArticleFilter, Publication

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_RESULTS_PER_PAGE = 20

_WORDS = re.compile(r"\w+", re.ASCII)
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _words(value: str, separator: str) -> str:
    return separator.join(_WORDS.findall(value))


def _parse_int(value: str) -> Optional[int]:
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


def _positive(query: Mapping[str, str], key: str, default: int) -> int:
    raw = query.get(key, "")
    if not raw:
        return default

    value = _parse_int(raw)
    if value is None:
        logger.warning("Ignoring unparsable %r query parameter: %r", key, raw)
        return default
    return value if value > 0 else default


def _publication(raw: str) -> Optional[Publication]:
    parts = raw.split("/")
    if len(parts) != 2:
        return None

    year = _parse_int(parts[0])
    month = _parse_int(parts[1])
    if year is None or month is None:
        logger.warning("Ignoring unparsable 'from' query parameter: %r", raw)
        return None

    if not 1 <= month <= 12:
        return None

    return Publication(year=year, month=month)


def get_article_filter(query: Mapping[str, str]) -> ArticleFilter:
    """
    Derive an ArticleFilter from query parameters. Never raises.

    Examples:
        search=">> = 20 www? xxx! yyy... zzz_zzz"  → search "20 www xxx yyy zzz zzz"
        topic="My Topic!"                          → topic "My-Topic"
        page=-1, rpp=abc                           → page 1, results_per_page 20
        from=2024/13                               → publication None
    """
    search = query.get("search", "").strip()
    if search:
        search = _words(search.replace("_", " "), " ")

    topic = _words(query.get("topic", "").strip(), "-")
    tag = _words(query.get("tag", "").strip(), "-")

    publication = None
    raw_from = query.get("from", "")
    if raw_from:
        publication = _publication(raw_from)

    return ArticleFilter(
        search=search,
        topic=topic,
        tag=tag,
        publication=publication,
        page=_positive(query, "page", DEFAULT_PAGE),
        results_per_page=_positive(query, "rpp", DEFAULT_RESULTS_PER_PAGE),
    )


async def article_filter(request: Request) -> ArticleFilter:
    """FastAPI dependency: the ArticleFilter of the current request."""
    return get_article_filter(request.query_params)
