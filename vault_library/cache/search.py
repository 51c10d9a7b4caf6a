"""Full-text search over cached vault content.

Serves read-heavy queries from memory so that searching thousands of
documents costs no REST round-trips.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from ..errors import ValidationError
from ..utils.paths import folder_prefix
from .models import CacheEntry
from .models import MatchContext
from .models import SearchHit
from .models import SearchResults

logger = logging.getLogger(__name__)


def compile_query(query: str, *, use_regex: bool = False, case_sensitive: bool = False) -> re.Pattern[str]:
    """Compile a search query.

    Raises:
        ValidationError: If the query is empty or not a valid regex
    """
    if not query:
        raise ValidationError("Search query must not be empty")
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(query if use_regex else re.escape(query), flags)
    except re.error as e:
        raise ValidationError(f"Invalid regex pattern: {query}: {e}") from e


def find_matches(content: str, pattern: re.Pattern[str], context_length: int = 100) -> list[MatchContext]:
    """Find every match of ``pattern`` with ``context_length`` characters around it."""
    matches = []
    for match in pattern.finditer(content):
        start = max(0, match.start() - context_length)
        end = min(len(content), match.end() + context_length)
        matches.append(
            MatchContext(
                context=content[start:end],
                match_text=match.group(0),
                position=match.start() - start,
            )
        )
    return matches


def search_entries(
    entries: Mapping[str, CacheEntry],
    query: str,
    *,
    use_regex: bool = False,
    case_sensitive: bool = False,
    context_length: int = 100,
    path_prefix: str | None = None,
    modified_since: int | None = None,
    modified_until: int | None = None,
    max_matches_per_file: int | None = None,
    page: int = 1,
    page_size: int | None = None,
) -> SearchResults:
    """Search cached documents.

    Args:
        entries: Cached documents keyed by path
        query: Literal text, or a regex when use_regex is set
        use_regex: Treat query as a regular expression
        case_sensitive: Match case exactly
        context_length: Characters of context on each side of a match
        path_prefix: Only search documents in this folder (case-insensitive)
        modified_since: Only documents with mtime >= this (epoch ms)
        modified_until: Only documents with mtime <= this (epoch ms)
        max_matches_per_file: Cap on snippets returned per document
        page: 1-based page of hits to return
        page_size: Hits per page; None returns all hits

    Returns:
        Hits ordered by most recently modified first

    Raises:
        ValidationError: If the query is empty, an invalid regex, or the
            paging values are not positive
    """
    if page < 1 or (page_size is not None and page_size < 1):
        raise ValidationError("page and page_size must be positive integers")
    pattern = compile_query(query, use_regex=use_regex, case_sensitive=case_sensitive)
    prefix = folder_prefix(path_prefix).lower()

    hits: list[SearchHit] = []
    total_matches = 0
    searched = 0
    for path, entry in entries.items():
        if prefix and not path.lower().startswith(prefix):
            continue
        if modified_since is not None and entry.mtime < modified_since:
            continue
        if modified_until is not None and entry.mtime > modified_until:
            continue

        searched += 1
        matches = find_matches(entry.content, pattern, context_length)
        if not matches:
            continue
        match_count = len(matches)
        total_matches += match_count
        if max_matches_per_file is not None:
            matches = matches[:max_matches_per_file]
        hits.append(SearchHit(path=path, mtime=entry.mtime, match_count=match_count, matches=matches))

    hits.sort(key=lambda h: (-h.mtime, h.path))
    page_hits = hits if page_size is None else hits[(page - 1) * page_size : page * page_size]
    logger.debug(f"Cache search for '{query}' matched {len(hits)} of {searched} documents")
    return SearchResults(
        query=query,
        total_files=len(hits),
        total_matches=total_matches,
        searched_files=searched,
        page=page,
        page_size=page_size,
        results=page_hits,
    )
