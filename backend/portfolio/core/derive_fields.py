"""Derived Post Fields — slug, read time, excerpt and tag normalization.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - derive_slug output matches ^[a-z0-9]+(-[a-z0-9]+)*$ or is empty
    - derive_read_time(content) == max(1, ceil(words / WORDS_PER_MINUTE))
    - Callers re-run the derivation whenever the source field changes,
      not only on creation

Design Decisions:
    - Regex pipeline mirrors the stored slug format exactly; the unique index
      on blog_posts.slug is the final arbiter of collisions
"""

import math
import re

from portfolio.core.domain_types import (
    EXCERPT_ELLIPSIS, EXCERPT_SOURCE_CHARS, WORDS_PER_MINUTE,
)

_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-+")


def derive_slug(title: str) -> str:
    """Lowercase, strip punctuation, hyphenate whitespace, collapse hyphen runs."""
    slug = title.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def count_words(content: str) -> int:
    return len(content.split())


def derive_read_time(content: str) -> int:
    """Minutes to read at WORDS_PER_MINUTE, rounded up, never below 1."""
    return max(1, math.ceil(count_words(content) / WORDS_PER_MINUTE))


def derive_excerpt(content: str) -> str:
    """Default excerpt: leading characters of the content plus an ellipsis."""
    return content[:EXCERPT_SOURCE_CHARS] + EXCERPT_ELLIPSIS


def normalize_tags(tags: list[str]) -> list[str]:
    """Trim and lowercase; drop empties and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)
