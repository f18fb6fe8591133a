"""Slug Normalizer — pure text → URL-safe token transform and slug policy helpers.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - generate_slug is deterministic and idempotent
    - Output alphabet is [a-z0-9-], never starts/ends with '-', never contains '--'
    - "" means "no slug": callers address the entity by primary identifier only

Design Decisions:
    - Suffix numbering starts at 1 on the second candidate: "echo", "echo-1", "echo-2"
    - Regeneration policy lives here so every writer (routes, backfill, import) agrees
"""

import re
from itertools import count
from typing import Iterator

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def generate_slug(text: str | None) -> str:
    """Normalize text into a slug. Empty or all-punctuation input yields ""."""
    if not text:
        return ""
    slug = text.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")


def slug_candidates(base_slug: str) -> Iterator[str]:
    """Yield base_slug, then base_slug-1, base_slug-2, ... forever."""
    yield base_slug
    for n in count(1):
        yield f"{base_slug}-{n}"


def stored_slug(slug: str | None) -> str | None:
    """Map the empty-slug signal to the persisted form (None)."""
    return slug or None


def needs_new_slug(
    current_slug: str | None, current_source: str, new_source: str | None,
) -> bool:
    """Regenerate when the source field changes, or when no slug was ever assigned."""
    if not current_slug:
        return True
    return new_source is not None and new_source != current_source
