"""Supported header match kinds."""

from __future__ import annotations

from enum import Enum


class MatchKind(str, Enum):
    SUFFIX = "suffix"
    PREFIX = "prefix"
    CONTAINS = "contains"
    CONTAINS_IGNORECASE = "contains_ignorecase"


VALID_MATCH_KINDS: tuple[str, ...] = tuple(kind.value for kind in MatchKind)


def normalize_match_kind(raw: str | None) -> str:
    return (raw or "").lower()


def parse_match_kind(raw: str | MatchKind | None) -> MatchKind | None:
    """Return the canonical MatchKind for ``raw`` or None when it names no known kind."""

    if isinstance(raw, MatchKind):
        return raw
    try:
        return MatchKind(normalize_match_kind(raw))
    except ValueError:
        return None
