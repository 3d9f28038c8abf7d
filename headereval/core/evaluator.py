"""String predicates applied to a response header value and a request header value."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from headereval.core.errors import ConfigurationError
from headereval.core.match_kind import VALID_MATCH_KINDS, MatchKind, parse_match_kind
from headereval.util.logger import logger

if TYPE_CHECKING:
    from headereval.config.filter_config import EvaluatorConfig


TRUE = "true"
FALSE = "false"

_PREDICATES: dict[MatchKind, Callable[[str, str], bool]] = {
    MatchKind.SUFFIX: lambda src, key: src.endswith(key),
    MatchKind.PREFIX: lambda src, key: src.startswith(key),
    MatchKind.CONTAINS: lambda src, key: key in src,
    MatchKind.CONTAINS_IGNORECASE: lambda src, key: key.lower() in src.lower(),
}


def match(kind: MatchKind | str, src: str, key: str) -> bool:
    """Apply the predicate named by ``kind``; unknown kinds never match."""

    try:
        predicate = _PREDICATES[MatchKind(kind)]
    except ValueError:
        logger.debug("evaluator unknown match kind=%r result=false", kind)
        return False
    return predicate(src, key)


def format_match_result(matched: bool) -> str:
    return TRUE if matched else FALSE


def invalid_kind_message(kind: str) -> str:
    valid = ", ".join(f"'{item}'" for item in VALID_MATCH_KINDS)
    return f"Invalid/Empty SimpleEval.kind: '{kind}', valid values are {valid}"


@dataclass(frozen=True, slots=True)
class SimpleEvaluator:
    request_header_field: str
    response_header_field: str
    kind: MatchKind

    @classmethod
    def from_config(cls, config: EvaluatorConfig) -> SimpleEvaluator:
        kind = parse_match_kind(config.kind)
        if kind is None:
            raise ConfigurationError("SimpleEval.kind", config.kind, invalid_kind_message(config.kind))
        return cls(
            request_header_field=config.request_header_field,
            response_header_field=config.response_header_field,
            kind=kind,
        )

    def matches(self, src: str, key: str) -> bool:
        return match(self.kind, src, key)

    def evaluate(self, src: str, key: str) -> str:
        return format_match_result(self.matches(src, key))
