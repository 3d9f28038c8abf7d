"""Middleware that compares a request header with a response header and reports the result."""

from __future__ import annotations

import re

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from headereval.config.filter_config import FilterConfig
from headereval.core.errors import ConfigurationError
from headereval.core.evaluator import SimpleEvaluator, invalid_kind_message
from headereval.util.logger import get_logger

logger = get_logger("filters.header_evaluator")

DEFAULT_FILTER_NAME = "header-evaluator"

# RFC 7230 token
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

RawHeaders = list[tuple[bytes, bytes]]


def _check_header_name(field: str, value: str) -> None:
    if not value:
        raise ConfigurationError(field, value)
    if not _HEADER_NAME_RE.fullmatch(value):
        raise ConfigurationError(field, value, f"Invalid header name for {field}: '{value}'")


def validate_filter_config(config: FilterConfig) -> FilterConfig:
    """Check required fields and canonicalize the match kind.

    Raises ConfigurationError naming the first offending field.
    """

    _check_header_name("OutputHeaderName", config.output_header_name)
    evaluator = config.simple_eval
    _check_header_name("SimpleEval.requestHeaderField", evaluator.request_header_field)
    _check_header_name("SimpleEval.responseHeaderField", evaluator.response_header_field)
    raw_kind = evaluator.kind
    if not raw_kind or not evaluator.is_valid():
        raise ConfigurationError("SimpleEval.kind", raw_kind, invalid_kind_message(raw_kind))
    return config


def _first_header_value(raw_headers: RawHeaders, name: bytes) -> str:
    # ASGI apps are not obliged to lowercase names, so compare folded.
    for key, value in raw_headers:
        if key.lower() == name:
            return value.decode("latin-1")
    return ""


def _replace_header(raw_headers: RawHeaders, name: bytes, value: str) -> None:
    # In place: Response.headers wraps this same list.
    raw_headers[:] = [(key, item) for key, item in raw_headers if key.lower() != name]
    raw_headers.append((name, value.encode("latin-1")))


class HeaderEvaluatorMiddleware(BaseHTTPMiddleware):
    """
    Reads ``requestHeaderField`` from the request, lets the wrapped app respond,
    then writes the match of ``responseHeaderField`` against it into ``OutputHeaderName``.
    """

    def __init__(self, app: ASGIApp, config: FilterConfig, name: str = DEFAULT_FILTER_NAME) -> None:
        self.config = validate_filter_config(config)
        super().__init__(app)
        self.name = name
        self.evaluator = SimpleEvaluator.from_config(self.config.simple_eval)
        self.output_header_name = self.config.output_header_name
        self._request_key = self.evaluator.request_header_field.lower().encode("latin-1")
        self._response_key = self.evaluator.response_header_field.lower().encode("latin-1")
        self._output_key = self.output_header_name.lower().encode("latin-1")
        logger.info(
            "header evaluator ready name=%s request_field=%s response_field=%s kind=%s output=%s",
            self.name,
            self.evaluator.request_header_field,
            self.evaluator.response_header_field,
            self.evaluator.kind.value,
            self.output_header_name,
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        key = _first_header_value(request.headers.raw, self._request_key)
        response = await call_next(request)
        if not isinstance(response.raw_headers, list):
            response.raw_headers = list(response.raw_headers)

        src = _first_header_value(response.raw_headers, self._response_key)
        if not src:
            logger.debug(
                "header evaluator skip name=%s path=%s reason=empty_response_header field=%s",
                self.name,
                request.url.path,
                self.evaluator.response_header_field,
            )
            return response

        result = self.evaluator.evaluate(src, key)
        _replace_header(response.raw_headers, self._output_key, result)
        logger.debug(
            "header evaluator name=%s path=%s kind=%s %s=%s",
            self.name,
            request.url.path,
            self.evaluator.kind.value,
            self.output_header_name,
            result,
        )
        return response
