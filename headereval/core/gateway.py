"""FastAPI app entry: the configured filters chained in front of a health endpoint."""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware import Middleware

from headereval.config.filter_config import FilterConfig, load_configured_filters
from headereval.config.settings import settings
from headereval.filters.header_evaluator import HeaderEvaluatorMiddleware, validate_filter_config
from headereval.util.logger import logger


def _build_filter_middleware(filters: list[tuple[str, FilterConfig]]) -> list[Middleware]:
    # Starlette builds middleware lazily; validate now so a bad filter stops startup.
    for name, config in filters:
        validate_filter_config(config)
        logger.debug("filter validated name=%s", name)
    return [Middleware(HeaderEvaluatorMiddleware, config=config, name=name) for name, config in filters]


def create_app(filters: list[tuple[str, FilterConfig]] | None = None) -> FastAPI:
    """Build the app with ``filters`` chained in order, the first one outermost."""

    chain = load_configured_filters(settings) if filters is None else list(filters)
    application = FastAPI(title=settings.app_name, middleware=_build_filter_middleware(chain))

    @application.get("/health")
    def health() -> dict:
        logger.info("health check")
        return {"status": "ok"}

    logger.info("gateway ready filters=%s", [name for name, _ in chain])
    return application


app = create_app()
