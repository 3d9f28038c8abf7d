"""Filter configuration records and their loaders (YAML file, environment)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from headereval.config.settings import Settings
from headereval.core.errors import ConfigurationError
from headereval.core.match_kind import normalize_match_kind, parse_match_kind
from headereval.util.logger import logger


class EvaluatorConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    request_header_field: str = Field(default="", alias="requestHeaderField")
    response_header_field: str = Field(default="", alias="responseHeaderField")
    kind: str = ""

    def is_valid(self) -> bool:
        """Normalize ``kind`` in place, then report whether it names a supported match kind."""

        self.kind = normalize_match_kind(self.kind)
        return parse_match_kind(self.kind) is not None


class FilterConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    output_header_name: str = Field(default="", alias="OutputHeaderName")
    simple_eval: EvaluatorConfig = Field(default_factory=EvaluatorConfig, alias="SimpleEval")


def create_config() -> FilterConfig:
    return FilterConfig()


def parse_filter_config(raw: Any, *, name: str = "header-evaluator") -> FilterConfig:
    if raw is None:
        return create_config()
    if not isinstance(raw, dict):
        raise ConfigurationError(name, raw, f"filter config '{name}' must be a mapping, got {type(raw).__name__}")
    try:
        return FilterConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(name, raw, f"filter config '{name}' is malformed: {exc}") from exc


def load_filter_configs(path: str | Path) -> list[tuple[str, FilterConfig]]:
    """Read filter records from YAML.

    The file holds either one record at its root or a ``middlewares`` mapping
    of name -> record; mapping order is chain order.
    """

    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError("filters_config_path", str(path), f"cannot read filter config {path}: {exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError("filters_config_path", str(path), f"invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        logger.warning("filter config file is empty path=%s", config_path)
        return []
    if not isinstance(loaded, dict):
        raise ConfigurationError("filters_config_path", str(path), f"filter config {path} must be a mapping")

    if "middlewares" not in loaded:
        return [("header-evaluator", parse_filter_config(loaded))]

    middlewares = loaded.get("middlewares") or {}
    if not isinstance(middlewares, dict):
        raise ConfigurationError("middlewares", middlewares, f"'middlewares' in {path} must be a mapping")
    configs = [(str(name), parse_filter_config(raw, name=str(name))) for name, raw in middlewares.items()]
    logger.info("loaded %d filter config(s) from %s", len(configs), config_path)
    return configs


def filter_config_from_settings(current: Settings) -> FilterConfig | None:
    """Build the environment-defined filter; None when none of its fields are set."""

    values = (
        current.output_header_name,
        current.request_header_field,
        current.response_header_field,
        current.match_kind,
    )
    if not any(value.strip() for value in values):
        return None
    return FilterConfig(
        output_header_name=current.output_header_name,
        simple_eval=EvaluatorConfig(
            request_header_field=current.request_header_field,
            response_header_field=current.response_header_field,
            kind=current.match_kind,
        ),
    )


def load_configured_filters(current: Settings) -> list[tuple[str, FilterConfig]]:
    filters: list[tuple[str, FilterConfig]] = []
    if current.filters_config_path.strip():
        filters.extend(load_filter_configs(current.filters_config_path.strip()))
    env_config = filter_config_from_settings(current)
    if env_config is not None:
        filters.append((current.filter_name, env_config))
    return filters
