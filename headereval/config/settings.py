"""Runtime settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HEADEREVAL_", extra="ignore")

    app_name: str = "HeaderEval"
    env: str = "dev"
    log_level: str = "info"
    # empty disables the log file
    log_file: str = "logs/headereval.log"
    host: str = "127.0.0.1"
    port: int = 18090

    # A single filter can be defined straight from the environment.
    filter_name: str = "header-evaluator"
    output_header_name: str = ""
    request_header_field: str = ""
    response_header_field: str = ""
    match_kind: str = ""
    # YAML file with one record or a `middlewares:` mapping
    filters_config_path: str = ""


settings = Settings()
