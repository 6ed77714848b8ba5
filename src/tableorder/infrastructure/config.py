from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

from sqlalchemy.engine import URL, make_url

from tableorder.domain.kitchen.cook_time import CookTimeGenerator, CookTimeRangeError


DEFAULT_CORS_ORIGIN = "https://your-prod-domain.com"


class ConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read from the environment once at startup."""

    http_host: str = "127.0.0.1"
    http_port: int = 8080
    app_env: str = "dev"
    cors_allow_origins: tuple[str, ...] = (DEFAULT_CORS_ORIGIN,)
    pg_host: str = "localhost"
    pg_port: int = 5432
    pg_user: str = "postgres"
    pg_password: str = ""
    pg_dbname: str = "sukab_restaurant"
    database_url: str | None = None
    pool_max_size: int = 10
    pool_timeout_seconds: float = 5.0
    connect_timeout_seconds: int = 2
    statement_timeout_ms: int = 5000
    cook_time_min: int = 5
    cook_time_max: int = 15
    log_level: str = "INFO"
    otel_service_name: str = "tableorder"
    otel_exporter_endpoint: str | None = None

    def __post_init__(self) -> None:
        if self.cook_time_min < 0:
            raise ConfigurationError("COOK_TIME_MIN must be >= 0")
        if self.cook_time_min > self.cook_time_max:
            raise ConfigurationError(
                f"COOK_TIME_MIN ({self.cook_time_min}) must not exceed "
                f"COOK_TIME_MAX ({self.cook_time_max})"
            )
        if self.pool_max_size < 1:
            raise ConfigurationError("DB_POOL_MAX_SIZE must be >= 1")
        if self.pool_timeout_seconds <= 0:
            raise ConfigurationError("DB_POOL_TIMEOUT_SECONDS must be > 0")
        if self.connect_timeout_seconds < 1:
            raise ConfigurationError("DB_CONNECT_TIMEOUT_SECONDS must be >= 1")
        if self.statement_timeout_ms < 0:
            raise ConfigurationError("DB_STATEMENT_TIMEOUT_MS must be >= 0")

    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            "postgresql+psycopg",
            username=self.pg_user,
            password=self.pg_password or None,
            host=self.pg_host,
            port=self.pg_port,
            database=self.pg_dbname,
        )


def _int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw_value = environ.get(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw_value!r}") from exc


def _float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw_value = environ.get(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw_value!r}") from exc


def _origins(environ: Mapping[str, str]) -> tuple[str, ...]:
    raw_value = environ.get("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGIN)
    return tuple(origin.strip() for origin in raw_value.split(",") if origin.strip())


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        http_host=env.get("HTTP_HOST") or env.get("APP_HOST", "127.0.0.1"),
        http_port=_int(env, "HTTP_PORT", _int(env, "APP_PORT", 8080)),
        app_env=env.get("APP_ENV", "dev").lower(),
        cors_allow_origins=_origins(env),
        pg_host=env.get("PG_HOST", "localhost"),
        pg_port=_int(env, "PG_PORT", 5432),
        pg_user=env.get("PG_USER", "postgres"),
        pg_password=env.get("PG_PWD", ""),
        pg_dbname=env.get("PG_DBNAME", "sukab_restaurant"),
        database_url=env.get("DATABASE_URL") or None,
        pool_max_size=_int(env, "DB_POOL_MAX_SIZE", 10),
        pool_timeout_seconds=_float(env, "DB_POOL_TIMEOUT_SECONDS", 5.0),
        connect_timeout_seconds=_int(env, "DB_CONNECT_TIMEOUT_SECONDS", 2),
        statement_timeout_ms=_int(env, "DB_STATEMENT_TIMEOUT_MS", 5000),
        cook_time_min=_int(env, "COOK_TIME_MIN", 5),
        cook_time_max=_int(env, "COOK_TIME_MAX", 15),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        otel_service_name=env.get("OTEL_SERVICE_NAME", "tableorder"),
        otel_exporter_endpoint=env.get("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_cook_time_generator() -> CookTimeGenerator:
    settings = get_settings()
    try:
        return CookTimeGenerator(settings.cook_time_min, settings.cook_time_max)
    except CookTimeRangeError as exc:
        raise ConfigurationError(str(exc)) from exc
